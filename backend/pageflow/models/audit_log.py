# pageflow/models/audit_log.py
from pageflow.extensions import db
from pageflow.domain.records import AuditEntry
from .base import BaseModel
from sqlalchemy import event


class AuditLog(BaseModel):
    __tablename__ = "audit_logs"

    __table_args__ = (
        db.Index("ix_audit_cursor", "created_at", "id"),
        db.Index("ix_audit_actor_action", "actor_id", "action"),
    )

    actor_id = db.Column(db.String(36), nullable=True, index=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    entity_type = db.Column(db.String(50), nullable=False, index=True)
    entity_id = db.Column(db.String(36), nullable=True, index=True)

    payload = db.Column(db.JSON, nullable=False, default=dict)

    @classmethod
    def from_entry(cls, entry: AuditEntry) -> "AuditLog":
        log = cls()
        log.id = entry.id
        log.actor_id = entry.actor_id
        log.action = entry.action
        log.entity_type = entry.entity_type
        log.entity_id = entry.entity_id
        log.payload = dict(entry.payload)
        log.created_at = entry.created_at
        return log

    def to_entry(self) -> AuditEntry:
        return AuditEntry(
            id=self.id,
            actor_id=self.actor_id,
            action=self.action,
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            created_at=self.created_at,
            payload=self.payload or {},
        )

@event.listens_for(AuditLog, 'before_update')
@event.listens_for(AuditLog, 'before_delete')
def prevent_audit_mutation(mapper, connection, target):
    raise RuntimeError("Audit logs are immutable")
