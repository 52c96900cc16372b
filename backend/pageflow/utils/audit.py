import logging
from typing import Optional

from pageflow.domain.records import AuditEntry
from .clock import new_id, utcnow

logger = logging.getLogger("pageflow.audit")


def log_action(
    store,
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    actor_id: Optional[str] = None,
    payload: dict | None = None
):
    entry = AuditEntry(
        id=new_id(),
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        created_at=utcnow(),
        payload=payload or {},
    )
    store.add_audit_entry(entry)

    logger.info(
        "%s %s=%s actor=%s", action, entity_type, entity_id, actor_id,
        extra={"audit_payload": entry.payload},
    )
    return entry
