# pageflow/normalizers/audit.py
from __future__ import annotations

from typing import Dict, Any
from pageflow.domain.records import AuditEntry


def normalize_audit_entry(entry: AuditEntry) -> Dict[str, Any]:
    """
    Normalizes an AuditEntry into API-safe JSON.

    Notes:
    - entity_id is always serialized as string for consistency
    - payload is assumed to be JSON-serializable
    """

    if not entry:
        raise ValueError("AuditEntry cannot be None")

    return {
        "id": entry.id,
        "actor_id": entry.actor_id,
        "action": entry.action,
        "entity_type": entry.entity_type,
        "entity_id": str(entry.entity_id) if entry.entity_id is not None else None,
        "payload": entry.payload or {},
        "created_at": entry.created_at.isoformat(),
    }
