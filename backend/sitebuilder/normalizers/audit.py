# sitebuilder/normalizers/audit.py
from __future__ import annotations

from typing import Dict, Any
from sitebuilder.models.audit_log import AuditLog


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """
    Serialize an audit entry for the owner's activity feed.

    entity_id is always a string; payload is stored as JSON already.
    """
    return {
        "id": log.id,
        "owner_id": log.owner_id,
        "action": log.action,
        "entity_type": log.entity_type,
        "entity_id": str(log.entity_id) if log.entity_id is not None else None,
        "payload": log.payload or {},
        "created_at": log.created_at.isoformat(),
    }
