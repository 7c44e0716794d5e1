from sitebuilder.extensions import db
from sitebuilder.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    owner_id: str,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """Stage an audit entry in the current session; committed with the mutation."""
    log = AuditLog()

    log.owner_id = owner_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
