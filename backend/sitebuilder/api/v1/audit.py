from flask import g, request, jsonify
from sitebuilder.models.audit_log import AuditLog
from sitebuilder.normalizers.audit import normalize_audit_log
from sitebuilder.normalizers.pagination import normalize_pagination
from sitebuilder.utils.decorators import owner_required
from sitebuilder.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/audit", methods=["GET"])
@owner_required
def list_audit_logs():
    query = AuditLog.query.filter(AuditLog.owner_id == g.current_user.id)

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(
        query,
        model=AuditLog,
        cursor=request.args.get("cursor"),
        limit=parse_limit(request.args.get("limit")),
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=meta)), 200
