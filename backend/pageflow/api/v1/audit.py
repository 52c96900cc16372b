from flask import request, jsonify
from flask_jwt_extended import jwt_required
from pageflow.domain.roles import Capability
from pageflow.normalizers.audit import normalize_audit_entry
from pageflow.storage import get_storage
from pageflow.utils.decorators import actor_required, capability_required
from . import v1_bp


@v1_bp.route("/audit", methods=["GET"])
@jwt_required()
@actor_required
@capability_required(Capability.READ_AUDIT)
def list_audit_logs():
    limit = min(request.args.get("limit", 50, type=int), 200)

    entries = get_storage().list_audit_entries(
        entity_id=request.args.get("entity_id"),
        action=request.args.get("action"),
        limit=max(limit, 1),
    )

    return jsonify({
        "data": [normalize_audit_entry(entry) for entry in entries],
        "meta": {
            "limit": limit,
            "count": len(entries),
        }
    }), 200
