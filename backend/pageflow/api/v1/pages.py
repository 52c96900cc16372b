# pageflow/api/v1/pages.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from pageflow.application import pages as page_service
from pageflow.normalizers.page import normalize_page
from pageflow.normalizers.version import normalize_version
from pageflow.storage import get_storage
from pageflow.utils.decorators import actor_required
from . import v1_bp


def _page_response(page, status=200):
    return jsonify(normalize_page(page)), status


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
@actor_required
def list_pages():
    store = get_storage()
    state = request.args.get("state")  # Draft | Live | ... | None

    if state:
        pages = page_service.get_pages_by_state(store, state=state)
    else:
        pages = page_service.get_pages(store)

    include_content = request.args.get("content", "false").lower() == "true"
    return jsonify([normalize_page(p, include_content=include_content) for p in pages])

# must be registered before /pages/<page_id>
@v1_bp.route("/pages/pending-approval", methods=["GET"])
@jwt_required()
@actor_required
def list_pending_approval():
    pages = page_service.get_pending_approval_pages(get_storage())
    return jsonify([normalize_page(p, include_content=False) for p in pages])

@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@actor_required
def get_page(page_id):
    return _page_response(page_service.get_page(get_storage(), page_id=page_id))

@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@actor_required
def create_page():
    data = request.get_json(silent=True) or {}
    page = page_service.create_page(get_storage(), actor=g.actor, data=data)
    return _page_response(page, 201)

@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@actor_required
def update_page(page_id):
    data = request.get_json(silent=True) or {}
    page = page_service.update_page(get_storage(), page_id=page_id, actor=g.actor, data=data)
    return _page_response(page)

@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@actor_required
def delete_page(page_id):
    if not page_service.delete_page(get_storage(), page_id=page_id, actor=g.actor):
        return jsonify({"error": "NotFound", "message": f"Page {page_id} not found"}), 404

    return jsonify({"success": True}), 200


# ------------------------
# Lifecycle
# ------------------------

@v1_bp.route("/pages/<page_id>/state", methods=["PATCH"])
@jwt_required()
@actor_required
def set_page_state(page_id):
    data = request.get_json(silent=True) or {}
    page = page_service.set_page_state(
        get_storage(),
        page_id=page_id,
        state=data.get("state"),
        actor=g.actor,
        reason=data.get("reason"),
    )
    return _page_response(page)

@v1_bp.route("/pages/<page_id>/submit-for-approval", methods=["POST"])
@jwt_required()
@actor_required
def submit_for_approval(page_id):
    page = page_service.submit_for_approval(get_storage(), page_id=page_id, actor=g.actor)
    return _page_response(page)

@v1_bp.route("/pages/<page_id>/approve", methods=["POST"])
@jwt_required()
@actor_required
def approve_page(page_id):
    page = page_service.approve_page(get_storage(), page_id=page_id, actor=g.actor)
    return _page_response(page)

@v1_bp.route("/pages/<page_id>/reject", methods=["POST"])
@jwt_required()
@actor_required
def reject_page(page_id):
    data = request.get_json(silent=True) or {}
    page = page_service.reject_page(
        get_storage(),
        page_id=page_id,
        actor=g.actor,
        reason=data.get("reason"),
    )
    return _page_response(page)


# ------------------------
# Versions
# ------------------------

@v1_bp.route("/pages/<page_id>/versions", methods=["GET"])
@jwt_required()
@actor_required
def list_versions(page_id):
    versions = page_service.list_versions(get_storage(), page_id=page_id)
    return jsonify([normalize_version(v) for v in versions])

@v1_bp.route("/versions/<version_id>", methods=["GET"])
@jwt_required()
@actor_required
def get_version(version_id):
    version = page_service.get_version(get_storage(), version_id=version_id)
    return jsonify(normalize_version(version))

@v1_bp.route("/pages/<page_id>/rollback", methods=["POST"])
@jwt_required()
@actor_required
def rollback_page(page_id):
    data = request.get_json(silent=True) or {}
    version_id = data.get("version_id")
    if not version_id:
        return jsonify({"error": "ValidationError", "message": "version_id is required"}), 400

    page = page_service.rollback_page(
        get_storage(),
        page_id=page_id,
        version_id=version_id,
        actor=g.actor,
    )

    return jsonify({
        "success": True,
        "page": normalize_page(page),
        "message": "Page rolled back and returned to Draft"
    }), 200


# ------------------------
# Dashboard
# ------------------------

@v1_bp.route("/stats", methods=["GET"])
@jwt_required()
@actor_required
def stats():
    return jsonify(page_service.page_stats(get_storage()))
