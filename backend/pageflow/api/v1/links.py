from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from pageflow.application import links as link_service
from pageflow.normalizers.link import normalize_link
from pageflow.storage import get_storage
from pageflow.utils.decorators import actor_required
from . import v1_bp


@v1_bp.route("/links", methods=["GET"])
@jwt_required()
@actor_required
def list_links():
    links = link_service.get_links(get_storage())
    return jsonify([normalize_link(link) for link in links])

@v1_bp.route("/links/page/<page_id>", methods=["GET"])
@jwt_required()
@actor_required
def list_page_links(page_id):
    links = link_service.get_links_by_page(get_storage(), page_id=page_id)
    return jsonify([normalize_link(link) for link in links])

@v1_bp.route("/links", methods=["POST"])
@jwt_required()
@actor_required
def create_link():
    data = request.get_json(silent=True) or {}
    link = link_service.create_link(get_storage(), actor=g.actor, data=data)
    return jsonify(normalize_link(link)), 201

@v1_bp.route("/links/<link_id>", methods=["DELETE"])
@jwt_required()
@actor_required
def delete_link(link_id):
    if not link_service.delete_link(get_storage(), link_id=link_id, actor=g.actor):
        return jsonify({"error": "NotFound", "message": f"Link {link_id} not found"}), 404

    return jsonify({"success": True}), 200
