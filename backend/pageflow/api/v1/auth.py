from flask import request, jsonify, g
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required
)
from pageflow.models.user import User
from pageflow.utils.decorators import actor_required
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "ValidationError", "message": "Invalid request body"}), 400

    username = data.get("username")
    password = data.get("password")

    if not username or not password:
        return jsonify({"error": "ValidationError", "message": "Username and password required"}), 400

    user = User.query.filter_by(username=username).first()

    if not user or not user.check_password(password):
        return jsonify({"error": "AuthenticationError", "message": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "AuthorizationError", "message": "User account disabled"}), 403

    try:
        actor = user.to_actor()
    except ValueError:
        return jsonify({"error": "AuthorizationError", "message": "User has no valid role"}), 403

    claims = {"role": actor.role.value, "username": user.username}

    access_token = create_access_token(identity=actor.actor_id, additional_claims=claims)
    refresh_token = create_refresh_token(identity=actor.actor_id, additional_claims=claims)

    return jsonify({
        "access_token": access_token,
        "refresh_token": refresh_token,
        "user": {"id": actor.actor_id, "username": user.username, "role": actor.role.value}
    }), 200


@v1_bp.route("/auth/me", methods=["GET"])
@jwt_required()
@actor_required
def me():
    return jsonify({
        "id": g.actor.actor_id,
        "role": g.actor.role.value
    }), 200
