from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity
from pageflow.domain.roles import Actor, Role, assert_capability


def actor_required(fn):
    """Turn the verified JWT into an Actor on ``g.actor`` for the core."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            g.actor = Actor(actor_id=get_jwt_identity(), role=Role(get_jwt().get("role")))
        except ValueError:
            return jsonify({
                "error": "AuthorizationError",
                "message": "Token carries no valid role"
            }), 403

        return fn(*args, **kwargs)
    return wrapper

def capability_required(capability):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            assert_capability(g.actor, capability)
            return fn(*args, **kwargs)
        return wrapper
    return decorator
