from functools import wraps

from flask import current_app, jsonify, request
from flask_jwt_extended import verify_jwt_in_request

from qr_library.utils.auth import current_role


def role_required(*roles):
    """Admit only tokens whose ``role`` claim is one of ``roles`` (catalog management)."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            role = current_role()
            if role not in roles:
                current_app.logger.warning(f"[auth] role={role!r} denied on {request.method} {request.path}")
                return jsonify({"success": False, "message": "Forbidden"}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
