from functools import wraps
from flask import request, jsonify, g
from utils.errors import ForbiddenError, ValidationError
from utils.tokens import decode_jwt


def _bearer_token():
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({"success": False, "message": "No token provided"}), 401

        decoded = decode_jwt(token)
        if not decoded or not decoded.get("user_id"):
            return jsonify({"success": False, "message": "Invalid token"}), 401

        g.user = decoded
        return f(*args, **kwargs)

    return decorated_function


def roles_required(*roles):
    """Must sit below @login_required."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if g.user.get("role") not in roles:
                return jsonify({
                    "success": False,
                    "message": f"Access denied. Requires role: {', '.join(roles)}"
                }), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator


teacher_required = roles_required("teacher", "admin")
admin_required = roles_required("admin")


def current_user_id():
    return g.user.get("user_id")


def is_staff():
    return g.user.get("role") in ("teacher", "admin")


def ensure_owner(owner_id, message="You do not have permission to modify this resource"):
    """Teachers may only touch what they own; admins may touch anything."""
    if g.user.get("role") == "admin":
        return
    if owner_id is None or owner_id != current_user_id():
        raise ForbiddenError(message)


def get_json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
