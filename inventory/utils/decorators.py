from functools import wraps
from flask_jwt_extended import verify_jwt_in_request, get_jwt
from flask import jsonify


def role_required(*roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            claims = get_jwt()
            role = claims.get("role")
            if role not in roles:
                return jsonify({
                    "success": False,
                    "code": "FORBIDDEN",
                    "message": "Forbidden: You do not have permission to access this resource."
                }), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
