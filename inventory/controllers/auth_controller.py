from flask import Blueprint, request
from flask_jwt_extended import jwt_required, get_jwt_identity, get_jwt

from inventory.controllers.common import auth_service, json_error, json_ok
from inventory.services.errors import ErrorCode, NotFoundError, ServiceError
from inventory.utils.decorators import role_required

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register", endpoint="auth_register")
@role_required("ADMIN")
def register():
    data = request.get_json(silent=True) or {}
    try:
        user = auth_service().register(
            username=data.get("username"),
            password=data.get("password"),
            role=data.get("role"),
        )
        return json_ok("User registered successfully", user.to_dict(), 201)
    except ServiceError as e:
        return json_error(e)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    try:
        token, user = auth_service().login(data.get("username"), data.get("password"))
        return json_ok("Login successful", {"access_token": token, "user": user.to_dict()})
    except ServiceError as e:
        return json_error(e)


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    user_id = int(get_jwt_identity())
    claims = get_jwt()
    user = auth_service().users.get(user_id)
    if not user:
        return json_error(NotFoundError(ErrorCode.USER_NOT_FOUND, "User not found"))

    data = user.to_dict()
    data["role"] = claims.get("role", data["role"])
    return json_ok("OK", data)
