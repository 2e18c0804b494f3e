import logging

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from inventory.models.user import Role, User
from inventory.services.errors import (
    AuthError,
    ConflictError,
    ErrorCode,
    InternalError,
    NotFoundError,
    ValidationError,
)
from inventory.utils.validators import require_fields

logger = logging.getLogger(__name__)


def _check_strings(**fields):
    for name, value in fields.items():
        if not isinstance(value, str):
            raise ValidationError(ErrorCode.INVALID_FIELD, f"Field '{name}' must be a string")


class AuthService:
    def __init__(self, users):
        self.users = users

    def register(self, username: str, password: str, role: str):
        require_fields({"username": username, "password": password, "role": role},
                       "username", "password", "role")
        _check_strings(username=username, password=password, role=role)

        if role not in Role.__members__:
            raise ValidationError(ErrorCode.INVALID_ROLE, "Invalid role. valid roles: ADMIN, TEACHER, STUDENT")

        username = username.strip()
        try:
            if self.users.get_by_username(username):
                raise ConflictError(ErrorCode.USERNAME_TAKEN, "Username already taken")

            user = User(
                username=username,
                password_hash=generate_password_hash(password),
                role=Role[role]
            )
            self.users.create(user)
        except SQLAlchemyError as e:
            self.users.rollback()
            logger.exception("[auth] store failure registering user=%s", username)
            raise InternalError("Error creating user", detail=str(e))

        logger.info("[auth] registered user=%s role=%s", user.username, role)
        return user

    def login(self, username: str, password: str):
        require_fields({"username": username, "password": password}, "username", "password")
        _check_strings(username=username, password=password)

        try:
            user = self.users.get_by_username(username.strip())
        except SQLAlchemyError as e:
            self.users.rollback()
            logger.exception("[auth] store failure during login")
            raise InternalError("Error during login", detail=str(e))

        if not user:
            raise NotFoundError(ErrorCode.USER_NOT_FOUND, "User not found")

        if not check_password_hash(user.password_hash, password):
            logger.warning("[auth] bad password for user=%s", user.username)
            raise AuthError(ErrorCode.INVALID_CREDENTIALS, "Invalid credentials")

        token = create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role.value, "username": user.username}
        )
        return token, user
