"""
Service-level exceptions.

Services raise these; controllers turn them into JSON error responses
with the matching HTTP status.
"""


class ErrorCode:
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    INVALID_DATE_ORDER = "INVALID_DATE_ORDER"
    INVALID_GROUP_BY = "INVALID_GROUP_BY"
    INVALID_ROLE = "INVALID_ROLE"
    INVALID_STATUS = "INVALID_STATUS"

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    USER_NOT_FOUND = "USER_NOT_FOUND"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    BORROW_NOT_FOUND = "BORROW_NOT_FOUND"

    ITEM_NOT_AVAILABLE = "ITEM_NOT_AVAILABLE"
    BORROW_NOT_ONGOING = "BORROW_NOT_ONGOING"
    USERNAME_TAKEN = "USERNAME_TAKEN"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    status_code = 400

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self):
        return {"success": False, "code": self.code, "message": self.message}


class ValidationError(ServiceError):
    status_code = 400


class AuthError(ServiceError):
    status_code = 401


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class InternalError(ServiceError):
    status_code = 500

    def __init__(self, message: str = "Internal error", detail: str | None = None):
        super().__init__(ErrorCode.INTERNAL_ERROR, message)
        # not part of the response body
        self.detail = detail
