from flask import current_app, jsonify

from inventory.extensions import db
from inventory.repositories.borrow_repo import BorrowRepo
from inventory.repositories.item_repo import ItemRepo
from inventory.repositories.user_repo import UserRepo
from inventory.services.auth_service import AuthService
from inventory.services.borrow_service import BorrowService
from inventory.services.errors import InternalError, ServiceError
from inventory.services.item_service import ItemService
from inventory.services.report_service import ReportService


def json_ok(message, data=None, code=200):
    return jsonify({"success": True, "message": message, "data": data}), code


def json_error(e: ServiceError):
    if isinstance(e, InternalError):
        current_app.logger.error(f"[api] internal error: {e.detail}")
    else:
        current_app.logger.info(f"[api] rejected {e.code}: {e.message}")
    return jsonify(e.to_dict()), e.status_code


def auth_service():
    return AuthService(UserRepo(db.session))


def item_service():
    return ItemService(ItemRepo(db.session))


def borrow_service():
    return BorrowService(
        UserRepo(db.session),
        ItemRepo(db.session),
        BorrowRepo(db.session),
        borrow_period_days=current_app.config["DEFAULT_BORROW_PERIOD_DAYS"],
    )


def report_service():
    return ReportService(ItemRepo(db.session), BorrowRepo(db.session))
