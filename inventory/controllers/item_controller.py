from flask import Blueprint, request

from inventory.controllers.common import (
    borrow_service,
    item_service,
    json_error,
    json_ok,
    report_service,
)
from inventory.services.errors import ServiceError
from inventory.utils.decorators import role_required

item_bp = Blueprint("inventory", __name__)


# -----------------------------
# Items
# -----------------------------
@item_bp.post("/")
@role_required("ADMIN", "TEACHER")
def add_item():
    data = request.get_json(silent=True) or {}
    try:
        item = item_service().add_item(data)
        return json_ok("Item added successfully", item.to_dict(), 201)
    except ServiceError as e:
        return json_error(e)


@item_bp.put("/<int:item_id>")
@role_required("ADMIN", "TEACHER")
def update_item(item_id: int):
    data = request.get_json(silent=True) or {}
    try:
        item = item_service().update_item(item_id, data)
        return json_ok("Item updated successfully", item.to_dict())
    except ServiceError as e:
        return json_error(e)


@item_bp.get("/<int:item_id>")
@role_required("ADMIN", "TEACHER", "STUDENT")
def get_item(item_id: int):
    try:
        item = item_service().get_item(item_id)
        return json_ok("OK", item.to_dict())
    except ServiceError as e:
        return json_error(e)


# -----------------------------
# Borrow / return
# -----------------------------
@item_bp.post("/borrow")
@role_required("ADMIN", "TEACHER", "STUDENT")
def borrow_item():
    data = request.get_json(silent=True) or {}
    try:
        b = borrow_service().borrow(
            data.get("userId"),
            data.get("itemId"),
            data.get("borrowDate"),
            data.get("returnDate"),
        )
        return json_ok("Item borrowed successfully", b.to_dict(), 201)
    except ServiceError as e:
        return json_error(e)


@item_bp.post("/return")
@role_required("ADMIN", "TEACHER", "STUDENT")
def return_item():
    data = request.get_json(silent=True) or {}
    try:
        b = borrow_service().return_item(data.get("borrowId"), data.get("returnDate"))
        return json_ok("Item returned successfully", b.to_dict())
    except ServiceError as e:
        return json_error(e)


# -----------------------------
# Reports (admin)
# -----------------------------
@item_bp.post("/usage-report")
@role_required("ADMIN")
def usage_report():
    data = request.get_json(silent=True) or {}
    try:
        report = report_service().usage_report(
            data.get("start_date"),
            data.get("end_date"),
            data.get("group_by"),
        )
        return json_ok("Usage report generated", report)
    except ServiceError as e:
        return json_error(e)


@item_bp.post("/borrow-analysis")
@role_required("ADMIN")
def borrow_analysis():
    data = request.get_json(silent=True) or {}
    try:
        report = report_service().borrow_analysis(data.get("start_date"), data.get("end_date"))
        return json_ok("Borrow analysis generated", report)
    except ServiceError as e:
        return json_error(e)
