import logging

from sqlalchemy.exc import SQLAlchemyError

from inventory.models.item import Item, ItemStatus
from inventory.services.errors import ErrorCode, InternalError, NotFoundError, ValidationError
from inventory.utils.validators import positive_int, require_fields

logger = logging.getLogger(__name__)

ITEM_FIELDS = ("name", "category", "location", "quantity")


def _check_strings(data: dict, *names: str):
    for name in names:
        if not isinstance(data[name], str):
            raise ValidationError(ErrorCode.INVALID_FIELD, f"Field '{name}' must be a string")


class ItemService:
    def __init__(self, items):
        self.items = items

    def _store_failure(self, message: str, e: SQLAlchemyError):
        self.items.rollback()
        logger.exception("[item] store failure: %s", message)
        return InternalError(message, detail=str(e))

    def get_item(self, item_id) -> Item:
        item_id = positive_int(item_id, "id")
        try:
            item = self.items.get(item_id)
        except SQLAlchemyError as e:
            raise self._store_failure("Error fetching item", e)
        if not item:
            raise NotFoundError(ErrorCode.ITEM_NOT_FOUND, "Item not found")
        return item

    def add_item(self, data: dict) -> Item:
        require_fields(data, *ITEM_FIELDS)
        _check_strings(data, "name", "category", "location")
        quantity = positive_int(data["quantity"], "quantity")

        item = Item(
            name=data["name"].strip(),
            category=data["category"].strip(),
            location=data["location"].strip(),
            quantity=quantity,
            status=ItemStatus.AVAILABLE,
        )
        try:
            self.items.create(item)
        except SQLAlchemyError as e:
            raise self._store_failure("Error adding item", e)

        logger.info("[item] created item=%s name=%s", item.id, item.name)
        return item

    def update_item(self, item_id, data: dict) -> Item:
        item = self.get_item(item_id)

        require_fields(data, *ITEM_FIELDS, "status")
        _check_strings(data, "name", "category", "location", "status")
        quantity = positive_int(data["quantity"], "quantity")

        if data["status"] not in ItemStatus.__members__:
            allowed = ", ".join(ItemStatus.__members__)
            raise ValidationError(ErrorCode.INVALID_STATUS, f"Invalid status value. Allowed values are: {allowed}")

        try:
            item.name = data["name"].strip()
            item.category = data["category"].strip()
            item.location = data["location"].strip()
            item.quantity = quantity
            item.status = ItemStatus[data["status"]]
            self.items.save()
        except SQLAlchemyError as e:
            raise self._store_failure("Error updating item", e)

        logger.info("[item] updated item=%s status=%s", item.id, item.status.value)
        return item
