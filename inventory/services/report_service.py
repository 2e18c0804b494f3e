import logging

from sqlalchemy.exc import SQLAlchemyError

from inventory.models.borrow import BorrowStatus
from inventory.services.errors import ErrorCode, InternalError, ValidationError
from inventory.utils.validators import check_date_order, parse_date, require_fields

logger = logging.getLogger(__name__)

GROUP_BY_FIELDS = ("category", "location")


class ReportService:
    def __init__(self, items, borrows):
        self.items = items
        self.borrows = borrows

    @staticmethod
    def _window(start_date, end_date):
        require_fields({"start_date": start_date, "end_date": end_date}, "start_date", "end_date")
        start = parse_date(start_date, "start_date", strict=True)
        end = parse_date(end_date, "end_date", strict=True)
        check_date_order(start, end, "start_date", "end_date")
        return start, end

    def _item_entry(self, item_id: int, total: int) -> dict:
        item = self.items.get(item_id)
        return {
            "item_id": item_id,
            "name": item.name if item else None,
            "category": (item.category if item else None) or "Uncategorized",
            "total_borrowed": total,
        }

    def _store_failure(self, message: str, e: SQLAlchemyError):
        self.borrows.rollback()
        logger.exception("[report] store failure: %s", message)
        return InternalError(message, detail=str(e))

    def borrow_analysis(self, start_date, end_date) -> dict:
        start, end = self._window(start_date, end_date)

        try:
            returned = self.borrows.count_by_item(start, end, BorrowStatus.RETURNED)
            late = self.borrows.count_by_item(start, end, BorrowStatus.LATE)

            frequently_borrowed = [self._item_entry(item_id, n) for item_id, n in returned]

            # total_borrowed here is every in-window borrow of the item, not only
            # the late ones; total_late_returns carries the late count
            overall = dict(self.borrows.count_by_item(start, end))
            inefficient = []
            for item_id, n_late in late:
                entry = self._item_entry(item_id, overall.get(item_id, n_late))
                entry["total_late_returns"] = n_late
                inefficient.append(entry)
        except SQLAlchemyError as e:
            raise self._store_failure("Error generating borrow analysis", e)

        logger.info(
            "[report] borrow_analysis %s..%s frequent=%d inefficient=%d",
            start, end, len(frequently_borrowed), len(inefficient)
        )
        return {
            "analysis_period": {"start_date": start.isoformat(), "end_date": end.isoformat()},
            "frequently_borrowed_items": frequently_borrowed,
            "inefficient_items": inefficient,
        }

    def usage_report(self, start_date, end_date, group_by) -> dict:
        require_fields({"start_date": start_date, "end_date": end_date, "group_by": group_by},
                       "start_date", "end_date", "group_by")
        start, end = self._window(start_date, end_date)

        if group_by not in GROUP_BY_FIELDS:
            raise ValidationError(
                ErrorCode.INVALID_GROUP_BY,
                'Invalid group_by value. Must be "category" or "location".'
            )

        try:
            rows = self.borrows.list_with_items(start, end)
        except SQLAlchemyError as e:
            raise self._store_failure("Error generating usage report", e)

        groups = {}
        for borrow, item in rows:
            key = (getattr(item, group_by, None) if item else None) or "Unknown"
            g = groups.setdefault(key, {
                "group": key,
                "total_borrowed": 0,
                "total_returned": 0,
                "items_in_use": 0,
            })
            g["total_borrowed"] += 1
            if borrow.return_date is not None:
                g["total_returned"] += 1
            else:
                g["items_in_use"] += 1

        logger.info("[report] usage_report %s..%s group_by=%s groups=%d", start, end, group_by, len(groups))
        return {
            "analysis_period": {"start_date": start.isoformat(), "end_date": end.isoformat()},
            "usage_analysis": [groups[k] for k in sorted(groups)],
        }
