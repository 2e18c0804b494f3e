import logging
from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError

from inventory.models.borrow import Borrow, BorrowStatus
from inventory.models.item import ItemStatus
from inventory.services.errors import (
    ConflictError,
    ErrorCode,
    InternalError,
    NotFoundError,
)
from inventory.utils.validators import (
    check_date_order,
    is_blank,
    parse_date,
    positive_int,
    require_fields,
)

logger = logging.getLogger(__name__)

DEFAULT_BORROW_PERIOD_DAYS = 7


class BorrowService:
    """
    Borrow/return lifecycle.

    ONGOING -> RETURNED (returned on or before the expected date)
    ONGOING -> LATE     (returned after it)
    Both end states are final. The item follows along: BORROWED while a
    borrow is ONGOING, AVAILABLE again once it is returned.
    """

    def __init__(self, users, items, borrows, borrow_period_days: int = DEFAULT_BORROW_PERIOD_DAYS):
        self.users = users
        self.items = items
        self.borrows = borrows
        self.borrow_period_days = borrow_period_days

    def expected_return_date(self, borrow: Borrow) -> date:
        if borrow.return_date is not None:
            return borrow.return_date
        return borrow.borrow_date + timedelta(days=self.borrow_period_days)

    def borrow(self, user_id, item_id, borrow_date, return_date=None) -> Borrow:
        data = {"userId": user_id, "itemId": item_id, "borrowDate": borrow_date}
        require_fields(data, "userId", "itemId", "borrowDate")

        borrow_day = parse_date(borrow_date, "borrowDate")
        return_day = None
        if not is_blank(return_date):
            return_day = parse_date(return_date, "returnDate")
            check_date_order(borrow_day, return_day, "borrowDate", "returnDate")

        user_id = positive_int(user_id, "userId")
        item_id = positive_int(item_id, "itemId")

        try:
            if self.users.get(user_id) is None:
                raise NotFoundError(ErrorCode.USER_NOT_FOUND, "User not found")

            item = self.items.get(item_id)
            if item is None:
                raise NotFoundError(ErrorCode.ITEM_NOT_FOUND, "Item not found")

            if item.status != ItemStatus.AVAILABLE:
                logger.info("[borrow] item=%s rejected, status=%s", item_id, item.status.value)
                raise ConflictError(ErrorCode.ITEM_NOT_AVAILABLE, "Item not available for borrowing")

            # someone else may have taken it since the read above
            if not self.items.claim(item_id, ItemStatus.AVAILABLE, ItemStatus.BORROWED):
                self.borrows.rollback()
                logger.info("[borrow] item=%s lost the race to another borrow", item_id)
                raise ConflictError(ErrorCode.ITEM_NOT_AVAILABLE, "Item not available for borrowing")

            borrow = self.borrows.create(Borrow(
                user_id=user_id,
                item_id=item_id,
                borrow_date=borrow_day,
                return_date=return_day,
                status=BorrowStatus.ONGOING,
            ))
            self.borrows.commit()
        except SQLAlchemyError as e:
            self.borrows.rollback()
            logger.exception("[borrow] store failure user=%s item=%s", user_id, item_id)
            raise InternalError("Error borrowing item", detail=str(e))

        logger.info("[borrow] borrow=%s user=%s item=%s from=%s", borrow.id, user_id, item_id, borrow_day)
        return borrow

    def return_item(self, borrow_id, return_date) -> Borrow:
        require_fields({"borrowId": borrow_id, "returnDate": return_date}, "borrowId", "returnDate")
        return_day = parse_date(return_date, "returnDate")
        borrow_id = positive_int(borrow_id, "borrowId")

        try:
            borrow = self.borrows.get(borrow_id)
            if borrow is None:
                raise NotFoundError(ErrorCode.BORROW_NOT_FOUND, "Borrow record not found")

            if borrow.status != BorrowStatus.ONGOING:
                raise ConflictError(
                    ErrorCode.BORROW_NOT_ONGOING,
                    "Invalid borrow record or item already returned"
                )

            check_date_order(borrow.borrow_date, return_day, "borrowDate", "returnDate")

            expected = self.expected_return_date(borrow)
            status = BorrowStatus.LATE if return_day > expected else BorrowStatus.RETURNED

            self.borrows.update(borrow, return_date=return_day, status=status)
            self.items.set_status(borrow.item_id, ItemStatus.AVAILABLE)
            self.borrows.commit()
        except SQLAlchemyError as e:
            self.borrows.rollback()
            logger.exception("[return] store failure borrow=%s", borrow_id)
            raise InternalError("Error returning item", detail=str(e))

        logger.info(
            "[return] borrow=%s item=%s status=%s expected=%s returned=%s",
            borrow.id, borrow.item_id, status.value, expected, return_day
        )
        return borrow
