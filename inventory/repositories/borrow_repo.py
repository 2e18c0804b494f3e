from datetime import date

from sqlalchemy import func

from inventory.models.borrow import Borrow, BorrowStatus
from inventory.models.item import Item


class BorrowRepo:
    def __init__(self, session):
        self.session = session

    def get(self, borrow_id: int):
        return self.session.get(Borrow, borrow_id)

    def create(self, borrow: Borrow):
        # flushed, not committed: the caller owns the transaction
        self.session.add(borrow)
        self.session.flush()
        return borrow

    def update(self, borrow: Borrow, **fields):
        for k, v in fields.items():
            setattr(borrow, k, v)
        self.session.flush()
        return borrow

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def count_by_item(self, start: date, end: date, status: BorrowStatus | None = None):
        """[(item_id, count), ...] for borrows in the window, most borrowed first."""
        q = (
            self.session.query(Borrow.item_id, func.count(Borrow.id).label("total"))
            .filter(Borrow.borrow_date >= start, Borrow.borrow_date <= end)
        )
        if status is not None:
            q = q.filter(Borrow.status == status)

        rows = (
            q.group_by(Borrow.item_id)
            .order_by(func.count(Borrow.id).desc(), Borrow.item_id.asc())
            .all()
        )
        return [(int(item_id), int(total)) for item_id, total in rows]

    def list_with_items(self, start: date, end: date):
        """[(borrow, item), ...] for borrows in the window; item is None if missing."""
        return (
            self.session.query(Borrow, Item)
            .outerjoin(Item, Item.id == Borrow.item_id)
            .filter(Borrow.borrow_date >= start, Borrow.borrow_date <= end)
            .order_by(Borrow.id.asc())
            .all()
        )
