from sqlalchemy import update

from inventory.models.item import Item, ItemStatus


class ItemRepo:
    def __init__(self, session):
        self.session = session

    def get(self, item_id: int):
        return self.session.get(Item, item_id)

    def create(self, item: Item):
        self.session.add(item)
        self.session.commit()
        return item

    def save(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def set_status(self, item_id: int, status: ItemStatus):
        self.session.execute(
            update(Item).where(Item.id == item_id).values(status=status)
        )

    def claim(self, item_id: int, expected: ItemStatus, new: ItemStatus) -> bool:
        """
        Compare-and-set on the item status, in one UPDATE statement.
        True only if this call moved the row from `expected` to `new`.
        """
        result = self.session.execute(
            update(Item)
            .where(Item.id == item_id, Item.status == expected)
            .values(status=new)
        )
        return result.rowcount == 1
