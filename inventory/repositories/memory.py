"""
In-memory repositories with the same contract as the SQLAlchemy ones.

Entities are the regular model classes, kept detached from any session,
so services behave identically whichever store they are given.
Uncommitted changes (item claims and status changes, new or updated
borrows) are journaled and undone by rollback(), like a session would.
"""
from __future__ import annotations

import itertools
import threading
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from inventory.models.borrow import Borrow, BorrowStatus
from inventory.models.item import Item, ItemStatus
from inventory.models.user import User


class Journal:
    """Undo steps for the changes made since the last commit."""

    def __init__(self) -> None:
        self._undo: List[Callable[[], None]] = []

    def record(self, undo: Callable[[], None]) -> None:
        self._undo.append(undo)

    def commit(self) -> None:
        self._undo.clear()

    def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()


class InMemoryUserRepo:
    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._ids = itertools.count(1)

    def get(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def create(self, user: User) -> User:
        if user.id is None:
            user.id = next(self._ids)
        self._users[user.id] = user
        return user

    # create() commits immediately, nothing is ever pending
    def rollback(self) -> None:
        pass


class InMemoryItemRepo:
    def __init__(self, journal: Optional[Journal] = None) -> None:
        self._items: Dict[int, Item] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.journal = journal or Journal()

    def get(self, item_id: int) -> Optional[Item]:
        return self._items.get(item_id)

    def create(self, item: Item) -> Item:
        if item.id is None:
            item.id = next(self._ids)
        if item.status is None:
            item.status = ItemStatus.AVAILABLE
        self._items[item.id] = item
        self.journal.commit()
        return item

    def save(self) -> None:
        self.journal.commit()

    def rollback(self) -> None:
        self.journal.rollback()

    def _change_status(self, item: Item, status: ItemStatus) -> None:
        previous = item.status
        item.status = status
        self.journal.record(lambda: setattr(item, "status", previous))

    def set_status(self, item_id: int, status: ItemStatus) -> None:
        item = self._items.get(item_id)
        if item is not None:
            self._change_status(item, status)

    def claim(self, item_id: int, expected: ItemStatus, new: ItemStatus) -> bool:
        with self._lock:
            item = self._items.get(item_id)
            if item is None or item.status != expected:
                return False
            self._change_status(item, new)
            return True


class InMemoryBorrowRepo:
    def __init__(self, items: InMemoryItemRepo) -> None:
        self._borrows: Dict[int, Borrow] = {}
        self._ids = itertools.count(1)
        self.items = items
        # one transaction spans both repos
        self.journal = items.journal
        self.commits = 0
        self.rollbacks = 0

    def get(self, borrow_id: int) -> Optional[Borrow]:
        return self._borrows.get(borrow_id)

    def create(self, borrow: Borrow) -> Borrow:
        if borrow.id is None:
            borrow.id = next(self._ids)
        self._borrows[borrow.id] = borrow
        self.journal.record(lambda: self._borrows.pop(borrow.id, None))
        return borrow

    def update(self, borrow: Borrow, **fields) -> Borrow:
        previous = {k: getattr(borrow, k) for k in fields}
        for k, v in fields.items():
            setattr(borrow, k, v)

        def undo():
            for k, v in previous.items():
                setattr(borrow, k, v)

        self.journal.record(undo)
        return borrow

    def commit(self) -> None:
        self.commits += 1
        self.journal.commit()

    def rollback(self) -> None:
        self.rollbacks += 1
        self.journal.rollback()

    def list_all(self) -> List[Borrow]:
        return list(self._borrows.values())

    def _in_window(self, start: date, end: date) -> List[Borrow]:
        return [b for b in self._borrows.values() if start <= b.borrow_date <= end]

    def count_by_item(
        self, start: date, end: date, status: Optional[BorrowStatus] = None
    ) -> List[Tuple[int, int]]:
        counts: Dict[int, int] = {}
        for b in self._in_window(start, end):
            if status is not None and b.status != status:
                continue
            counts[b.item_id] = counts.get(b.item_id, 0) + 1
        return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))

    def list_with_items(self, start: date, end: date) -> List[Tuple[Borrow, Optional[Item]]]:
        rows = sorted(self._in_window(start, end), key=lambda b: b.id)
        return [(b, self.items.get(b.item_id)) for b in rows]
