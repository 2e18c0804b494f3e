import pytest
from flask_jwt_extended import create_access_token

from inventory import create_app
from inventory.config import TestConfig
from inventory.extensions import db
from inventory.models.borrow import Borrow, BorrowStatus
from inventory.models.item import Item, ItemStatus
from inventory.models.user import Role, User
from inventory.repositories.memory import InMemoryBorrowRepo, InMemoryItemRepo, InMemoryUserRepo
from inventory.services.borrow_service import BorrowService
from inventory.services.report_service import ReportService
from werkzeug.security import generate_password_hash


# -----------------------------
# In-memory store
# -----------------------------
class Store:
    def __init__(self):
        self.users = InMemoryUserRepo()
        self.items = InMemoryItemRepo()
        self.borrows = InMemoryBorrowRepo(self.items)

    def add_user(self, username="student", role=Role.STUDENT):
        return self.users.create(User(username=username, password_hash="x", role=role))

    def add_item(self, name="Projector", category="Electronics", location="Room A",
                 status=ItemStatus.AVAILABLE):
        return self.items.create(Item(
            name=name, category=category, location=location, quantity=1, status=status
        ))

    def add_borrow(self, item, borrow_date, return_date=None, status=BorrowStatus.ONGOING, user_id=1):
        borrow = self.borrows.create(Borrow(
            user_id=user_id,
            item_id=item.id,
            borrow_date=borrow_date,
            return_date=return_date,
            status=status,
        ))
        # seeded rows count as already committed
        self.borrows.journal.commit()
        return borrow


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def borrow_service(store):
    return BorrowService(store.users, store.items, store.borrows)


@pytest.fixture
def report_service(store):
    return ReportService(store.items, store.borrows)


# -----------------------------
# Flask app on SQLite
# -----------------------------
@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    created = {}
    for role in Role:
        u = User(
            username=role.value.lower(),
            password_hash=generate_password_hash("secret"),
            role=role,
        )
        db.session.add(u)
        created[role.value] = u
    db.session.commit()
    return created


def _headers(user):
    token = create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role.value, "username": user.username}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(users):
    return _headers(users["ADMIN"])


@pytest.fixture
def teacher_headers(users):
    return _headers(users["TEACHER"])


@pytest.fixture
def student_headers(users):
    return _headers(users["STUDENT"])
