import enum
from datetime import datetime
from inventory.extensions import db


class BorrowStatus(str, enum.Enum):
    ONGOING = "ONGOING"
    RETURNED = "RETURNED"
    LATE = "LATE"


class Borrow(db.Model):
    __tablename__ = "borrows"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False, index=True)

    borrow_date = db.Column(db.Date, nullable=False, index=True)
    # expected return date while ONGOING (if the borrower gave one), actual return date afterwards
    return_date = db.Column(db.Date, nullable=True)

    status = db.Column(db.Enum(BorrowStatus, name="borrow_status"), nullable=False, default=BorrowStatus.ONGOING)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", backref="borrows")
    item = db.relationship("Item", backref="borrows")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "item_id": self.item_id,
            "borrow_date": self.borrow_date.isoformat() if self.borrow_date else None,
            "return_date": self.return_date.isoformat() if self.return_date else None,
            "status": self.status.value if self.status else None,
        }
