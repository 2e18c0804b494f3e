import enum
from datetime import datetime
from inventory.extensions import db


class ItemStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    BORROWED = "BORROWED"
    DAMAGED = "DAMAGED"
    LOST = "LOST"


class Item(db.Model):
    __tablename__ = "items"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(191), nullable=False, index=True)
    category = db.Column(db.String(191), nullable=False, index=True)
    location = db.Column(db.String(191), nullable=False, index=True)

    # informational only, borrowing never decrements it
    quantity = db.Column(db.Integer, nullable=False, default=1)

    status = db.Column(db.Enum(ItemStatus, name="item_status"), nullable=False, default=ItemStatus.AVAILABLE)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "location": self.location,
            "quantity": self.quantity,
            "status": self.status.value if self.status else None,
        }
