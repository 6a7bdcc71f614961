"""
SQLAlchemy Database Models

Orders are stored as JSON documents. The fields the API filters and sorts
on (status, delivery zone, timestamps) are copied into their own indexed
columns whenever the document is written.
"""

import enum
from typing import Any

from sqlalchemy import Column, String, JSON

from rollhouse.database import Base


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Statuses counted as "pending" on the dashboard
OPEN_STATUSES = (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING)


class OrderRecord(Base):
    """
    One row per order, keyed by the server-generated order id.

    ``document`` holds the full order exactly as returned by the API.
    """
    __tablename__ = "orders"

    order_id = Column(String(64), primary_key=True)
    order_status = Column(String(32), nullable=False, index=True)
    zone = Column(String(100), nullable=True, index=True)

    # ISO-8601 UTC strings; lexicographic order is chronological order
    created_at = Column(String(32), nullable=False, index=True)
    updated_at = Column(String(32), nullable=False)

    document = Column(JSON, nullable=False)

    @staticmethod
    def columns_for(document: dict[str, Any]) -> dict[str, Any]:
        """Indexed column values derived from an order document."""
        customer = document.get("customer") or {}
        return {
            "order_status": document["orderStatus"],
            "zone": customer.get("zone"),
            "created_at": document["createdAt"],
            "updated_at": document["updatedAt"],
        }

    def __repr__(self):
        return f"<Order {self.order_id} - {self.order_status}>"
