"""
Database models module.
All SQLAlchemy models are exported from here for easy imports.
"""

from app.models.user import User
from app.models.order import Order
from app.models.payment import OrderPayment, PaymentType, PaymentStatus


__all__ = [
    "User",
    "Order",
    "OrderPayment",
    "PaymentType",
    "PaymentStatus",
]
