"""
Order model: the sale that partial payments are applied against.
"""

import uuid
from typing import Optional, List, TYPE_CHECKING
from decimal import Decimal
from sqlalchemy import Text, ForeignKey, Numeric, Uuid, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.payment import OrderPayment


class Order(BaseModel):
    """
    Order model.
    
    Attributes:
        owner_id: Operator who rang up the order
        total_amount: Amount the payments must cover
        notes: Free-text notes
        updated_at: Touched whenever a payment write leaves the order fully paid
    """
    
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_orders_total_amount_non_negative"),
    )
    
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        default=Decimal("0.00"),
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="orders",
    )
    payments: Mapped[List["OrderPayment"]] = relationship(
        "OrderPayment",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderPayment.created_at",
    )
    
    def __repr__(self) -> str:
        return f"<Order(id={self.id}, total_amount={self.total_amount})>"
