"""
Partial payment model for mixed-payment orders.
An order may be settled by several payments of different methods.
"""

import uuid
from typing import Optional, TYPE_CHECKING
from decimal import Decimal
from enum import Enum
from sqlalchemy import Text, ForeignKey, Numeric, Uuid, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.order import Order


class PaymentType(str, Enum):
    """Payment method enumeration."""
    DINHEIRO = "dinheiro"
    PIX = "pix"
    CARTAO_CREDITO = "cartao_credito"
    CARTAO_DEBITO = "cartao_debito"
    VOUCHER = "voucher"
    
    @property
    def label(self) -> str:
        return PAYMENT_TYPE_LABELS[self]


PAYMENT_TYPE_LABELS = {
    PaymentType.DINHEIRO: "Dinheiro",
    PaymentType.PIX: "PIX",
    PaymentType.CARTAO_CREDITO: "Cartão de Crédito",
    PaymentType.CARTAO_DEBITO: "Cartão de Débito",
    PaymentType.VOUCHER: "Voucher",
}


class PaymentStatus(str, Enum):
    """Payment status. Any status may follow any other."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class OrderPayment(BaseModel):
    """
    One partial payment toward an order's total.
    
    Attributes:
        order_id: Foreign key to the order (cascade delete)
        payment_type: Method of payment
        amount: Strictly positive amount, two fraction digits
        status: Only confirmed payments count toward totals
        notes: Optional free text
    """
    
    __tablename__ = "order_payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_order_payments_amount_positive"),
    )
    
    order_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    payment_type: Mapped[PaymentType] = mapped_column(
        SQLEnum(PaymentType, name="payment_type_enum", values_callable=_enum_values),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus, name="payment_status_enum", values_callable=_enum_values),
        default=PaymentStatus.CONFIRMED,
        server_default=PaymentStatus.CONFIRMED.value,
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    
    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="payments",
    )
    
    def __repr__(self) -> str:
        return (
            f"<OrderPayment(id={self.id}, amount={self.amount}, "
            f"type='{self.payment_type.value}', status='{self.status.value}')>"
        )
