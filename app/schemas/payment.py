"""
Payment schemas for request/response validation.
Includes the derived, never-persisted views of an order's ledger.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import Field

from app.schemas.base import BaseSchema
from app.models.payment import PaymentType, PaymentStatus


class PaymentForm(BaseSchema):
    """Fields an operator fills in to add a partial payment."""
    
    payment_type: PaymentType
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    notes: str | None = None


class PaymentCreate(PaymentForm):
    """Schema for inserting a payment row."""
    
    order_id: UUID
    status: PaymentStatus = PaymentStatus.CONFIRMED


class PaymentUpdate(BaseSchema):
    """Schema for updating a payment. Status may move freely."""
    
    payment_type: PaymentType | None = None
    amount: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    status: PaymentStatus | None = None
    notes: str | None = None


class PaymentResponse(BaseSchema):
    """Payment response schema."""
    
    id: UUID
    order_id: UUID
    payment_type: PaymentType
    amount: Decimal
    status: PaymentStatus
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class PaymentSummary(BaseSchema):
    """Confirmed subtotal per payment method plus the grand total."""
    
    dinheiro: Decimal = Decimal("0.00")
    pix: Decimal = Decimal("0.00")
    cartao_credito: Decimal = Decimal("0.00")
    cartao_debito: Decimal = Decimal("0.00")
    voucher: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")


class MixedPaymentData(BaseSchema):
    """Running totals of an order settled by several payments."""
    
    order_id: str
    order_total: Decimal
    payments: list[PaymentResponse]
    total_paid: Decimal
    remaining_amount: Decimal
    is_fully_paid: bool


class PaymentTotalResponse(BaseSchema):
    """Sum of confirmed payments for an order."""
    
    order_id: UUID
    total: Decimal


class FullyPaidResponse(BaseSchema):
    """Result of the fully-paid rule for an order."""
    
    order_id: UUID
    is_fully_paid: bool


class PaymentValidation(BaseSchema):
    """Outcome of the advisory amount check done before inserting."""
    
    is_valid: bool
    message: str | None = None
