"""
Ledger consistency rule for mixed payments.

Only confirmed payments count toward an order's paid total. An order is
fully paid once the confirmed total reaches its total amount; overpayment
also counts as paid. The pure helpers below are shared by the API and by
the HTTP client; LedgerService evaluates the same rule against the database.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import utcnow
from app.models.order import Order
from app.models.payment import OrderPayment, PaymentStatus, PaymentType
from app.schemas.payment import PaymentSummary, MixedPaymentData, PaymentResponse

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    """Coerce a numeric value (or None) to a two-digit Decimal."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT)


def is_confirmed(payment: Any) -> bool:
    return PaymentStatus(payment.status) == PaymentStatus.CONFIRMED


def compute_paid_total(payments: Iterable[Any]) -> Decimal:
    """Sum the amounts of confirmed payments; pending and cancelled never count."""
    return to_money(sum((to_money(p.amount) for p in payments if is_confirmed(p)), ZERO))


def compute_remaining(order_total: Any, paid_total: Any) -> Decimal:
    """Balance still owed, never negative."""
    return max(ZERO, to_money(order_total) - to_money(paid_total))


def compute_is_fully_paid(order_total: Optional[Any], paid_total: Any) -> bool:
    """A missing order total compares as zero."""
    return to_money(paid_total) >= to_money(order_total)


def summarize_payments(payments: Iterable[Any]) -> PaymentSummary:
    """Confirmed subtotal per payment method plus the grand total, in one pass."""
    dinheiro = pix = cartao_credito = cartao_debito = voucher = ZERO
    
    for payment in payments:
        if not is_confirmed(payment):
            continue
        amount = to_money(payment.amount)
        payment_type = PaymentType(payment.payment_type)
        if payment_type == PaymentType.DINHEIRO:
            dinheiro += amount
        elif payment_type == PaymentType.PIX:
            pix += amount
        elif payment_type == PaymentType.CARTAO_CREDITO:
            cartao_credito += amount
        elif payment_type == PaymentType.CARTAO_DEBITO:
            cartao_debito += amount
        else:
            voucher += amount
    
    return PaymentSummary(
        dinheiro=dinheiro,
        pix=pix,
        cartao_credito=cartao_credito,
        cartao_debito=cartao_debito,
        voucher=voucher,
        total=dinheiro + pix + cartao_credito + cartao_debito + voucher,
    )


def build_mixed_payment_data(
    order_id: UUID | str,
    order_total: Any,
    payments: list[Any],
) -> MixedPaymentData:
    """Assemble the running totals of an order from its payment list."""
    total_paid = compute_paid_total(payments)
    return MixedPaymentData(
        order_id=str(order_id),
        order_total=to_money(order_total),
        payments=[PaymentResponse.model_validate(p) for p in payments],
        total_paid=total_paid,
        remaining_amount=compute_remaining(order_total, total_paid),
        is_fully_paid=compute_is_fully_paid(order_total, total_paid),
    )


class LedgerService:
    """Evaluates the fully-paid rule against stored payments."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_order_payment_total(self, order_id: UUID) -> Decimal:
        """Sum of confirmed payment amounts for the order, 0 if none."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(OrderPayment.amount), 0))
            .where(
                OrderPayment.order_id == order_id,
                OrderPayment.status == PaymentStatus.CONFIRMED,
            )
        )
        return to_money(result.scalar_one())
    
    async def get_order_total(self, order_id: UUID) -> Decimal | None:
        result = await self.db.execute(
            select(Order.total_amount).where(Order.id == order_id)
        )
        return result.scalar_one_or_none()
    
    async def is_order_fully_paid(self, order_id: UUID) -> bool:
        """
        Check whether confirmed payments cover the order total.
        
        An unknown order has no total, which compares as zero, so it
        reports as paid.
        """
        order_total = await self.get_order_total(order_id)
        paid_total = await self.get_order_payment_total(order_id)
        return compute_is_fully_paid(order_total, paid_total)
    
    async def touch_order(self, order_id: UUID) -> None:
        order = await self.db.get(Order, order_id)
        if order is None:
            return
        order.updated_at = utcnow()
        await self.db.flush()
    
    async def refresh_order_payment_status(
        self,
        order_id: UUID,
        was_fully_paid: bool = False,
    ) -> bool:
        """
        Re-evaluate the rule after a payment insert, update or delete.
        
        Touches the order's updated_at when it is fully paid, and also when
        it was fully paid before the write and no longer is (a payment
        cancelled or removed). Touching an already-paid order again is
        harmless.
        
        Returns:
            Whether the order is fully paid
        """
        await self.db.flush()
        fully_paid = await self.is_order_fully_paid(order_id)
        if fully_paid:
            await self.touch_order(order_id)
            logger.info(f"Pedido {order_id} totalmente pago")
        elif was_fully_paid:
            await self.touch_order(order_id)
            logger.info(f"Pedido {order_id} voltou a ter saldo em aberto")
        return fully_paid
