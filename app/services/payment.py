"""
Payment service.
Handles partial payments of an order and re-evaluates its paid status.
"""

import logging
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status

from app.models.order import Order
from app.models.payment import OrderPayment
from app.schemas.payment import (
    PaymentCreate,
    PaymentUpdate,
    PaymentSummary,
    MixedPaymentData,
)
from app.services.ledger import (
    LedgerService,
    summarize_payments,
    build_mixed_payment_data,
)
from app.services.order import OrderService

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for payment operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
        self.orders = OrderService(db)
        self.ledger = LedgerService(db)
    
    async def _flush(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning(f"Pagamento rejeitado pelo banco: {e.orig}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Pagamento inválido: o valor deve ser maior que zero",
            )
    
    async def create(self, owner_id: UUID, data: PaymentCreate) -> OrderPayment:
        """
        Insert a payment for an order.
        
        Only amount > 0 is enforced here. Keeping the sum within the order
        total is left to the caller.
        
        Args:
            owner_id: Operator's user ID (for verification)
            data: Payment data
            
        Returns:
            Created payment
        """
        order = await self.orders.get_or_404(data.order_id, owner_id)
        
        payment = OrderPayment(
            order_id=order.id,
            payment_type=data.payment_type,
            amount=data.amount,
            status=data.status,
            notes=data.notes,
        )
        
        self.db.add(payment)
        await self._flush()
        
        await self.ledger.refresh_order_payment_status(order.id)
        await self.db.refresh(payment)
        
        logger.info(
            f"Pagamento parcial {payment.id} adicionado ao pedido {order.id}: "
            f"{payment.payment_type.value} {payment.amount}"
        )
        return payment
    
    async def get_by_id(self, payment_id: UUID, owner_id: UUID) -> OrderPayment | None:
        """Get payment by ID, ensuring owner access through the order."""
        result = await self.db.execute(
            select(OrderPayment)
            .join(Order)
            .where(
                OrderPayment.id == payment_id,
                Order.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()
    
    async def get_or_404(self, payment_id: UUID, owner_id: UUID) -> OrderPayment:
        """Get payment by ID or raise 404."""
        payment = await self.get_by_id(payment_id, owner_id)
        if not payment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pagamento não encontrado",
            )
        return payment
    
    async def list_by_order(self, order_id: UUID, owner_id: UUID) -> list[OrderPayment]:
        """List all payments of an order, oldest first."""
        await self.orders.get_or_404(order_id, owner_id)
        
        result = await self.db.execute(
            select(OrderPayment)
            .where(OrderPayment.order_id == order_id)
            .order_by(OrderPayment.created_at.asc())
        )
        return list(result.scalars().all())
    
    async def update(self, payment: OrderPayment, data: PaymentUpdate) -> OrderPayment:
        """Update a payment and re-evaluate its order."""
        update_data = data.model_dump(exclude_unset=True)
        was_fully_paid = await self.ledger.is_order_fully_paid(payment.order_id)
        
        for field, value in update_data.items():
            if value is None and field != "notes":
                continue
            setattr(payment, field, value)
        
        await self._flush()
        await self.ledger.refresh_order_payment_status(payment.order_id, was_fully_paid)
        await self.db.refresh(payment)
        
        return payment
    
    async def delete(self, payment: OrderPayment) -> None:
        """Delete a payment and re-evaluate its order."""
        order_id = payment.order_id
        was_fully_paid = await self.ledger.is_order_fully_paid(order_id)
        
        await self.db.delete(payment)
        await self.db.flush()
        
        await self.ledger.refresh_order_payment_status(order_id, was_fully_paid)
        logger.info(f"Pagamento parcial {payment.id} removido do pedido {order_id}")
    
    async def get_summary(self, order_id: UUID, owner_id: UUID) -> PaymentSummary:
        """Confirmed totals per payment method for an order."""
        payments = await self.list_by_order(order_id, owner_id)
        return summarize_payments(payments)
    
    async def get_mixed_payment_data(self, order_id: UUID, owner_id: UUID) -> MixedPaymentData:
        """Paid total, remaining balance and paid flag for an order."""
        order = await self.orders.get_or_404(order_id, owner_id)
        payments = await self.list_by_order(order_id, owner_id)
        return build_mixed_payment_data(order.id, order.total_amount, payments)
