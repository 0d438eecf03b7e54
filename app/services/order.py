"""
Order service.
Handles order creation and lookup for the authenticated operator.
"""

import logging
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from fastapi import HTTPException, status

from app.models.order import Order
from app.schemas.order import OrderCreate

logger = logging.getLogger(__name__)


class OrderService:
    """Service for order operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def create(self, owner_id: UUID, data: OrderCreate) -> Order:
        """Create a new order for the operator."""
        order = Order(
            owner_id=owner_id,
            total_amount=data.total_amount,
            notes=data.notes,
        )
        
        self.db.add(order)
        await self.db.flush()
        await self.db.refresh(order)
        
        logger.info(f"Pedido {order.id} criado (total {order.total_amount})")
        return order
    
    async def get_by_id(self, order_id: UUID, owner_id: UUID) -> Order | None:
        """Get order by ID, restricted to its owner."""
        result = await self.db.execute(
            select(Order).where(
                Order.id == order_id,
                Order.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()
    
    async def get_or_404(self, order_id: UUID, owner_id: UUID) -> Order:
        """Get order by ID or raise 404."""
        order = await self.get_by_id(order_id, owner_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pedido não encontrado",
            )
        return order
    
    async def list(
        self,
        owner_id: UUID,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Order], int]:
        """List the operator's orders, newest first."""
        total_result = await self.db.execute(
            select(func.count(Order.id)).where(Order.owner_id == owner_id)
        )
        total = total_result.scalar() or 0
        
        result = await self.db.execute(
            select(Order)
            .where(Order.owner_id == owner_id)
            .order_by(Order.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total
    
    async def delete(self, order: Order) -> None:
        """Delete an order; its payments go with it."""
        await self.db.delete(order)
        await self.db.flush()
        logger.info(f"Pedido {order.id} removido")
