"""
Order schemas for request/response validation.
"""

from decimal import Decimal
from uuid import UUID
from pydantic import Field

from app.schemas.base import BaseSchema, TimestampSchema


class OrderCreate(BaseSchema):
    """Schema for creating an order."""
    
    total_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    notes: str | None = None


class OrderResponse(TimestampSchema):
    """Order response schema."""
    
    id: UUID
    owner_id: UUID
    total_amount: Decimal
    notes: str | None


class OrderListResponse(BaseSchema):
    """Paginated order list response."""
    
    items: list[OrderResponse]
    total: int
    page: int
    per_page: int
    pages: int
