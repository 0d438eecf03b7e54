"""
User schemas for response serialization.
"""

from uuid import UUID
from pydantic import EmailStr

from app.schemas.base import TimestampSchema


class UserResponse(TimestampSchema):
    """User response schema (public data)."""
    
    id: UUID
    email: EmailStr
    full_name: str
    store_name: str | None
    is_active: bool
