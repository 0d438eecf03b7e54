"""
Operator login and registration schemas.
"""

from pydantic import EmailStr, Field

from app.core.config import settings
from app.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseSchema):
    """New operator account for a point of sale."""
    
    email: EmailStr
    password: str = Field(..., min_length=8, description="Mínimo de 8 caracteres")
    full_name: str = Field(..., min_length=2, max_length=255)
    store_name: str | None = Field(None, max_length=255)


class AccessToken(BaseSchema):
    """Bearer token returned by a successful login."""
    
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(
        default_factory=lambda: settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        description="Validade em segundos",
    )
