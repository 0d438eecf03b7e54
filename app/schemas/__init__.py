"""
Pydantic schemas for request/response validation.
"""

from app.schemas.user import UserResponse
from app.schemas.order import (
    OrderCreate,
    OrderResponse,
    OrderListResponse,
)
from app.schemas.payment import (
    PaymentForm,
    PaymentCreate,
    PaymentUpdate,
    PaymentResponse,
    PaymentSummary,
    MixedPaymentData,
    PaymentValidation,
)
from app.schemas.auth import (
    AccessToken,
    LoginRequest,
    RegisterRequest,
)

__all__ = [
    # User
    "UserResponse",
    # Order
    "OrderCreate",
    "OrderResponse",
    "OrderListResponse",
    # Payment
    "PaymentForm",
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentResponse",
    "PaymentSummary",
    "MixedPaymentData",
    "PaymentValidation",
    # Auth
    "AccessToken",
    "LoginRequest",
    "RegisterRequest",
]
