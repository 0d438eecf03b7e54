"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    orders,
    payments,
)

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Autenticação"],
)

api_router.include_router(
    orders.router,
    prefix="/orders",
    tags=["Pedidos"],
)

api_router.include_router(
    payments.router,
    prefix="/payments",
    tags=["Pagamentos"],
)
