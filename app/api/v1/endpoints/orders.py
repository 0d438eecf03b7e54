"""
Order endpoints.
Create and read orders, plus the ledger views of their payments.
"""

from uuid import UUID
from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, CurrentUser
from app.schemas.base import MessageResponse
from app.schemas.order import OrderCreate, OrderResponse, OrderListResponse
from app.schemas.payment import (
    PaymentResponse,
    PaymentSummary,
    MixedPaymentData,
    PaymentTotalResponse,
    FullyPaidResponse,
)
from app.services.order import OrderService
from app.services.payment import PaymentService


router = APIRouter()


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Criar pedido",
)
async def create_order(
    data: OrderCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = OrderService(db)
    order = await service.create(current_user.id, data)
    return OrderResponse.model_validate(order)


@router.get(
    "",
    response_model=OrderListResponse,
    summary="Listar pedidos",
)
async def list_orders(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Número da página"),
    per_page: int = Query(20, ge=1, le=100, description="Itens por página"),
) -> OrderListResponse:
    service = OrderService(db)
    orders, total = await service.list(
        owner_id=current_user.id,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    
    pages = (total + per_page - 1) // per_page if per_page > 0 else 0
    
    return OrderListResponse(
        items=[OrderResponse.model_validate(o) for o in orders],
        total=total,
        page=page,
        per_page=per_page,
        pages=pages,
    )


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Detalhes do pedido",
)
async def get_order(
    order_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> OrderResponse:
    service = OrderService(db)
    order = await service.get_or_404(order_id, current_user.id)
    return OrderResponse.model_validate(order)


@router.delete(
    "/{order_id}",
    response_model=MessageResponse,
    summary="Remover pedido",
    description="Remove o pedido e todos os seus pagamentos",
)
async def delete_order(
    order_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = OrderService(db)
    order = await service.get_or_404(order_id, current_user.id)
    await service.delete(order)
    return MessageResponse(message="Pedido removido com sucesso")


@router.get(
    "/{order_id}/payments",
    response_model=list[PaymentResponse],
    summary="Pagamentos do pedido",
    description="Pagamentos parciais do pedido, do mais antigo ao mais recente",
)
async def list_order_payments(
    order_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> list[PaymentResponse]:
    service = PaymentService(db)
    payments = await service.list_by_order(order_id, current_user.id)
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get(
    "/{order_id}/payment-total",
    response_model=PaymentTotalResponse,
    summary="Total pago",
    description="Soma dos pagamentos confirmados do pedido",
)
async def get_order_payment_total(
    order_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> PaymentTotalResponse:
    service = PaymentService(db)
    await service.orders.get_or_404(order_id, current_user.id)
    total = await service.ledger.get_order_payment_total(order_id)
    return PaymentTotalResponse(order_id=order_id, total=total)


@router.get(
    "/{order_id}/fully-paid",
    response_model=FullyPaidResponse,
    summary="Pedido quitado?",
    description="Verdadeiro quando os pagamentos confirmados cobrem o total do pedido",
)
async def is_order_fully_paid(
    order_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> FullyPaidResponse:
    service = PaymentService(db)
    await service.orders.get_or_404(order_id, current_user.id)
    fully_paid = await service.ledger.is_order_fully_paid(order_id)
    return FullyPaidResponse(order_id=order_id, is_fully_paid=fully_paid)


@router.get(
    "/{order_id}/mixed-payment",
    response_model=MixedPaymentData,
    summary="Situação do pagamento misto",
)
async def get_mixed_payment_data(
    order_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> MixedPaymentData:
    service = PaymentService(db)
    return await service.get_mixed_payment_data(order_id, current_user.id)


@router.get(
    "/{order_id}/payment-summary",
    response_model=PaymentSummary,
    summary="Resumo por forma de pagamento",
)
async def get_payment_summary(
    order_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> PaymentSummary:
    service = PaymentService(db)
    return await service.get_summary(order_id, current_user.id)
