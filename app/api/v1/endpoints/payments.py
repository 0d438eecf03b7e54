"""
Payment endpoints.
Insert, update and remove partial payments.
"""

from uuid import UUID
from fastapi import APIRouter, status

from app.api.deps import DbSession, CurrentUser
from app.schemas.payment import (
    PaymentCreate,
    PaymentUpdate,
    PaymentResponse,
)
from app.schemas.base import MessageResponse
from app.services.payment import PaymentService

router = APIRouter()


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Adicionar pagamento",
    description="Registrar um pagamento parcial para um pedido",
)
async def create_payment(
    data: PaymentCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> PaymentResponse:
    service = PaymentService(db)
    payment = await service.create(current_user.id, data)
    return PaymentResponse.model_validate(payment)


@router.get(
    "/{payment_id}",
    response_model=PaymentResponse,
    summary="Detalhes do pagamento",
)
async def get_payment(
    payment_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> PaymentResponse:
    service = PaymentService(db)
    payment = await service.get_or_404(payment_id, current_user.id)
    return PaymentResponse.model_validate(payment)


@router.patch(
    "/{payment_id}",
    response_model=PaymentResponse,
    summary="Atualizar pagamento",
    description="Alterar forma, valor, status ou observações de um pagamento",
)
async def update_payment(
    payment_id: UUID,
    data: PaymentUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> PaymentResponse:
    service = PaymentService(db)
    payment = await service.get_or_404(payment_id, current_user.id)
    payment = await service.update(payment, data)
    return PaymentResponse.model_validate(payment)


@router.delete(
    "/{payment_id}",
    response_model=MessageResponse,
    summary="Remover pagamento",
)
async def delete_payment(
    payment_id: UUID,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = PaymentService(db)
    payment = await service.get_or_404(payment_id, current_user.id)
    await service.delete(payment)
    return MessageResponse(message="Pagamento removido com sucesso")
