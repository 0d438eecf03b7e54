"""
Mixed payment client.

Talks to the payments API over HTTP and computes running totals locally.
Failures never propagate: each call records a readable message in
``error`` and returns an empty value (``[]``, ``None`` or ``False``).
The overpayment check done here is advisory; the server only rejects
non-positive amounts.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable, Optional
from uuid import UUID

import httpx

from app.core.config import settings
from app.models.payment import PaymentType, PaymentStatus
from app.schemas.payment import (
    PaymentForm,
    PaymentResponse,
    PaymentSummary,
    MixedPaymentData,
    PaymentValidation,
)
from app.services.ledger import (
    to_money,
    compute_paid_total,
    summarize_payments,
    build_mixed_payment_data,
)

logger = logging.getLogger(__name__)


def _error_message(exc: Exception, fallback: str) -> str:
    """Prefer the server's ``detail``; fall back to the exception text."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        if isinstance(detail, str) and detail:
            return detail
        return fallback
    return str(exc) or fallback


class MixedPaymentClient:
    """
    Client-side accumulation of an order's partial payments.
    
    Args:
        http_client: Preconfigured httpx client; its base URL must point at
            the API root (``.../api/v1``)
        base_url: API root used when no client is given
        token: Bearer access token used when no client is given
    """
    
    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._owns_client = http_client is None
        if http_client is None:
            headers = {"Authorization": f"Bearer {token}"} if token else {}
            http_client = httpx.AsyncClient(
                base_url=base_url or settings.API_BASE_URL,
                headers=headers,
                timeout=timeout or settings.CLIENT_TIMEOUT_SECONDS,
            )
        self.http = http_client
        self.loading = False
        self.error: Optional[str] = None
    
    async def __aenter__(self) -> "MixedPaymentClient":
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
    
    async def aclose(self) -> None:
        if self._owns_client:
            await self.http.aclose()
    
    @staticmethod
    def get_payment_method_label(method: str) -> str:
        """Display label of a payment method, or the raw value if unknown."""
        try:
            return PaymentType(method).label
        except ValueError:
            return method
    
    async def get_order_payments(self, order_id: UUID | str) -> list[PaymentResponse]:
        """Payments of an order, oldest first. Returns [] on failure."""
        try:
            self.error = None
            response = await self.http.get(f"/orders/{order_id}/payments")
            response.raise_for_status()
            return [PaymentResponse.model_validate(item) for item in response.json()]
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Erro ao buscar pagamentos: {e}")
            self.error = _error_message(e, "Erro ao buscar pagamentos")
            return []
    
    async def add_payment_partial(
        self,
        order_id: UUID | str,
        payment_data: PaymentForm,
    ) -> Optional[PaymentResponse]:
        """Insert a confirmed partial payment. Returns None on failure."""
        self.loading = True
        try:
            self.error = None
            logger.info(f"Adicionando pagamento parcial ao pedido {order_id}: {payment_data}")
            
            response = await self.http.post(
                "/payments",
                json={
                    "order_id": str(order_id),
                    "payment_type": payment_data.payment_type.value,
                    "amount": str(payment_data.amount),
                    "notes": payment_data.notes,
                    "status": PaymentStatus.CONFIRMED.value,
                },
            )
            response.raise_for_status()
            payment = PaymentResponse.model_validate(response.json())
            
            logger.info(f"Pagamento parcial adicionado: {payment.id}")
            return payment
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Erro ao adicionar pagamento: {e}")
            self.error = _error_message(e, "Erro ao adicionar pagamento")
            return None
        finally:
            self.loading = False
    
    async def remove_payment_partial(self, payment_id: UUID | str) -> bool:
        """Delete a payment by id."""
        self.loading = True
        try:
            self.error = None
            response = await self.http.delete(f"/payments/{payment_id}")
            response.raise_for_status()
            
            logger.info(f"Pagamento parcial removido: {payment_id}")
            return True
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Erro ao remover pagamento: {e}")
            self.error = _error_message(e, "Erro ao remover pagamento")
            return False
        finally:
            self.loading = False
    
    async def get_mixed_payment_data(
        self,
        order_id: UUID | str,
        order_total: Any,
    ) -> MixedPaymentData:
        """Paid total, remaining balance and paid flag, confirmed payments only."""
        payments = await self.get_order_payments(order_id)
        try:
            return build_mixed_payment_data(order_id, order_total, payments)
        except (ValueError, ArithmeticError) as e:
            logger.error(f"Erro ao calcular pagamentos do pedido {order_id}: {e}")
            self.error = f"Total do pedido inválido: {order_total}"
            return MixedPaymentData(
                order_id=str(order_id),
                order_total=Decimal("0.00"),
                payments=payments,
                total_paid=compute_paid_total(payments),
                remaining_amount=Decimal("0.00"),
                is_fully_paid=False,
            )
    
    @staticmethod
    def get_payment_summary(payments: Iterable[PaymentResponse]) -> PaymentSummary:
        return summarize_payments(payments)
    
    @staticmethod
    def validate_payment_amount(
        amount: Any,
        current_total: Any,
        order_total: Any,
    ) -> PaymentValidation:
        """
        Check an amount before inserting it.
        
        Rejects non-positive amounts and amounts that would push the
        confirmed total past the order total.
        """
        amount = to_money(amount)
        current_total = to_money(current_total)
        order_total = to_money(order_total)
        
        if amount <= 0:
            return PaymentValidation(
                is_valid=False,
                message="Valor deve ser maior que zero",
            )
        
        if current_total + amount > order_total:
            max_amount = max(Decimal("0.00"), order_total - current_total)
            return PaymentValidation(
                is_valid=False,
                message=f"Valor máximo permitido: {max_amount}",
            )
        
        return PaymentValidation(is_valid=True)
    
    async def add_validated_payment(
        self,
        order_id: UUID | str,
        payment_data: PaymentForm,
        order_total: Any,
    ) -> Optional[PaymentResponse]:
        """
        Validate against the confirmed total already paid, then insert.
        A rejected amount never reaches the server; its message goes to ``error``.
        """
        payments = await self.get_order_payments(order_id)
        if self.error:
            return None
        
        validation = self.validate_payment_amount(
            payment_data.amount,
            compute_paid_total(payments),
            order_total,
        )
        if not validation.is_valid:
            self.error = validation.message
            return None
        
        return await self.add_payment_partial(order_id, payment_data)
    
    async def is_order_fully_paid(self, order_id: UUID | str) -> bool:
        """Ask the server whether the order is fully paid. False on failure."""
        try:
            self.error = None
            response = await self.http.get(f"/orders/{order_id}/fully-paid")
            response.raise_for_status()
            return bool(response.json().get("is_fully_paid", False))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Erro ao verificar se pedido está pago: {e}")
            self.error = _error_message(e, "Erro ao verificar se pedido está pago")
            return False
