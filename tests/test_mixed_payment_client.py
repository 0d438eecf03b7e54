"""
Mixed payment client tests, run against the app through ASGITransport.
"""

from decimal import Decimal

import httpx
import pytest
from httpx import AsyncClient

from app.client import MixedPaymentClient
from app.main import app
from app.models.order import Order
from app.models.payment import PaymentType, PaymentStatus
from app.schemas.payment import PaymentForm


@pytest.fixture
def payments(api_client: AsyncClient) -> MixedPaymentClient:
    return MixedPaymentClient(http_client=api_client)


def form(payment_type: PaymentType, amount: str, notes: str | None = None) -> PaymentForm:
    return PaymentForm(payment_type=payment_type, amount=Decimal(amount), notes=notes)


@pytest.mark.asyncio
async def test_add_list_and_totals(payments: MixedPaymentClient, order: Order):
    first = await payments.add_payment_partial(order.id, form(PaymentType.PIX, "40.00"))
    
    assert first is not None
    assert first.status == PaymentStatus.CONFIRMED
    assert payments.loading is False
    
    data = await payments.get_mixed_payment_data(order.id, Decimal("100.00"))
    assert data.total_paid == Decimal("40.00")
    assert data.remaining_amount == Decimal("60.00")
    assert data.is_fully_paid is False
    assert await payments.is_order_fully_paid(order.id) is False
    
    await payments.add_payment_partial(order.id, form(PaymentType.DINHEIRO, "60.00"))
    
    listed = await payments.get_order_payments(order.id)
    assert [p.payment_type for p in listed] == [PaymentType.PIX, PaymentType.DINHEIRO]
    data = await payments.get_mixed_payment_data(order.id, Decimal("100.00"))
    assert data.total_paid == Decimal("100.00")
    assert data.remaining_amount == Decimal("0.00")
    assert data.is_fully_paid is True
    assert await payments.is_order_fully_paid(order.id) is True
    assert payments.error is None


@pytest.mark.asyncio
async def test_remove_payment(payments: MixedPaymentClient, order: Order):
    added = await payments.add_payment_partial(order.id, form(PaymentType.VOUCHER, "100.00"))
    
    assert await payments.remove_payment_partial(added.id) is True
    assert await payments.get_order_payments(order.id) == []
    assert await payments.is_order_fully_paid(order.id) is False


@pytest.mark.asyncio
async def test_remove_unknown_payment_sets_error(payments: MixedPaymentClient):
    removed = await payments.remove_payment_partial("00000000-0000-0000-0000-000000000000")
    
    assert removed is False
    assert payments.error == "Pagamento não encontrado"


@pytest.mark.asyncio
async def test_validated_payment_rejects_overpayment(payments: MixedPaymentClient, order: Order):
    await payments.add_payment_partial(order.id, form(PaymentType.PIX, "40.00"))
    
    result = await payments.add_validated_payment(
        order.id,
        form(PaymentType.CARTAO_CREDITO, "70.00"),
        Decimal("100.00"),
    )
    
    assert result is None
    assert payments.error == "Valor máximo permitido: 60.00"
    assert len(await payments.get_order_payments(order.id)) == 1


@pytest.mark.asyncio
async def test_validated_payment_accepts_exact_balance(payments: MixedPaymentClient, order: Order):
    await payments.add_payment_partial(order.id, form(PaymentType.PIX, "40.00"))
    
    result = await payments.add_validated_payment(
        order.id,
        form(PaymentType.CARTAO_DEBITO, "60.00"),
        Decimal("100.00"),
    )
    
    assert result is not None
    assert payments.error is None
    assert await payments.is_order_fully_paid(order.id) is True


def test_validate_payment_amount():
    validate = MixedPaymentClient.validate_payment_amount
    
    assert validate(Decimal("0"), Decimal("0"), Decimal("100")).message == "Valor deve ser maior que zero"
    assert validate(Decimal("-1"), Decimal("0"), Decimal("100")).is_valid is False
    assert validate(Decimal("60.01"), Decimal("40"), Decimal("100")).is_valid is False
    assert validate(Decimal("60.00"), Decimal("40"), Decimal("100")).is_valid is True


def test_payment_summary_and_labels():
    summary = MixedPaymentClient.get_payment_summary([])
    
    assert summary.total == Decimal("0.00")
    assert MixedPaymentClient.get_payment_method_label("cartao_debito") == "Cartão de Débito"
    assert MixedPaymentClient.get_payment_method_label("boleto") == "boleto"


@pytest.mark.asyncio
async def test_unauthenticated_fetch_returns_empty_list(client: AsyncClient, order: Order):
    async with AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test/api/v1",
    ) as anonymous:
        payments = MixedPaymentClient(http_client=anonymous)
        
        assert await payments.get_order_payments(order.id) == []
        assert payments.error == "Token de autenticação inválido ou expirado"


@pytest.mark.asyncio
async def test_network_failure_is_reported():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)
    
    async with AsyncClient(
        transport=httpx.MockTransport(refuse),
        base_url="http://pdv/api/v1",
    ) as http:
        payments = MixedPaymentClient(http_client=http)
        
        assert await payments.get_order_payments("a") == []
        assert payments.error == "Connection refused"
        
        assert await payments.add_payment_partial("a", form(PaymentType.PIX, "1.00")) is None
        assert payments.error == "Connection refused"
        assert payments.loading is False
        
        assert await payments.is_order_fully_paid("a") is False


@pytest.mark.asyncio
async def test_failed_fetch_with_free_form_order_id():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)
    
    async with AsyncClient(
        transport=httpx.MockTransport(refuse),
        base_url="http://pdv/api/v1",
    ) as http:
        payments = MixedPaymentClient(http_client=http)
        
        data = await payments.get_mixed_payment_data("pedido-123", Decimal("100.00"))
        
        assert data.order_id == "pedido-123"
        assert data.payments == []
        assert data.total_paid == Decimal("0.00")
        assert data.remaining_amount == Decimal("100.00")
        assert data.is_fully_paid is False
        assert payments.error == "Connection refused"


@pytest.mark.asyncio
async def test_invalid_order_total_is_reported(payments: MixedPaymentClient, order: Order):
    data = await payments.get_mixed_payment_data(order.id, "cem reais")
    
    assert data.is_fully_paid is False
    assert data.order_total == Decimal("0.00")
    assert payments.error == "Total do pedido inválido: cem reais"


@pytest.mark.parametrize("body", [["bad gateway"], "bad gateway"])
@pytest.mark.asyncio
async def test_error_body_without_detail_object(body):
    def gateway(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, json=body)
    
    async with AsyncClient(
        transport=httpx.MockTransport(gateway),
        base_url="http://pdv/api/v1",
    ) as http:
        payments = MixedPaymentClient(http_client=http)
        
        assert await payments.get_order_payments("x") == []
        assert payments.error == "Erro ao buscar pagamentos"
        
        assert await payments.remove_payment_partial("x") is False
        assert payments.error == "Erro ao remover pagamento"


@pytest.mark.asyncio
async def test_non_json_error_body():
    def gateway(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="<html>Service Unavailable</html>")
    
    async with AsyncClient(
        transport=httpx.MockTransport(gateway),
        base_url="http://pdv/api/v1",
    ) as http:
        payments = MixedPaymentClient(http_client=http)
        
        assert await payments.is_order_fully_paid("x") is False
        assert payments.error == "Erro ao verificar se pedido está pago"
