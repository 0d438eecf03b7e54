"""
Ledger rule tests: confirmed totals, remaining balance, fully-paid flag.
"""

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.order import Order
from app.models.payment import OrderPayment, PaymentStatus, PaymentType
from app.services.ledger import (
    LedgerService,
    build_mixed_payment_data,
    compute_is_fully_paid,
    compute_paid_total,
    compute_remaining,
    summarize_payments,
)


def payment(amount: str, status=PaymentStatus.CONFIRMED, payment_type=PaymentType.PIX):
    return SimpleNamespace(
        id=uuid4(),
        order_id=uuid4(),
        amount=Decimal(amount),
        status=status,
        payment_type=payment_type,
        notes=None,
        created_at="2025-08-20T17:33:39",
        updated_at="2025-08-20T17:33:39",
    )


def test_paid_total_counts_only_confirmed():
    payments = [
        payment("40.00"),
        payment("25.50", status=PaymentStatus.PENDING),
        payment("10.00", status=PaymentStatus.CANCELLED),
        payment("15.25", payment_type=PaymentType.DINHEIRO),
    ]
    
    assert compute_paid_total(payments) == Decimal("55.25")


def test_paid_total_of_no_payments_is_zero():
    assert compute_paid_total([]) == Decimal("0.00")


def test_remaining_is_never_negative():
    assert compute_remaining(Decimal("100.00"), Decimal("40.00")) == Decimal("60.00")
    assert compute_remaining(Decimal("100.00"), Decimal("100.00")) == Decimal("0.00")
    assert compute_remaining(Decimal("100.00"), Decimal("130.00")) == Decimal("0.00")


@pytest.mark.parametrize(
    "order_total, paid_total, expected",
    [
        ("100.00", "99.99", False),
        ("100.00", "100.00", True),
        ("100.00", "150.00", True),
        ("0.00", "0.00", True),
        (None, "0.00", True),
    ],
)
def test_fully_paid_when_paid_covers_total(order_total, paid_total, expected):
    assert compute_is_fully_paid(order_total, paid_total) is expected


def test_summary_groups_confirmed_by_method():
    payments = [
        payment("30.00", payment_type=PaymentType.DINHEIRO),
        payment("20.00", payment_type=PaymentType.DINHEIRO),
        payment("40.00", payment_type=PaymentType.PIX),
        payment("12.00", payment_type=PaymentType.CARTAO_CREDITO),
        payment("8.00", payment_type=PaymentType.CARTAO_DEBITO),
        payment("5.00", payment_type=PaymentType.VOUCHER),
        payment("99.00", payment_type=PaymentType.VOUCHER, status=PaymentStatus.CANCELLED),
    ]
    
    summary = summarize_payments(payments)
    
    assert summary.dinheiro == Decimal("50.00")
    assert summary.pix == Decimal("40.00")
    assert summary.cartao_credito == Decimal("12.00")
    assert summary.cartao_debito == Decimal("8.00")
    assert summary.voucher == Decimal("5.00")
    assert summary.total == Decimal("115.00")


def test_mixed_payment_data_ignores_pending():
    order_id = uuid4()
    payments = [
        payment("40.00"),
        payment("60.00", status=PaymentStatus.PENDING),
    ]
    
    data = build_mixed_payment_data(order_id, Decimal("100.00"), payments)
    
    assert data.order_id == str(order_id)
    assert len(data.payments) == 2
    assert data.total_paid == Decimal("40.00")
    assert data.remaining_amount == Decimal("60.00")
    assert data.is_fully_paid is False


def test_payment_type_labels():
    assert PaymentType.CARTAO_CREDITO.label == "Cartão de Crédito"
    assert PaymentType.PIX.label == "PIX"


@pytest.mark.asyncio
async def test_order_payment_total_from_database(db_session: AsyncSession, order: Order):
    db_session.add_all([
        OrderPayment(order_id=order.id, payment_type=PaymentType.PIX, amount=Decimal("40.00")),
        OrderPayment(
            order_id=order.id,
            payment_type=PaymentType.VOUCHER,
            amount=Decimal("30.00"),
            status=PaymentStatus.PENDING,
        ),
    ])
    await db_session.flush()
    
    ledger = LedgerService(db_session)
    
    assert await ledger.get_order_payment_total(order.id) == Decimal("40.00")
    assert await ledger.is_order_fully_paid(order.id) is False


@pytest.mark.asyncio
async def test_order_without_payments_totals_zero(db_session: AsyncSession, order: Order):
    ledger = LedgerService(db_session)
    
    assert await ledger.get_order_payment_total(order.id) == Decimal("0.00")


@pytest.mark.asyncio
async def test_unknown_order_reports_fully_paid(db_session: AsyncSession):
    ledger = LedgerService(db_session)
    
    assert await ledger.is_order_fully_paid(uuid4()) is True


@pytest.mark.asyncio
async def test_refresh_touches_paid_order(db_session: AsyncSession, order: Order):
    before = order.updated_at
    db_session.add(
        OrderPayment(order_id=order.id, payment_type=PaymentType.DINHEIRO, amount=Decimal("100.00"))
    )
    
    fully_paid = await LedgerService(db_session).refresh_order_payment_status(order.id)
    
    assert fully_paid is True
    assert order.updated_at != before


@pytest.mark.asyncio
async def test_refresh_leaves_unpaid_order_alone(db_session: AsyncSession, order: Order):
    before = order.updated_at
    db_session.add(
        OrderPayment(order_id=order.id, payment_type=PaymentType.PIX, amount=Decimal("10.00"))
    )
    
    fully_paid = await LedgerService(db_session).refresh_order_payment_status(order.id)
    
    assert fully_paid is False
    assert order.updated_at == before


@pytest.mark.asyncio
async def test_database_rejects_non_positive_amount(db_session: AsyncSession, order: Order):
    db_session.add(
        OrderPayment(order_id=order.id, payment_type=PaymentType.PIX, amount=Decimal("0.00"))
    )
    
    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
async def test_refresh_touches_order_that_stops_being_paid(db_session: AsyncSession, order: Order):
    before = order.updated_at
    
    fully_paid = await LedgerService(db_session).refresh_order_payment_status(
        order.id,
        was_fully_paid=True,
    )
    
    assert fully_paid is False
    assert order.updated_at != before
