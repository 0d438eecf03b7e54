"""create users, orders and order_payments with paid-status triggers

Revision ID: mixed_payments_001
Revises: 
Create Date: 2025-08-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'mixed_payments_001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


payment_type_enum = postgresql.ENUM(
    'dinheiro', 'pix', 'cartao_credito', 'cartao_debito', 'voucher',
    name='payment_type_enum',
    create_type=False,
)
payment_status_enum = postgresql.ENUM(
    'pending', 'confirmed', 'cancelled',
    name='payment_status_enum',
    create_type=False,
)


FUNCTIONS = [
    """
    CREATE OR REPLACE FUNCTION get_order_payment_total(order_uuid uuid)
    RETURNS numeric AS $$
    BEGIN
      RETURN COALESCE(
        (SELECT SUM(amount)
         FROM order_payments
         WHERE order_id = order_uuid AND status = 'confirmed'),
        0
      );
    END;
    $$ LANGUAGE plpgsql;
    """,
    # A missing order has a NULL total, which compares as zero
    """
    CREATE OR REPLACE FUNCTION is_order_fully_paid(order_uuid uuid)
    RETURNS boolean AS $$
    DECLARE
      order_total numeric;
    BEGIN
      SELECT total_amount INTO order_total FROM orders WHERE id = order_uuid;
      RETURN get_order_payment_total(order_uuid) >= COALESCE(order_total, 0);
    END;
    $$ LANGUAGE plpgsql;
    """,
    """
    CREATE OR REPLACE FUNCTION update_order_payment_status()
    RETURNS trigger AS $$
    DECLARE
      target uuid;
      old_share numeric := 0;
      new_share numeric := 0;
      was_paid boolean;
    BEGIN
      IF TG_OP = 'DELETE' THEN
        target := OLD.order_id;
      ELSE
        target := NEW.order_id;
        IF NEW.status = 'confirmed' THEN
          new_share := NEW.amount;
        END IF;
      END IF;
      IF TG_OP <> 'INSERT' THEN
        IF OLD.status = 'confirmed' THEN
          old_share := OLD.amount;
        END IF;
      END IF;

      -- Paid status as it was before this row changed
      was_paid := get_order_payment_total(target) - new_share + old_share >=
                  COALESCE((SELECT total_amount FROM orders WHERE id = target), 0);

      IF is_order_fully_paid(target) OR was_paid THEN
        UPDATE orders SET updated_at = now() WHERE id = target;
      END IF;

      IF TG_OP = 'DELETE' THEN
        RETURN OLD;
      END IF;
      RETURN NEW;
    END;
    $$ LANGUAGE plpgsql;
    """,
    """
    CREATE OR REPLACE FUNCTION update_updated_at_column()
    RETURNS trigger AS $$
    BEGIN
      NEW.updated_at = now();
      RETURN NEW;
    END;
    $$ LANGUAGE plpgsql;
    """,
]

TRIGGERS = [
    """
    CREATE TRIGGER trg_update_order_payment_status
      AFTER INSERT OR UPDATE OR DELETE ON order_payments
      FOR EACH ROW
      EXECUTE FUNCTION update_order_payment_status();
    """,
    """
    CREATE TRIGGER update_order_payments_updated_at
      BEFORE UPDATE ON order_payments
      FOR EACH ROW
      EXECUTE FUNCTION update_updated_at_column();
    """,
]


def upgrade() -> None:
    bind = op.get_bind()
    payment_type_enum.create(bind, checkfirst=True)
    payment_status_enum.create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('store_name', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('total_amount >= 0', name='ck_orders_total_amount_non_negative'),
    )
    op.create_index('ix_orders_owner_id', 'orders', ['owner_id'])

    op.create_table(
        'order_payments',
        sa.Column('id', sa.Uuid(), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('payment_type', payment_type_enum, nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', payment_status_enum, nullable=False, server_default='confirmed'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('amount > 0', name='ck_order_payments_amount_positive'),
    )
    op.create_index('ix_order_payments_order_id', 'order_payments', ['order_id'])
    op.create_index('ix_order_payments_payment_type', 'order_payments', ['payment_type'])
    op.create_index('ix_order_payments_created_at', 'order_payments', ['created_at'])

    for statement in FUNCTIONS + TRIGGERS:
        op.execute(statement)


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS update_order_payments_updated_at ON order_payments")
    op.execute("DROP TRIGGER IF EXISTS trg_update_order_payment_status ON order_payments")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")
    op.execute("DROP FUNCTION IF EXISTS update_order_payment_status()")
    op.execute("DROP FUNCTION IF EXISTS is_order_fully_paid(uuid)")
    op.execute("DROP FUNCTION IF EXISTS get_order_payment_total(uuid)")

    op.drop_table('order_payments')
    op.drop_table('orders')
    op.drop_table('users')

    bind = op.get_bind()
    payment_status_enum.drop(bind, checkfirst=True)
    payment_type_enum.drop(bind, checkfirst=True)
