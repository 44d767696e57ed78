"""Tabelle iniziali: anagrafiche, ordini, documenti, utenti e sessioni

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-18 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONTACT_TABLES = ('suppliers', 'carriers', 'destinations')
MONEY = sa.Numeric(14, 2)


def _contact_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(f'ix_{name}_name', name, ['name'])


def upgrade() -> None:
    for name in CONTACT_TABLES:
        _contact_table(name)

    op.create_table(
        'container_types',
        sa.Column('name', sa.String(50), primary_key=True),
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('reference', sa.String(100), nullable=False),
        sa.Column('supplier_id', sa.String(36), sa.ForeignKey('suppliers.id'), nullable=False),
        sa.Column('destination_id', sa.String(36), sa.ForeignKey('destinations.id'), nullable=False),
        sa.Column('carrier_id', sa.String(36), sa.ForeignKey('carriers.id'), nullable=False),
        sa.Column('product_description', sa.Text(), nullable=True),
        sa.Column('container_type', sa.String(50), sa.ForeignKey('container_types.name'), nullable=False),
        sa.Column('container_reference', sa.String(100), nullable=True),
        sa.Column('transport_price', MONEY, nullable=False),
        sa.Column('order_value', MONEY, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('order_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expected_start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('initial_payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('initial_payment_amount', MONEY, nullable=True),
        sa.Column('final_payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('final_payment_amount', MONEY, nullable=True),
        sa.Column('etd', sa.DateTime(timezone=True), nullable=True),
        sa.Column('eta', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ata', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('transport_price >= 0', name='ck_orders_transport_price'),
        sa.CheckConstraint('order_value >= 0', name='ck_orders_order_value'),
        sa.CheckConstraint(
            "status IN ('pending', 'in_production', 'in_transit', 'delivered')",
            name='ck_orders_status',
        ),
    )
    op.create_index('ix_orders_reference', 'orders', ['reference'])
    op.create_index('ix_orders_supplier_id', 'orders', ['supplier_id'])
    op.create_index('ix_orders_destination_id', 'orders', ['destination_id'])
    op.create_index('ix_orders_carrier_id', 'orders', ['carrier_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_order_date', 'orders', ['order_date'])

    op.create_table(
        'order_documents',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('file_url', sa.String(500), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('file_url', name='uq_order_documents_file_url'),
    )
    op.create_index('ix_order_documents_order_id', 'order_documents', ['order_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(15), nullable=False),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_sign_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'auth_sessions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_auth_sessions_user_id', 'auth_sessions', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_auth_sessions_user_id', 'auth_sessions')
    op.drop_table('auth_sessions')
    op.drop_index('ix_users_email', 'users')
    op.drop_table('users')
    op.drop_index('ix_order_documents_order_id', 'order_documents')
    op.drop_table('order_documents')
    for index in ('order_date', 'status', 'carrier_id', 'destination_id', 'supplier_id', 'reference'):
        op.drop_index(f'ix_orders_{index}', 'orders')
    op.drop_table('orders')
    op.drop_table('container_types')
    for name in reversed(CONTACT_TABLES):
        op.drop_index(f'ix_{name}_name', name)
        op.drop_table(name)
