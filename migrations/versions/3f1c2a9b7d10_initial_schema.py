"""initial_schema

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
    ]


def upgrade():
    op.create_table(
        'stores',
        *_base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('delivery_priority', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_stores_id'), 'stores', ['id'], unique=False)
    op.create_index(op.f('ix_stores_slug'), 'stores', ['slug'], unique=True)

    op.create_table(
        'categories',
        *_base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_categories_id'), 'categories', ['id'], unique=False)

    op.create_table(
        'items',
        *_base_columns(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('target_text', sa.String(length=100), nullable=True),
        sa.Column('target_number', sa.Numeric(precision=12, scale=3), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_items_id'), 'items', ['id'], unique=False)

    op.create_table(
        'store_inventories',
        *_base_columns(),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('target_quantity', sa.Numeric(precision=12, scale=3), nullable=True),
        sa.Column('target_text', sa.String(length=100), nullable=True),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['items.id']),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('store_id', 'item_id', name='uq_store_inventory_store_item'),
    )
    op.create_index(op.f('ix_store_inventories_id'), 'store_inventories', ['id'], unique=False)
    op.create_index(op.f('ix_store_inventories_store_id'), 'store_inventories', ['store_id'], unique=False)

    op.create_table(
        'customers',
        *_base_columns(),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('contact_name', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_customers_id'), 'customers', ['id'], unique=False)

    op.create_table(
        'stocktakes',
        *_base_columns(),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('is_master', sa.Boolean(), nullable=False),
        sa.Column('photo_url', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_stocktakes_id'), 'stocktakes', ['id'], unique=False)
    op.create_index(op.f('ix_stocktakes_store_id'), 'stocktakes', ['store_id'], unique=False)
    op.create_index(op.f('ix_stocktakes_date'), 'stocktakes', ['date'], unique=False)

    op.create_table(
        'stocktake_items',
        *_base_columns(),
        sa.Column('stocktake_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=12, scale=3), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['items.id']),
        sa.ForeignKeyConstraint(['stocktake_id'], ['stocktakes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_stocktake_items_id'), 'stocktake_items', ['id'], unique=False)
    op.create_index(op.f('ix_stocktake_items_stocktake_id'), 'stocktake_items', ['stocktake_id'], unique=False)

    op.create_table(
        'orders',
        *_base_columns(),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('supplier_name', sa.String(length=150), nullable=True),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('expected_date', sa.DateTime(), nullable=True),
        sa.Column('received_date', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_orders_id'), 'orders', ['id'], unique=False)
    op.create_index(op.f('ix_orders_status'), 'orders', ['status'], unique=False)
    op.create_index(op.f('ix_orders_expected_date'), 'orders', ['expected_date'], unique=False)

    op.create_table(
        'order_items',
        *_base_columns(),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('unit_price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('received_quantity', sa.Numeric(precision=12, scale=3), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['items.id']),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_order_items_id'), 'order_items', ['id'], unique=False)
    op.create_index(op.f('ix_order_items_order_id'), 'order_items', ['order_id'], unique=False)

    op.create_table(
        'delivery_plans',
        *_base_columns(),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('store_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_delivery_plans_id'), 'delivery_plans', ['id'], unique=False)
    op.create_index(op.f('ix_delivery_plans_date'), 'delivery_plans', ['date'], unique=False)
    op.create_index(op.f('ix_delivery_plans_store_id'), 'delivery_plans', ['store_id'], unique=False)

    op.create_table(
        'delivery_items',
        *_base_columns(),
        sa.Column('delivery_plan_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['delivery_plan_id'], ['delivery_plans.id']),
        sa.ForeignKeyConstraint(['item_id'], ['items.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('delivery_plan_id', 'item_id', name='uq_delivery_item_plan_item'),
    )
    op.create_index(op.f('ix_delivery_items_id'), 'delivery_items', ['id'], unique=False)
    op.create_index(op.f('ix_delivery_items_delivery_plan_id'), 'delivery_items', ['delivery_plan_id'], unique=False)

    op.create_table(
        'delivery_plan_customers',
        *_base_columns(),
        sa.Column('delivery_plan_id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
        sa.ForeignKeyConstraint(['delivery_plan_id'], ['delivery_plans.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('delivery_plan_id', 'customer_id', name='uq_delivery_plan_customer'),
    )
    op.create_index(op.f('ix_delivery_plan_customers_id'), 'delivery_plan_customers', ['id'], unique=False)
    op.create_index(op.f('ix_delivery_plan_customers_delivery_plan_id'), 'delivery_plan_customers', ['delivery_plan_id'], unique=False)

    op.create_table(
        'productions',
        *_base_columns(),
        sa.Column('recipe_name', sa.String(length=150), nullable=False),
        sa.Column('batch_size', sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column('batch_unit', sa.String(length=20), nullable=True),
        sa.Column('produced_at', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_productions_id'), 'productions', ['id'], unique=False)
    op.create_index(op.f('ix_productions_produced_at'), 'productions', ['produced_at'], unique=False)

    op.create_table(
        'production_ingredients',
        *_base_columns(),
        sa.Column('production_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('quantity_used', sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['items.id']),
        sa.ForeignKeyConstraint(['production_id'], ['productions.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_production_ingredients_id'), 'production_ingredients', ['id'], unique=False)
    op.create_index(op.f('ix_production_ingredients_production_id'), 'production_ingredients', ['production_id'], unique=False)

    op.create_table(
        'audit_logs',
        *_base_columns(),
        sa.Column('user_id', sa.String(length=64), nullable=True),
        sa.Column('user_email', sa.String(length=255), nullable=True),
        sa.Column('action', sa.String(length=100), nullable=False),
        sa.Column('resource', sa.String(length=100), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('endpoint', sa.String(length=255), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_audit_logs_id'), 'audit_logs', ['id'], unique=False)
    op.create_index(op.f('ix_audit_logs_user_id'), 'audit_logs', ['user_id'], unique=False)
    op.create_index(op.f('ix_audit_logs_resource'), 'audit_logs', ['resource'], unique=False)


def downgrade():
    for table in (
        'audit_logs',
        'production_ingredients',
        'productions',
        'delivery_plan_customers',
        'delivery_items',
        'delivery_plans',
        'order_items',
        'orders',
        'stocktake_items',
        'stocktakes',
        'customers',
        'store_inventories',
        'items',
        'categories',
        'stores',
    ):
        op.drop_table(table)
