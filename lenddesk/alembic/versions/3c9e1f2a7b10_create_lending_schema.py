"""create_lending_schema

Revision ID: 3c9e1f2a7b10
Revises:
Create Date: 2026-10-19 16:10:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3c9e1f2a7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

userrole_enum = sa.Enum('admin', 'editor', 'viewer', name='userrole')
approvalstatus_enum = sa.Enum('pending', 'approved', 'rejected', name='approvalstatus')
inquirystatus_enum = sa.Enum('pending', 'approved', 'rejected', name='inquirystatus')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('external_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('age', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('gender', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('contact_number', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('role', userrole_enum, nullable=False),
        sa.Column('approval_status', approvalstatus_enum, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_external_id'), 'users', ['external_id'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_approval_status'), 'users', ['approval_status'], unique=False)
    op.create_index(op.f('ix_users_created_at'), 'users', ['created_at'], unique=False)

    op.create_table(
        'items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('photo_url', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=False),
        sa.Column('qty_total', sa.Integer(), nullable=False),
        sa.Column('qty_available', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('qty_total >= 0', name='ck_items_qty_total_non_negative'),
        sa.CheckConstraint('qty_available >= 0', name='ck_items_qty_available_non_negative'),
        sa.CheckConstraint('qty_available <= qty_total', name='ck_items_qty_available_le_total'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_items_name'), 'items', ['name'], unique=False)
    op.create_index(op.f('ix_items_is_active'), 'items', ['is_active'], unique=False)
    op.create_index(op.f('ix_items_created_at'), 'items', ['created_at'], unique=False)

    op.create_table(
        'wishlist_entries',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('item_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['item_id'], ['items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'item_id'),
    )
    op.create_index(op.f('ix_wishlist_entries_created_at'), 'wishlist_entries', ['created_at'], unique=False)

    op.create_table(
        'inquiries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('item_id', sa.Uuid(), nullable=True),
        sa.Column('item_name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('item_photo_url', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('user_name', sqlmodel.sql.sqltypes.AutoString(length=101), nullable=False),
        sa.Column('user_message', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('status', inquirystatus_enum, nullable=False),
        sa.Column('admin_reply', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('replied_by', sa.Uuid(), nullable=True),
        sa.Column('replied_at', sa.DateTime(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('is_read_by_admin', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['item_id'], ['items.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['replied_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_inquiries_item_id'), 'inquiries', ['item_id'], unique=False)
    op.create_index(op.f('ix_inquiries_status'), 'inquiries', ['status'], unique=False)
    op.create_index(op.f('ix_inquiries_is_read_by_admin'), 'inquiries', ['is_read_by_admin'], unique=False)
    op.create_index(op.f('ix_inquiries_created_at'), 'inquiries', ['created_at'], unique=False)
    op.create_index('ix_inquiries_user_id_created_at', 'inquiries', ['user_id', 'created_at'], unique=False)
    op.create_index(
        'uq_inquiries_pending_user_item',
        'inquiries',
        ['user_id', 'item_id'],
        unique=True,
        sqlite_where=sa.text("status = 'pending'"),
        postgresql_where=sa.text("status = 'pending'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_inquiries_pending_user_item', table_name='inquiries')
    op.drop_index('ix_inquiries_user_id_created_at', table_name='inquiries')
    op.drop_index(op.f('ix_inquiries_created_at'), table_name='inquiries')
    op.drop_index(op.f('ix_inquiries_is_read_by_admin'), table_name='inquiries')
    op.drop_index(op.f('ix_inquiries_status'), table_name='inquiries')
    op.drop_index(op.f('ix_inquiries_item_id'), table_name='inquiries')
    op.drop_table('inquiries')

    op.drop_index(op.f('ix_wishlist_entries_created_at'), table_name='wishlist_entries')
    op.drop_table('wishlist_entries')

    op.drop_index(op.f('ix_items_created_at'), table_name='items')
    op.drop_index(op.f('ix_items_is_active'), table_name='items')
    op.drop_index(op.f('ix_items_name'), table_name='items')
    op.drop_table('items')

    op.drop_index(op.f('ix_users_created_at'), table_name='users')
    op.drop_index(op.f('ix_users_approval_status'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_external_id'), table_name='users')
    op.drop_table('users')

    # Enum types only exist as named types on PostgreSQL
    inquirystatus_enum.drop(op.get_bind(), checkfirst=True)
    approvalstatus_enum.drop(op.get_bind(), checkfirst=True)
    userrole_enum.drop(op.get_bind(), checkfirst=True)
