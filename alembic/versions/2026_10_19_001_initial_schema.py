"""Initial schema: tenants, rooms, business hours, bookings

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001_initial_schema'
down_revision = None

tenant_status = sa.Enum('ACTIVE', 'INACTIVE', 'SUSPENDED', name='tenantstatus')
plan_type = sa.Enum('FREE', 'BASIC', 'PRO', 'BUSINESS', name='plantype')
booking_status = sa.Enum('CONFIRMED', 'CANCELLED', 'COMPLETED', 'NO_SHOW', name='bookingstatus')


def upgrade():
    # Needed for the equality part of the booking exclusion constraint
    op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')

    op.create_table(
        'tenants',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('subdomain', sa.String(100), nullable=False),
        sa.Column('domain', sa.String(255), nullable=True),
        sa.Column('settings', sa.Text(), nullable=True),
        sa.Column('plan_type', plan_type, nullable=False, server_default='FREE'),
        sa.Column('status', tenant_status, nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_tenants_name', 'tenants', ['name'])
    op.create_index('ix_tenants_subdomain', 'tenants', ['subdomain'], unique=True)
    op.create_index('ix_tenants_status', 'tenants', ['status'])
    op.create_index('ix_tenants_deleted_at', 'tenants', ['deleted_at'])

    op.create_table(
        'rooms',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(100), nullable=False, server_default='Standard'),
        sa.Column('description', sa.String(2000), nullable=True),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_rooms_tenant_name'),
        sa.CheckConstraint('capacity > 0', name='ck_rooms_capacity_positive'),
        sa.CheckConstraint('hourly_rate >= 0', name='ck_rooms_rate_non_negative'),
    )
    op.create_index('ix_rooms_tenant_id', 'rooms', ['tenant_id'])
    op.create_index('ix_rooms_is_active', 'rooms', ['is_active'])
    op.create_index('ix_rooms_deleted_at', 'rooms', ['deleted_at'])

    op.create_table(
        'business_hours',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('weekday', sa.Integer(), nullable=False),
        sa.Column('open_time', sa.Time(), nullable=True),
        sa.Column('close_time', sa.Time(), nullable=True),
        sa.Column('is_closed', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('tenant_id', 'weekday', name='uq_business_hours_tenant_weekday'),
        sa.CheckConstraint('weekday >= 0 AND weekday <= 6', name='ck_business_hours_weekday'),
    )
    op.create_index('ix_business_hours_tenant_id', 'business_hours', ['tenant_id'])

    op.create_table(
        'bookings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('tenant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('room_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('customer_phone', sa.String(50), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('status', booking_status, nullable=False, server_default='CONFIRMED'),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.String(2000), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('end_time > start_time', name='valid_booking_time'),
    )
    op.create_index('ix_bookings_tenant_id', 'bookings', ['tenant_id'])
    op.create_index('ix_bookings_room_id', 'bookings', ['room_id'])
    op.create_index('ix_bookings_start_time', 'bookings', ['start_time'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])
    op.create_index('ix_bookings_deleted_at', 'bookings', ['deleted_at'])
    op.create_index('idx_bookings_room_time', 'bookings', ['tenant_id', 'room_id', 'start_time', 'end_time'])

    # No two live bookings of a room may share an instant: [start, end) ranges
    # of non-cancelled, non-deleted rows must not overlap
    op.execute("""
        ALTER TABLE bookings
        ADD CONSTRAINT bookings_no_overlap
        EXCLUDE USING gist (
            room_id WITH =,
            tsrange(start_time, end_time, '[)') WITH &&
        )
        WHERE (status <> 'CANCELLED' AND deleted_at IS NULL)
    """)


def downgrade():
    op.execute('ALTER TABLE bookings DROP CONSTRAINT IF EXISTS bookings_no_overlap')
    op.drop_table('bookings')
    op.drop_table('business_hours')
    op.drop_table('rooms')
    op.drop_table('tenants')

    booking_status.drop(op.get_bind(), checkfirst=True)
    plan_type.drop(op.get_bind(), checkfirst=True)
    tenant_status.drop(op.get_bind(), checkfirst=True)
