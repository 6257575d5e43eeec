"""create users, rides and bookings

Revision ID: c1d2e3f4a5b6
Revises:
Create Date: 2026-10-17 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'c1d2e3f4a5b6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False, unique=True),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('roll_number', sa.String(), nullable=False, unique=True),
        sa.Column('avatar', sa.String(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=False, server_default='5.0'),
        sa.Column('total_rides', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'rides',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('driver_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('pickup', sa.JSON(), nullable=False),
        sa.Column('dropoff', sa.JSON(), nullable=False),
        sa.Column('pickup_name', sa.String(), nullable=False),
        sa.Column('departure_time', sa.DateTime(), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('available_seats', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('route', sa.String(), nullable=False),
        sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('recurring_days', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        # Booking relies on these instead of re-checking in the commit path
        sa.CheckConstraint('available_seats >= 0', name='ck_rides_available_seats_non_negative'),
        sa.CheckConstraint('available_seats <= total_seats', name='ck_rides_available_within_total'),
    )
    op.create_index('ix_rides_driver_id', 'rides', ['driver_id'])
    op.create_index('ix_rides_departure_time', 'rides', ['departure_time'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('ride_id', sa.Uuid(), sa.ForeignKey('rides.id'), nullable=False),
        sa.Column('passenger_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='confirmed'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('ride_id', 'passenger_id', name='unique_ride_passenger_booking'),
    )
    op.create_index('ix_bookings_passenger_id', 'bookings', ['passenger_id'])


def downgrade() -> None:
    op.drop_index('ix_bookings_passenger_id', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_rides_departure_time', table_name='rides')
    op.drop_index('ix_rides_driver_id', table_name='rides')
    op.drop_table('rides')
    op.drop_table('users')
