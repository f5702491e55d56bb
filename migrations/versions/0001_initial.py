from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', sa.String(length=64), primary_key=True)


def _money(name, nullable=False, **kw):
    return sa.Column(name, sa.Numeric(10, 2), nullable=nullable, **kw)


def upgrade() -> None:
    op.create_table(
        'staff',
        _id(),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        _money('salary'),
        sa.Column('contact', sa.String(length=120), nullable=False),
        sa.Column('employee_id', sa.String(length=32), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('thai_id', sa.String(length=32), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('emergency_contact', sa.String(length=200), nullable=True),
        sa.Column('birthday', sa.Date(), nullable=True),
        sa.Column('id_photo_url', sa.String(length=256), nullable=True),
    )
    op.create_table(
        'users',
        _id(),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=128), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('staff_id', sa.String(length=64), sa.ForeignKey('staff.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'shifts',
        _id(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('staff_name', sa.String(length=120), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
    )
    op.create_table(
        'tasks',
        _id(),
        sa.Column('description', sa.String(length=1000), nullable=False),
        sa.Column('assigned_to', sa.String(length=120), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
    )
    for table in ('absences', 'salary_advances'):
        columns = [
            _id(),
            sa.Column('staff_id', sa.String(length=64), sa.ForeignKey('staff.id', ondelete='CASCADE'), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('reason', sa.String(length=500), nullable=True),
        ]
        if table == 'salary_advances':
            columns.append(_money('amount'))
        op.create_table(table, *columns)
        op.create_index(f'ix_{table}_staff_id', table, ['staff_id'])

    op.create_table(
        'rooms',
        _id(),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('condition', sa.String(length=16), nullable=False),
        sa.Column('maintenance_notes', sa.String(length=2000), nullable=False),
    )
    op.create_table(
        'beds',
        _id(),
        sa.Column('room_id', sa.String(length=64), sa.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
    )
    op.create_index('ix_beds_room_id', 'beds', ['room_id'])

    op.create_table(
        'utility_records',
        _id(),
        sa.Column('utility_type', sa.String(length=64), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        _money('cost'),
        sa.Column('bill_image', sa.String(length=256), nullable=True),
    )
    op.create_table(
        'utility_categories',
        _id(),
        sa.Column('name', sa.String(length=64), nullable=False, unique=True),
    )

    op.create_table(
        'activities',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=2000), nullable=False),
        _money('price'),
        sa.Column('image_url', sa.String(length=500), nullable=False),
        _money('commission', nullable=True),
        sa.Column('type', sa.String(length=16), nullable=False),
        _money('company_cost', nullable=True),
    )
    op.create_table(
        'speed_boat_trips',
        _id(),
        sa.Column('route', sa.String(length=200), nullable=False),
        sa.Column('company', sa.String(length=120), nullable=False),
        _money('price'),
        _money('cost'),
        _money('commission', nullable=True),
    )
    op.create_table(
        'taxi_boat_options',
        _id(),
        sa.Column('name', sa.String(length=32), nullable=False),
        _money('price'),
        _money('commission', nullable=True),
    )
    op.create_table(
        'extras',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        _money('price'),
        _money('commission', nullable=True),
    )
    op.create_table(
        'payment_types',
        _id(),
        sa.Column('name', sa.String(length=64), nullable=False),
    )

    op.create_table(
        'bookings',
        _id(),
        sa.Column('item_id', sa.String(length=64), nullable=False),
        sa.Column('item_type', sa.String(length=16), nullable=False),
        sa.Column('item_name', sa.String(length=300), nullable=False),
        sa.Column('staff_id', sa.String(length=64), sa.ForeignKey('staff.id'), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        _money('customer_price'),
        sa.Column('number_of_people', sa.Integer(), nullable=False),
        _money('discount', nullable=True),
        sa.Column('extras', sa.JSON(), nullable=True),
        _money('extras_total', nullable=True),
        sa.Column('payment_method', sa.String(length=64), nullable=False),
        sa.Column('receipt_image', sa.String(length=256), nullable=True),
        _money('fuel_cost', nullable=True),
        _money('captain_cost', nullable=True),
        _money('item_cost', nullable=True),
        _money('employee_commission', nullable=True),
        _money('hostel_commission', nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_bookings_staff_id', 'bookings', ['staff_id'])
    op.create_index('ix_bookings_booking_date', 'bookings', ['booking_date'])

    op.create_table(
        'external_sales',
        _id(),
        sa.Column('date', sa.Date(), nullable=False),
        _money('amount'),
        sa.Column('description', sa.String(length=500), nullable=True),
    )
    op.create_table(
        'platform_payments',
        _id(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('platform', sa.String(length=64), nullable=False),
        _money('amount'),
        sa.Column('booking_reference', sa.String(length=120), nullable=True),
    )

    op.create_table(
        'walk_in_guests',
        _id(),
        sa.Column('guest_name', sa.String(length=200), nullable=False),
        sa.Column('room_id', sa.String(length=64), sa.ForeignKey('rooms.id'), nullable=False),
        sa.Column('bed_number', sa.Integer(), nullable=True),
        sa.Column('check_in_date', sa.Date(), nullable=False),
        sa.Column('number_of_nights', sa.Integer(), nullable=False),
        _money('price_per_night'),
        _money('amount_paid'),
        sa.Column('payment_method', sa.String(length=64), nullable=False),
        sa.Column('nationality', sa.String(length=64), nullable=True),
        sa.Column('id_number', sa.String(length=64), nullable=True),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
    )
    op.create_index('ix_walk_in_guests_check_in_date', 'walk_in_guests', ['check_in_date'])

    op.create_table(
        'accommodation_bookings',
        _id(),
        sa.Column('guest_name', sa.String(length=200), nullable=False),
        sa.Column('platform', sa.String(length=64), nullable=False),
        sa.Column('room_id', sa.String(length=64), sa.ForeignKey('rooms.id'), nullable=False),
        sa.Column('bed_number', sa.Integer(), nullable=True),
        sa.Column('check_in_date', sa.Date(), nullable=False),
        sa.Column('number_of_nights', sa.Integer(), nullable=False),
        _money('total_price'),
        _money('amount_paid'),
        sa.Column('status', sa.String(length=16), nullable=False),
    )
    op.create_index('ix_accommodation_bookings_check_in_date', 'accommodation_bookings', ['check_in_date'])


def downgrade() -> None:
    for table in (
        'accommodation_bookings', 'walk_in_guests', 'platform_payments', 'external_sales',
        'bookings', 'payment_types', 'extras', 'taxi_boat_options', 'speed_boat_trips',
        'activities', 'utility_categories', 'utility_records', 'beds', 'rooms',
        'salary_advances', 'absences', 'tasks', 'shifts', 'users', 'staff',
    ):
        op.drop_table(table)
