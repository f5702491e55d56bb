from sqlalchemy import (
    String, Integer, ForeignKey, Numeric, Date, DateTime, Boolean, JSON, func
)
from sqlalchemy.orm import mapped_column, relationship, DeclarativeBase
from .roles import Role
import uuid
from datetime import datetime


def _gen_id() -> str:
    """Server-side identifier for new rows."""
    return uuid.uuid4().hex


class Base(DeclarativeBase): ...


# ---------- Staff & HR ----------
class Staff(Base):
    __tablename__ = "staff"
    id          = mapped_column(String(64), primary_key=True, default=_gen_id)
    name        = mapped_column(String(120), nullable=False)
    role        = mapped_column(String(16), default=Role.staff.value, nullable=False)
    salary      = mapped_column(Numeric(10, 2), default=0, nullable=False)
    contact     = mapped_column(String(120), default="", nullable=False)
    employee_id = mapped_column(String(32), default="", nullable=False)
    phone       = mapped_column(String(32), nullable=True)
    thai_id     = mapped_column(String(32), nullable=True)
    address     = mapped_column(String(500), nullable=True)
    emergency_contact = mapped_column(String(200), nullable=True)
    birthday    = mapped_column(Date, nullable=True)
    id_photo_url = mapped_column(String(256), nullable=True)  # object key in storage


class User(Base):
    """Login credentials; optionally linked to a staff record."""

    __tablename__ = "users"
    id            = mapped_column(String(64), primary_key=True, default=_gen_id)
    username      = mapped_column(String(64), unique=True, nullable=False, index=True)
    password_hash = mapped_column(String(128), nullable=False)
    role          = mapped_column(String(16), default=Role.staff.value, nullable=False)
    staff_id      = mapped_column(ForeignKey("staff.id", ondelete="SET NULL"), nullable=True)
    is_active     = mapped_column(Boolean, default=True, nullable=False)
    created_at    = mapped_column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)


class Shift(Base):
    __tablename__ = "shifts"
    id          = mapped_column(String(64), primary_key=True, default=_gen_id)
    date        = mapped_column(Date, nullable=False)
    staff_name  = mapped_column(String(120), nullable=False)
    start_time  = mapped_column(String(5), nullable=False)   # HH:MM
    end_time    = mapped_column(String(5), nullable=False)


class Task(Base):
    __tablename__ = "tasks"
    id          = mapped_column(String(64), primary_key=True, default=_gen_id)
    description = mapped_column(String(1000), nullable=False)
    assigned_to = mapped_column(String(120), nullable=False)
    due_date    = mapped_column(Date, nullable=False)
    status      = mapped_column(String(16), default="Pending", nullable=False, comment="Pending | In Progress | Completed")


class Absence(Base):
    __tablename__ = "absences"
    id       = mapped_column(String(64), primary_key=True, default=_gen_id)
    staff_id = mapped_column(ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    date     = mapped_column(Date, nullable=False)
    reason   = mapped_column(String(500), nullable=True)


class SalaryAdvance(Base):
    __tablename__ = "salary_advances"
    id       = mapped_column(String(64), primary_key=True, default=_gen_id)
    staff_id = mapped_column(ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    date     = mapped_column(Date, nullable=False)
    amount   = mapped_column(Numeric(10, 2), nullable=False)
    reason   = mapped_column(String(500), nullable=True)


# ---------- Rooms & beds ----------
class Room(Base):
    __tablename__ = "rooms"
    id        = mapped_column(String(64), primary_key=True, default=_gen_id)
    name      = mapped_column(String(120), nullable=False)
    condition = mapped_column(String(16), default="Good", nullable=False, comment="Excellent | Good | Fair | Needs Repair")
    maintenance_notes = mapped_column(String(2000), default="", nullable=False)

    beds = relationship(
        "Bed",
        back_populates="room",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Bed.number",
    )


class Bed(Base):
    __tablename__ = "beds"
    id      = mapped_column(String(64), primary_key=True, default=_gen_id)
    room_id = mapped_column(ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    number  = mapped_column(Integer, nullable=False)
    status  = mapped_column(String(16), default="Ready", nullable=False, comment="Ready | Needs Cleaning")

    room = relationship("Room", back_populates="beds")


# ---------- Utilities ----------
class UtilityRecord(Base):
    __tablename__ = "utility_records"
    id           = mapped_column(String(64), primary_key=True, default=_gen_id)
    utility_type = mapped_column(String(64), nullable=False)
    date         = mapped_column(Date, nullable=False)
    cost         = mapped_column(Numeric(10, 2), nullable=False)
    bill_image   = mapped_column(String(256), nullable=True)


class UtilityCategory(Base):
    __tablename__ = "utility_categories"
    id   = mapped_column(String(64), primary_key=True, default=_gen_id)
    name = mapped_column(String(64), unique=True, nullable=False)


# ---------- Catalog ----------
class Activity(Base):
    __tablename__ = "activities"
    id           = mapped_column(String(64), primary_key=True, default=_gen_id)
    name         = mapped_column(String(200), nullable=False)
    description  = mapped_column(String(2000), default="", nullable=False)
    price        = mapped_column(Numeric(10, 2), nullable=False)
    image_url    = mapped_column(String(500), default="", nullable=False)
    commission   = mapped_column(Numeric(10, 2), nullable=True, comment="Per person payout to the seller")
    type         = mapped_column(String(16), default="Internal", nullable=False, comment="Internal | External")
    company_cost = mapped_column(Numeric(10, 2), nullable=True, comment="Per person cost for External activities")


class SpeedBoatTrip(Base):
    __tablename__ = "speed_boat_trips"
    id         = mapped_column(String(64), primary_key=True, default=_gen_id)
    route      = mapped_column(String(200), nullable=False)
    company    = mapped_column(String(120), nullable=False)
    price      = mapped_column(Numeric(10, 2), nullable=False)
    cost       = mapped_column(Numeric(10, 2), default=0, nullable=False)
    commission = mapped_column(Numeric(10, 2), nullable=True)


class TaxiBoatOption(Base):
    __tablename__ = "taxi_boat_options"
    id         = mapped_column(String(64), primary_key=True, default=_gen_id)
    name       = mapped_column(String(32), nullable=False, comment="One Way | Round Trip")
    price      = mapped_column(Numeric(10, 2), nullable=False)
    commission = mapped_column(Numeric(10, 2), nullable=True)


class Extra(Base):
    __tablename__ = "extras"
    # Administrators may pick a code (paddle_hour, paddle_day) as the id
    id         = mapped_column(String(64), primary_key=True, default=_gen_id)
    name       = mapped_column(String(200), nullable=False)
    price      = mapped_column(Numeric(10, 2), nullable=False)
    commission = mapped_column(Numeric(10, 2), nullable=True)


class PaymentType(Base):
    __tablename__ = "payment_types"
    id   = mapped_column(String(64), primary_key=True, default=_gen_id)
    name = mapped_column(String(64), nullable=False)


# ---------- Sales ----------
class Booking(Base):
    """One sale, snapshotting name/price/cost/commission at sale time."""

    __tablename__ = "bookings"
    id                  = mapped_column(String(64), primary_key=True, default=_gen_id)
    item_id             = mapped_column(String(64), nullable=False)
    item_type           = mapped_column(String(16), nullable=False, comment="activity | speedboat | private_tour | extra | taxi_boat")
    item_name           = mapped_column(String(300), nullable=False)
    staff_id            = mapped_column(ForeignKey("staff.id"), nullable=False, index=True)
    booking_date        = mapped_column(Date, nullable=False, index=True)
    customer_price      = mapped_column(Numeric(10, 2), nullable=False)
    number_of_people    = mapped_column(Integer, nullable=False)
    discount            = mapped_column(Numeric(10, 2), nullable=True)
    extras              = mapped_column(JSON, nullable=True, comment="[{name, price}]")
    extras_total        = mapped_column(Numeric(10, 2), nullable=True)
    payment_method      = mapped_column(String(64), nullable=False)
    receipt_image       = mapped_column(String(256), nullable=True)
    fuel_cost           = mapped_column(Numeric(10, 2), nullable=True)
    captain_cost        = mapped_column(Numeric(10, 2), nullable=True)
    item_cost           = mapped_column(Numeric(10, 2), nullable=True)
    employee_commission = mapped_column(Numeric(10, 2), nullable=True)
    hostel_commission   = mapped_column(Numeric(10, 2), nullable=True)
    created_at          = mapped_column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)


class ExternalSale(Base):
    __tablename__ = "external_sales"
    id          = mapped_column(String(64), primary_key=True, default=_gen_id)
    date        = mapped_column(Date, nullable=False)
    amount      = mapped_column(Numeric(10, 2), nullable=False)
    description = mapped_column(String(500), nullable=True)


class PlatformPayment(Base):
    __tablename__ = "platform_payments"
    id                = mapped_column(String(64), primary_key=True, default=_gen_id)
    date              = mapped_column(Date, nullable=False)
    platform          = mapped_column(String(64), nullable=False)
    amount            = mapped_column(Numeric(10, 2), nullable=False)
    booking_reference = mapped_column(String(120), nullable=True)


# ---------- Accommodation ----------
class WalkInGuest(Base):
    __tablename__ = "walk_in_guests"
    id               = mapped_column(String(64), primary_key=True, default=_gen_id)
    guest_name       = mapped_column(String(200), nullable=False)
    room_id          = mapped_column(ForeignKey("rooms.id"), nullable=False)
    bed_number       = mapped_column(Integer, nullable=True)
    check_in_date    = mapped_column(Date, nullable=False, index=True)
    number_of_nights = mapped_column(Integer, nullable=False)
    price_per_night  = mapped_column(Numeric(10, 2), nullable=False)
    amount_paid      = mapped_column(Numeric(10, 2), default=0, nullable=False)
    payment_method   = mapped_column(String(64), nullable=False)
    nationality      = mapped_column(String(64), nullable=True)
    id_number        = mapped_column(String(64), nullable=True)
    notes            = mapped_column(String(2000), nullable=True)
    status           = mapped_column(String(16), default="Unpaid", nullable=False, comment="Paid | Deposit Paid | Unpaid")


class AccommodationBooking(Base):
    __tablename__ = "accommodation_bookings"
    id               = mapped_column(String(64), primary_key=True, default=_gen_id)
    guest_name       = mapped_column(String(200), nullable=False)
    platform         = mapped_column(String(64), nullable=False)
    room_id          = mapped_column(ForeignKey("rooms.id"), nullable=False)
    bed_number       = mapped_column(Integer, nullable=True)
    check_in_date    = mapped_column(Date, nullable=False, index=True)
    number_of_nights = mapped_column(Integer, nullable=False)
    total_price      = mapped_column(Numeric(10, 2), nullable=False)
    amount_paid      = mapped_column(Numeric(10, 2), default=0, nullable=False)
    status           = mapped_column(String(16), default="Unpaid", nullable=False)
