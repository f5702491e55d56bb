"""Every table the dashboard manages, keyed by its URL segment."""

from operator import itemgetter
from typing import Dict

from hostel_ops import casing
from hostel_ops import models as m
from hostel_ops.infrastructure.repositories import (
    AbsenceRepository,
    BookingRepository,
    RoomRepository,
    SalaryAdvanceRepository,
    UserRepository,
)
from hostel_ops.roles import View
from .collections import CollectionSpec
from .room_service import RoomService
from .staff_service import StaffService
from .user_service import UserService
from .utility_service import UtilityCategoryService


def _by(*keys):
    return itemgetter(*keys)


_specs = [
    # Staff & HR
    CollectionSpec(
        name="staff", entity="Staff", label="staff member", model=m.Staff,
        fields=casing.STAFF_FIELDS, order_by=(m.Staff.name,), sort_key=_by("name"),
        view=View.staff, read_views=(View.activities, View.booking), admin_writes=True,
        title_field="name", service=StaffService,
    ),
    CollectionSpec(
        name="users", entity="User", label="user", model=m.User,
        fields=casing.USER_FIELDS, order_by=(m.User.username,), sort_key=_by("username"),
        view=View.users, admin_writes=True, title_field="username",
        repository=UserRepository, service=UserService,
    ),
    CollectionSpec(
        name="shifts", entity="Shift", label="shift", model=m.Shift,
        fields=casing.SHIFT_FIELDS, order_by=(m.Shift.date.desc(),), sort_key=_by("date"),
        reverse=True, view=View.staff, admin_writes=True,
    ),
    CollectionSpec(
        name="tasks", entity="Task", label="task", model=m.Task,
        fields=casing.TASK_FIELDS, order_by=(m.Task.due_date,), sort_key=_by("dueDate"),
        view=View.staff, admin_writes=True,
    ),
    CollectionSpec(
        name="absences", entity="Absence", label="absence", model=m.Absence,
        fields=casing.ABSENCE_FIELDS, order_by=(m.Absence.date.desc(),), sort_key=_by("date"),
        reverse=True, view=View.staff, admin_writes=True, repository=AbsenceRepository,
    ),
    CollectionSpec(
        name="salary-advances", entity="SalaryAdvance", label="salary advance",
        model=m.SalaryAdvance, fields=casing.SALARY_ADVANCE_FIELDS,
        order_by=(m.SalaryAdvance.date.desc(),), sort_key=_by("date"), reverse=True,
        view=View.staff, admin_writes=True, repository=SalaryAdvanceRepository,
    ),
    # Rooms & accommodation
    CollectionSpec(
        name="rooms", entity="Room", label="room", model=m.Room,
        fields=casing.ROOM_FIELDS, order_by=(m.Room.name,), sort_key=_by("name"),
        view=View.rooms, title_field="name", repository=RoomRepository,
        service=RoomService,
    ),
    CollectionSpec(
        name="walk-in-guests", entity="WalkInGuest", label="walk-in guest", model=m.WalkInGuest,
        fields=casing.WALK_IN_GUEST_FIELDS, order_by=(m.WalkInGuest.check_in_date.desc(),),
        sort_key=_by("checkInDate"), reverse=True, view=View.rooms, title_field="guestName",
    ),
    CollectionSpec(
        name="accommodation-bookings", entity="AccommodationBooking",
        label="accommodation booking", model=m.AccommodationBooking,
        fields=casing.ACCOMMODATION_BOOKING_FIELDS,
        order_by=(m.AccommodationBooking.check_in_date.desc(),),
        sort_key=_by("checkInDate"), reverse=True, view=View.rooms, title_field="guestName",
    ),
    # Utilities
    CollectionSpec(
        name="utility-records", entity="UtilityRecord", label="utility record",
        model=m.UtilityRecord, fields=casing.UTILITY_RECORD_FIELDS,
        order_by=(m.UtilityRecord.date.desc(),), sort_key=_by("date"), reverse=True,
        view=View.utilities,
    ),
    CollectionSpec(
        name="utility-categories", entity="UtilityCategory", label="category",
        model=m.UtilityCategory, fields=casing.UTILITY_CATEGORY_FIELDS,
        order_by=(m.UtilityCategory.name,), sort_key=_by("name"),
        view=View.utilities, title_field="name", service=UtilityCategoryService,
    ),
    # Catalog
    CollectionSpec(
        name="activities", entity="Activity", label="activity", model=m.Activity,
        fields=casing.ACTIVITY_FIELDS, order_by=(m.Activity.name,), sort_key=_by("name"),
        view=View.activities, read_views=(View.booking,), admin_writes=True, title_field="name",
    ),
    CollectionSpec(
        name="speed-boat-trips", entity="SpeedBoatTrip", label="speed boat trip",
        model=m.SpeedBoatTrip, fields=casing.SPEED_BOAT_TRIP_FIELDS,
        order_by=(m.SpeedBoatTrip.route,), sort_key=_by("route"),
        view=View.activities, read_views=(View.booking,), admin_writes=True, title_field="route",
    ),
    CollectionSpec(
        name="taxi-boat-options", entity="TaxiBoatOption", label="taxi boat option",
        model=m.TaxiBoatOption, fields=casing.TAXI_BOAT_OPTION_FIELDS,
        order_by=(m.TaxiBoatOption.name,), sort_key=_by("name"),
        view=View.activities, read_views=(View.booking,), admin_writes=True, title_field="name",
    ),
    CollectionSpec(
        name="extras", entity="Extra", label="extra", model=m.Extra,
        fields=casing.EXTRA_FIELDS, order_by=(m.Extra.name,), sort_key=_by("name"),
        view=View.activities, read_views=(View.booking,), admin_writes=True, title_field="name",
    ),
    CollectionSpec(
        name="payment-types", entity="PaymentType", label="payment type", model=m.PaymentType,
        fields=casing.PAYMENT_TYPE_FIELDS, order_by=(m.PaymentType.name,), sort_key=_by("name"),
        view=View.booking, read_views=(View.rooms, View.activities), admin_writes=True,
        title_field="name",
    ),
    # Sales
    CollectionSpec(
        name="bookings", entity="Booking", label="booking", model=m.Booking,
        fields=casing.BOOKING_FIELDS,
        order_by=(m.Booking.booking_date.desc(), m.Booking.created_at.desc()),
        sort_key=_by("bookingDate", "createdAt"), reverse=True,
        view=View.booking, read_views=(View.activities,), generic_writes=False,
        repository=BookingRepository,
    ),
    CollectionSpec(
        name="external-sales", entity="ExternalSale", label="external sale",
        model=m.ExternalSale, fields=casing.EXTERNAL_SALE_FIELDS,
        order_by=(m.ExternalSale.date.desc(),), sort_key=_by("date"), reverse=True,
        view=View.booking,
    ),
    CollectionSpec(
        name="platform-payments", entity="PlatformPayment", label="platform payment",
        model=m.PlatformPayment, fields=casing.PLATFORM_PAYMENT_FIELDS,
        order_by=(m.PlatformPayment.date.desc(),), sort_key=_by("date"), reverse=True,
        view=View.booking,
    ),
]

COLLECTIONS: Dict[str, CollectionSpec] = {spec.name: spec for spec in _specs}


def get_collection(name: str) -> CollectionSpec:
    return COLLECTIONS[name]
