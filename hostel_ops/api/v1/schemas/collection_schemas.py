"""Request bodies for the plain CRUD collections.

Bodies are complete records: an update replaces every field, so fields left
out fall back to the defaults below.
"""

from typing import Dict, List, Literal, Optional, Type
from datetime import date
from decimal import Decimal
from pydantic import Field

from .base import CamelModel

Money = Decimal
RoleName = Literal["Admin", "Staff"]


# ---------- Staff & HR ----------
class StaffIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    role: RoleName = "Staff"
    salary: Money = Field(Decimal("0"), ge=0)
    contact: str = ""
    employee_id: str = ""
    phone: Optional[str] = None
    thai_id: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    birthday: Optional[date] = None
    id_photo_url: Optional[str] = None


class UserCreate(CamelModel):
    """Password and username rules are checked by the user service"""
    username: str
    password: str
    role: RoleName = "Staff"
    staff_id: Optional[str] = None
    is_active: bool = True


class UserUpdate(CamelModel):
    username: str
    password: Optional[str] = Field(None, description="Leave empty to keep the current password")
    role: RoleName = "Staff"
    staff_id: Optional[str] = None
    is_active: bool = True


class ShiftIn(CamelModel):
    date: date
    staff_name: str = Field(..., min_length=1)
    start_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")


class TaskIn(CamelModel):
    description: str = Field(..., min_length=1)
    assigned_to: str
    due_date: date
    status: Literal["Pending", "In Progress", "Completed"] = "Pending"


class AbsenceIn(CamelModel):
    staff_id: str
    date: date
    reason: Optional[str] = None


class SalaryAdvanceIn(CamelModel):
    staff_id: str
    date: date
    amount: Money = Field(..., ge=0)
    reason: Optional[str] = None


# ---------- Rooms & accommodation ----------
class BedIn(CamelModel):
    id: Optional[str] = None
    number: int = Field(..., ge=1)
    status: Literal["Ready", "Needs Cleaning"] = "Ready"


class RoomIn(CamelModel):
    name: str = Field(..., min_length=1)
    condition: Literal["Excellent", "Good", "Fair", "Needs Repair"] = "Good"
    maintenance_notes: str = ""
    beds: List[BedIn] = []


class WalkInGuestIn(CamelModel):
    guest_name: str = Field(..., min_length=1)
    room_id: str
    bed_number: Optional[int] = None
    check_in_date: date
    number_of_nights: int = Field(..., ge=1)
    price_per_night: Money = Field(..., ge=0)
    amount_paid: Money = Field(Decimal("0"), ge=0)
    payment_method: str
    nationality: Optional[str] = None
    id_number: Optional[str] = None
    notes: Optional[str] = None
    status: Literal["Paid", "Deposit Paid", "Unpaid"] = "Unpaid"


class AccommodationBookingIn(CamelModel):
    guest_name: str = Field(..., min_length=1)
    platform: str
    room_id: str
    bed_number: Optional[int] = None
    check_in_date: date
    number_of_nights: int = Field(..., ge=1)
    total_price: Money = Field(..., ge=0)
    amount_paid: Money = Field(Decimal("0"), ge=0)
    status: Literal["Paid", "Deposit Paid", "Unpaid"] = "Unpaid"


# ---------- Utilities ----------
class UtilityRecordIn(CamelModel):
    utility_type: str = Field(..., min_length=1)
    date: date
    cost: Money = Field(..., ge=0)
    bill_image: Optional[str] = None


class UtilityCategoryIn(CamelModel):
    name: str


# ---------- Catalog ----------
class ActivityIn(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: Money = Field(..., ge=0)
    image_url: str = ""
    commission: Optional[Money] = Field(None, ge=0)
    type: Literal["Internal", "External"] = "Internal"
    company_cost: Optional[Money] = Field(None, ge=0)


class SpeedBoatTripIn(CamelModel):
    route: str = Field(..., min_length=1)
    company: str
    price: Money = Field(..., ge=0)
    cost: Money = Field(Decimal("0"), ge=0)
    commission: Optional[Money] = Field(None, ge=0)


class TaxiBoatOptionIn(CamelModel):
    name: Literal["One Way", "Round Trip"]
    price: Money = Field(..., ge=0)
    commission: Optional[Money] = Field(None, ge=0)


class ExtraIn(CamelModel):
    id: Optional[str] = Field(None, max_length=64, description="Optional code such as paddle_hour")
    name: str = Field(..., min_length=1)
    price: Money = Field(..., ge=0)
    commission: Optional[Money] = Field(None, ge=0)


class PaymentTypeIn(CamelModel):
    name: str = Field(..., min_length=1)


# ---------- Sales ----------
class ExternalSaleIn(CamelModel):
    date: date
    amount: Money = Field(..., ge=0)
    description: Optional[str] = None


class PlatformPaymentIn(CamelModel):
    date: date
    platform: str
    amount: Money = Field(..., ge=0)
    booking_reference: Optional[str] = None


# Request body per collection; users get separate create/update bodies
COLLECTION_SCHEMAS: Dict[str, Type[CamelModel]] = {
    "staff": StaffIn,
    "shifts": ShiftIn,
    "tasks": TaskIn,
    "absences": AbsenceIn,
    "salary-advances": SalaryAdvanceIn,
    "rooms": RoomIn,
    "walk-in-guests": WalkInGuestIn,
    "accommodation-bookings": AccommodationBookingIn,
    "utility-records": UtilityRecordIn,
    "utility-categories": UtilityCategoryIn,
    "activities": ActivityIn,
    "speed-boat-trips": SpeedBoatTripIn,
    "taxi-boat-options": TaxiBoatOptionIn,
    "extras": ExtraIn,
    "payment-types": PaymentTypeIn,
    "external-sales": ExternalSaleIn,
    "platform-payments": PlatformPaymentIn,
}
