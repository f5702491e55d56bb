from typing import Annotated, List, Literal, Optional, Union
from datetime import date
from decimal import Decimal
from pydantic import Field, RootModel

from .base import CamelModel


class ExtraLineIn(CamelModel):
    """Add-on sold with an activity; only name and price are stored"""
    name: str
    price: Decimal


class SaleBase(CamelModel):
    """Fields every sale carries. Prices, costs and commissions are computed
    server side and are not accepted here."""
    staff_id: str
    booking_date: date
    payment_method: str
    receipt_image: Optional[str] = None


class ActivitySale(SaleBase):
    item_type: Literal["activity"] = "activity"
    activity_id: str
    number_of_people: int
    discount: Optional[Decimal] = None
    extras: List[ExtraLineIn] = []
    fuel_cost: Optional[Decimal] = None
    captain_cost: Optional[Decimal] = None
    employee_commission: Optional[Decimal] = Field(None, description="Per person rate overriding the catalog")


class SpeedBoatSale(SaleBase):
    item_type: Literal["speedboat"] = "speedboat"
    trip_id: str
    number_of_people: int
    employee_commission: Optional[Decimal] = None


class PrivateTourSale(SaleBase):
    item_type: Literal["private_tour"] = "private_tour"
    tour_type: Literal["Half Day", "Full Day"]
    price: Decimal
    number_of_people: int
    fuel_cost: Optional[Decimal] = None
    captain_cost: Optional[Decimal] = None
    employee_commission: Optional[Decimal] = Field(None, description="Flat amount for the whole tour")
    hostel_commission: Optional[Decimal] = None


class ExtraSale(SaleBase):
    item_type: Literal["extra"] = "extra"
    extra_id: str
    quantity: int = 1
    employee_commission: Optional[Decimal] = None


class TaxiBoatSale(SaleBase):
    item_type: Literal["taxi_boat"] = "taxi_boat"
    option_id: str
    number_of_people: int
    employee_commission: Optional[Decimal] = None


class BookingReplace(RootModel[Annotated[
    Union[ActivitySale, SpeedBoatSale, PrivateTourSale, ExtraSale, TaxiBoatSale],
    Field(discriminator="item_type"),
]]):
    """Body of PUT /bookings/{id}: itemType selects the sale shape"""

