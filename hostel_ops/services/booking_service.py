from typing import Any, Mapping, Optional, Tuple
import logging

from hostel_ops.core import BaseService, NotFoundError, ValidationError, get_settings
from hostel_ops.models import Activity, Extra, SpeedBoatTrip, Staff, TaxiBoatOption
from hostel_ops.state import AppState, Record
from . import pricing
from .pricing import ExtraLine, PricedBooking, Sale
from .registry import get_collection

logger = logging.getLogger(__name__)

ITEM_TYPES = ("activity", "speedboat", "private_tour", "extra", "taxi_boat")
PRIVATE_TOUR_TYPES = ("Half Day", "Full Day")


class BookingService(BaseService):
    """Records sales: resolves catalog entry and seller, prices, persists.

    Requests are snake_case mappings (the sale schemas dumped by field name).
    Nothing is written when a lookup or validation fails.
    """

    def __init__(self, session, state: AppState, currency: Optional[str] = None):
        super().__init__(session)
        self.bookings = get_collection("bookings").make_service(session, state)
        self.currency = currency or get_settings().CURRENCY

    async def sell(self, item_type: str, request: Mapping[str, Any]) -> Tuple[Record, str]:
        """Price and store a new sale; returns the stored record and its summary"""
        priced = await self.price(item_type, request)
        saved = await self.bookings.insert_row(priced.record, action="save booking")
        logger.info(
            "Booking %s saved: %s x%s by %s",
            saved["id"], saved["itemName"], saved["numberOfPeople"], saved["staffId"],
        )
        return saved, priced.summary

    async def replace_booking(
        self, booking_id: str, item_type: str, request: Mapping[str, Any]
    ) -> Tuple[Record, str]:
        """Rerun the calculator over a full sale request and replace the record"""
        if await self.bookings.repository.get(booking_id) is None:
            raise NotFoundError("Booking", booking_id)
        priced = await self.price(item_type, request)
        saved = await self.bookings.replace_row(booking_id, priced.record, action="update booking")
        logger.info("Booking %s replaced", booking_id)
        return saved, priced.summary

    async def delete_booking(self, booking_id: str) -> None:
        await self.bookings.delete(booking_id)

    async def price(self, item_type: str, request: Mapping[str, Any]) -> PricedBooking:
        if item_type not in ITEM_TYPES:
            raise ValidationError(f"Unknown item type '{item_type}'", field="itemType")

        # quantities are checked before any lookup
        if item_type == "extra":
            pricing.check_quantity(request.get("quantity", 1), "quantity")
        else:
            pricing.check_quantity(request.get("number_of_people"))

        sale = await self._sale(request)
        handler = getattr(self, f"_price_{item_type}")
        return await handler(sale, request)

    async def _sale(self, request: Mapping[str, Any]) -> Sale:
        staff = await self._lookup(Staff, "Staff", request.get("staff_id"))
        payment_method = (request.get("payment_method") or "").strip()
        if not payment_method:
            raise ValidationError("Payment method is required", field="paymentMethod")
        return Sale(
            staff_id=staff.id,
            staff_name=staff.name,
            booking_date=request["booking_date"],
            payment_method=payment_method,
            receipt_image=request.get("receipt_image"),
        )

    async def _lookup(self, model: type, entity: str, item_id: Optional[str]):
        obj = await self.session.get(model, item_id) if item_id else None
        if obj is None:
            raise NotFoundError(entity, item_id)
        return obj

    async def _price_activity(self, sale: Sale, request: Mapping[str, Any]) -> PricedBooking:
        activity = await self._lookup(Activity, "Activity", request.get("activity_id"))
        extras = [
            ExtraLine(name=line["name"], price=line["price"])
            for line in request.get("extras") or []
        ]
        return pricing.price_activity(
            activity, sale,
            number_of_people=request["number_of_people"],
            discount=request.get("discount"),
            extras=extras,
            fuel_cost=request.get("fuel_cost"),
            captain_cost=request.get("captain_cost"),
            commission=request.get("employee_commission"),
            currency=self.currency,
        )

    async def _price_speedboat(self, sale: Sale, request: Mapping[str, Any]) -> PricedBooking:
        trip = await self._lookup(SpeedBoatTrip, "SpeedBoatTrip", request.get("trip_id"))
        return pricing.price_speedboat(
            trip, sale,
            number_of_people=request["number_of_people"],
            commission=request.get("employee_commission"),
            currency=self.currency,
        )

    async def _price_private_tour(self, sale: Sale, request: Mapping[str, Any]) -> PricedBooking:
        tour_type = request.get("tour_type")
        if tour_type not in PRIVATE_TOUR_TYPES:
            raise ValidationError(
                f"Tour type must be one of: {', '.join(PRIVATE_TOUR_TYPES)}", field="tourType"
            )
        return pricing.price_private_tour(
            tour_type, request.get("price"), sale,
            number_of_people=request["number_of_people"],
            fuel_cost=request.get("fuel_cost"),
            captain_cost=request.get("captain_cost"),
            employee_commission=request.get("employee_commission"),
            hostel_commission=request.get("hostel_commission"),
            currency=self.currency,
        )

    async def _price_extra(self, sale: Sale, request: Mapping[str, Any]) -> PricedBooking:
        extra = await self._lookup(Extra, "Extra", request.get("extra_id"))
        return pricing.price_standalone_extra(
            extra, sale,
            quantity=request.get("quantity", 1),
            commission=request.get("employee_commission"),
            currency=self.currency,
        )

    async def _price_taxi_boat(self, sale: Sale, request: Mapping[str, Any]) -> PricedBooking:
        option = await self._lookup(TaxiBoatOption, "TaxiBoatOption", request.get("option_id"))
        return pricing.price_taxi_boat(
            option, sale,
            number_of_people=request["number_of_people"],
            commission=request.get("employee_commission"),
            currency=self.currency,
        )

