"""Booking pricing & commission rules, one function per item type.

Every function is a pure transformation: catalog entry + sale inputs in,
``PricedBooking`` out. Nothing here touches the database; the booking service
resolves catalog rows and persists the resulting record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from hostel_ops.core.exceptions import ValidationError


ZERO = Decimal("0")
PRIVATE_TOUR_ID = "private_tour"

# Extras whose quantity is a duration rather than a count
QUANTITY_UNITS = {
    "paddle_hour": "hours",
    "paddle_day": "days",
}

BOOKING_FIELDS = (
    "item_id", "item_type", "item_name", "staff_id", "booking_date",
    "customer_price", "number_of_people", "discount", "extras", "extras_total",
    "payment_method", "receipt_image", "fuel_cost", "captain_cost", "item_cost",
    "employee_commission", "hostel_commission",
)


@dataclass(frozen=True)
class Sale:
    """Who sold, when, and how the customer paid."""

    staff_id: str
    staff_name: str
    booking_date: date
    payment_method: str
    receipt_image: Optional[str] = None


@dataclass(frozen=True)
class ExtraLine:
    """Add-on sold together with an activity; only name and price are kept."""

    name: str
    price: Decimal


@dataclass
class PricedBooking:
    record: Dict[str, Any]
    summary: str
    final_price: Decimal = field(default=ZERO)


def format_amount(value: Any, currency: str = "THB") -> str:
    """Render an amount the way confirmations show it: ``2100 THB``, ``12.50 THB``."""
    amount = to_decimal(value) or ZERO
    if amount == amount.to_integral_value():
        text = str(int(amount))
    else:
        text = format(amount.quantize(Decimal("0.01")), "f")
    return f"{text} {currency}"


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _money(value: Any, field_name: str) -> Optional[Decimal]:
    amount = to_decimal(value)
    if amount is not None and amount < 0:
        raise ValidationError(f"{field_name} must not be negative", field=field_name)
    return amount


def check_quantity(value: int, field_name: str = "numberOfPeople") -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field_name} must be a positive integer", field=field_name)
    return value


def _rate(override: Any, catalog_rate: Any) -> Optional[Decimal]:
    """Per-sale rate wins over the catalog's stored one."""
    rate = _money(override, "employeeCommission")
    if rate is None:
        rate = to_decimal(catalog_rate)
    return rate


def _record(item_type: str, item_id: str, item_name: str, sale: Sale, **values: Any) -> Dict[str, Any]:
    record = dict.fromkeys(BOOKING_FIELDS)
    record.update(
        item_type=item_type,
        item_id=item_id,
        item_name=item_name,
        staff_id=sale.staff_id,
        booking_date=sale.booking_date,
        payment_method=sale.payment_method,
        receipt_image=sale.receipt_image,
    )
    record.update(values)
    return record


def price_activity(
    activity: Any,
    sale: Sale,
    *,
    number_of_people: int,
    discount: Any = None,
    extras: Iterable[Any] = (),
    fuel_cost: Any = None,
    captain_cost: Any = None,
    commission: Any = None,
    currency: str = "THB",
) -> PricedBooking:
    """Price an activity sale.

    Internal activities cost fuel + captain (unset when that is 0); External
    ones cost ``company_cost`` per person (unset when 0). The discount only
    lowers the displayed final price; ``customer_price`` and the commission
    are computed before it.
    """
    people = check_quantity(number_of_people)
    unit_price = to_decimal(activity.price) or ZERO
    discount = _money(discount, "discount")
    fuel_cost = _money(fuel_cost, "fuelCost")
    captain_cost = _money(captain_cost, "captainCost")

    lines = [
        ExtraLine(name=extra.name, price=_money(extra.price, "extras.price") or ZERO)
        for extra in extras
    ]
    extras_total = sum((line.price for line in lines), ZERO)

    rate = _rate(commission, getattr(activity, "commission", None))
    employee_commission = (rate or ZERO) * people

    if activity.type == "Internal":
        internal_cost = (fuel_cost or ZERO) + (captain_cost or ZERO)
        item_cost = internal_cost if internal_cost > 0 else None
    else:
        external_cost = (to_decimal(activity.company_cost) or ZERO) * people
        item_cost = external_cost if external_cost > 0 else None

    customer_price = unit_price * people
    final_price = customer_price + extras_total - (discount or ZERO)
    if final_price < 0:
        raise ValidationError("discount must not exceed the price plus extras", field="discount")

    record = _record(
        "activity", activity.id, activity.name, sale,
        customer_price=customer_price,
        number_of_people=people,
        discount=discount,
        extras=[{"name": line.name, "price": float(line.price)} for line in lines],
        extras_total=extras_total,
        fuel_cost=fuel_cost,
        captain_cost=captain_cost,
        item_cost=item_cost,
        employee_commission=employee_commission,
    )

    fmt = lambda v: format_amount(v, currency)  # noqa: E731
    if activity.type == "Internal":
        cost_breakdown = f"\nFuel Cost: {fmt(fuel_cost)}\nCaptain Cost: {fmt(captain_cost)}"
    else:
        cost_breakdown = f"\nCompany Cost: {fmt(item_cost)}"

    summary = (
        f"Booking confirmed for {activity.name} by {sale.staff_name}!\n\n"
        f"Booking Date: {sale.booking_date.isoformat()}\n"
        f"{people} person(s) x {fmt(unit_price)} = {fmt(customer_price)}\n"
        f"Extras: {fmt(extras_total)}\n"
        f"Discount: {fmt(discount)}\n"
        f"Final Price: {fmt(final_price)}\n"
        f"Payment Method: {sale.payment_method}"
        f"{cost_breakdown}\n"
        f"Employee Commission: {fmt(employee_commission)}"
    )
    return PricedBooking(record=record, summary=summary, final_price=final_price)


def price_speedboat(
    trip: Any,
    sale: Sale,
    *,
    number_of_people: int,
    commission: Any = None,
    currency: str = "THB",
) -> PricedBooking:
    """Price a speed boat transfer; its cost is stored even when it is 0."""
    people = check_quantity(number_of_people)
    unit_price = to_decimal(trip.price) or ZERO
    customer_price = unit_price * people
    item_cost = (to_decimal(trip.cost) or ZERO) * people
    employee_commission = (_rate(commission, getattr(trip, "commission", None)) or ZERO) * people

    record = _record(
        "speedboat", trip.id, f"{trip.route} ({trip.company})", sale,
        customer_price=customer_price,
        number_of_people=people,
        item_cost=item_cost,
        employee_commission=employee_commission,
    )

    fmt = lambda v: format_amount(v, currency)  # noqa: E731
    summary = (
        f"Booking confirmed for {trip.route} by {sale.staff_name}!\n\n"
        f"Booking Date: {sale.booking_date.isoformat()}\n"
        f"{people} person(s) x {fmt(unit_price)} = {fmt(customer_price)}\n"
        f"Final Price: {fmt(customer_price)}\n"
        f"Payment Method: {sale.payment_method}\n"
        f"Boat Cost: {fmt(item_cost)}\n\n"
        f"Employee Commission: {fmt(employee_commission)}"
    )
    return PricedBooking(record=record, summary=summary, final_price=customer_price)


def price_private_tour(
    tour_type: str,
    price: Any,
    sale: Sale,
    *,
    number_of_people: int,
    fuel_cost: Any = None,
    captain_cost: Any = None,
    employee_commission: Any = None,
    hostel_commission: Any = None,
    currency: str = "THB",
) -> PricedBooking:
    """Price a private tour: a negotiated flat price with flat commissions."""
    people = check_quantity(number_of_people)
    customer_price = _money(price, "price")
    if customer_price is None:
        raise ValidationError("price is required for a private tour", field="price")
    fuel_cost = _money(fuel_cost, "fuelCost")
    captain_cost = _money(captain_cost, "captainCost")
    employee_commission = _money(employee_commission, "employeeCommission")
    hostel_commission = _money(hostel_commission, "hostelCommission")
    item_cost = (fuel_cost or ZERO) + (captain_cost or ZERO)

    record = _record(
        "private_tour", PRIVATE_TOUR_ID, f"Private Tour - {tour_type}", sale,
        customer_price=customer_price,
        number_of_people=people,
        fuel_cost=fuel_cost,
        captain_cost=captain_cost,
        item_cost=item_cost,
        employee_commission=employee_commission,
        hostel_commission=hostel_commission,
    )

    fmt = lambda v: format_amount(v, currency)  # noqa: E731
    summary = (
        f"Private Tour booking confirmed by {sale.staff_name}!\n\n"
        f"Booking Date: {sale.booking_date.isoformat()}\n"
        f"Type: {tour_type}\n"
        f"For: {people} person(s)\n"
        f"Price: {fmt(customer_price)}\n"
        f"Final Price: {fmt(customer_price)}\n"
        f"Payment Method: {sale.payment_method}\n\n"
        f"Fuel Cost: {fmt(fuel_cost)}\n"
        f"Captain Cost: {fmt(captain_cost)}\n"
        f"Hostel Commission: {fmt(hostel_commission)}\n"
        f"Employee Commission: {fmt(employee_commission)}"
    )
    return PricedBooking(record=record, summary=summary, final_price=customer_price)


def extra_display_name(extra_id: str, name: str, quantity: int) -> str:
    """Stored name for a standalone extra; purely cosmetic."""
    if quantity <= 1:
        return name
    unit = QUANTITY_UNITS.get(extra_id)
    if unit:
        return f"{name} ({quantity} {unit})"
    return f"{name} (x{quantity})"


def price_standalone_extra(
    extra: Any,
    sale: Sale,
    *,
    quantity: int = 1,
    commission: Any = None,
    currency: str = "THB",
) -> PricedBooking:
    """Price an extra sold on its own (paddle board hire, towels, ...)."""
    quantity = check_quantity(quantity, "quantity")
    unit_price = to_decimal(extra.price) or ZERO
    customer_price = unit_price * quantity
    rate = _rate(commission, getattr(extra, "commission", None))
    employee_commission = rate * quantity if rate else None
    item_name = extra_display_name(extra.id, extra.name, quantity)

    record = _record(
        "extra", extra.id, item_name, sale,
        customer_price=customer_price,
        number_of_people=quantity,
        employee_commission=employee_commission,
    )

    fmt = lambda v: format_amount(v, currency)  # noqa: E731
    summary = (
        f"Sold {item_name} by {sale.staff_name} on {sale.booking_date.isoformat()}.\n"
        f"{quantity} x {fmt(unit_price)} = {fmt(customer_price)}\n"
        f"Final Price: {fmt(customer_price)}\n"
        f"Payment Method: {sale.payment_method}"
    )
    if employee_commission:
        summary += f"\nEmployee Commission: {fmt(employee_commission)}"
    return PricedBooking(record=record, summary=summary, final_price=customer_price)


def price_taxi_boat(
    option: Any,
    sale: Sale,
    *,
    number_of_people: int,
    commission: Any = None,
    currency: str = "THB",
) -> PricedBooking:
    people = check_quantity(number_of_people)
    unit_price = to_decimal(option.price) or ZERO
    customer_price = unit_price * people
    employee_commission = (_rate(commission, getattr(option, "commission", None)) or ZERO) * people

    record = _record(
        "taxi_boat", option.id, f"Taxi Boat - {option.name}", sale,
        customer_price=customer_price,
        number_of_people=people,
        employee_commission=employee_commission,
    )

    fmt = lambda v: format_amount(v, currency)  # noqa: E731
    summary = (
        f"Taxi Boat ({option.name}) booked by {sale.staff_name} on {sale.booking_date.isoformat()}.\n"
        f"{people} person(s) x {fmt(unit_price)} = {fmt(customer_price)}\n"
        f"Final Price: {fmt(customer_price)}\n"
        f"Payment Method: {sale.payment_method}\n"
        f"Employee Commission: {fmt(employee_commission)}"
    )
    return PricedBooking(record=record, summary=summary, final_price=customer_price)
