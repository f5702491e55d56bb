"""Declared key mappings between store rows and in-memory records.

Rows coming out of the database use snake_case column names; records held in
the application state and sent to the dashboard use camelCase. Every entity
declares its field list exactly once here, so a key that is not declared is
rejected instead of silently passing through with the wrong casing.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic.alias_generators import to_camel

from .core.exceptions import ValidationError


class FieldMap:
    """Bidirectional snake_case <-> camelCase mapping for one entity shape."""

    def __init__(
        self,
        entity: str,
        fields: Iterable[str],
        nested: Optional[Mapping[str, "FieldMap"]] = None,
    ):
        self.entity = entity
        self.nested: Dict[str, FieldMap] = dict(nested or {})
        self.snake_to_camel: Dict[str, str] = {name: to_camel(name) for name in fields}
        self.camel_to_snake: Dict[str, str] = {v: k for k, v in self.snake_to_camel.items()}
        if len(self.camel_to_snake) != len(self.snake_to_camel):
            raise ValueError(f"{entity}: two fields map to the same camelCase key")
        missing = set(self.nested) - set(self.snake_to_camel)
        if missing:
            raise ValueError(f"{entity}: nested shapes declared for unknown fields {sorted(missing)}")

    @property
    def fields(self) -> list:
        return list(self.snake_to_camel)

    def to_record(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        """snake_case row -> camelCase record"""
        record = {}
        for key, value in row.items():
            if key not in self.snake_to_camel:
                raise ValidationError(f"Unknown field '{key}' for {self.entity}", field=key)
            if key in self.nested:
                value = self._map_nested(self.nested[key].to_record, value)
            record[self.snake_to_camel[key]] = value
        return record

    def to_row(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """camelCase record -> snake_case row"""
        row = {}
        for key, value in record.items():
            if key not in self.camel_to_snake:
                raise ValidationError(f"Unknown field '{key}' for {self.entity}", field=key)
            snake = self.camel_to_snake[key]
            if snake in self.nested:
                value = self._map_nested(self.nested[snake].to_row, value)
            row[snake] = value
        return row

    @staticmethod
    def _map_nested(convert, value):
        if value is None:
            return None
        if isinstance(value, list):
            return [convert(item) for item in value]
        return convert(value)


EXTRA_LINE_FIELDS = FieldMap("ExtraLine", ("name", "price"))
BED_FIELDS = FieldMap("Bed", ("id", "number", "status"))

STAFF_FIELDS = FieldMap("Staff", (
    "id", "name", "role", "salary", "contact", "employee_id", "phone", "thai_id",
    "address", "emergency_contact", "birthday", "id_photo_url",
))
USER_FIELDS = FieldMap("User", ("id", "username", "role", "staff_id", "is_active", "created_at"))
SHIFT_FIELDS = FieldMap("Shift", ("id", "date", "staff_name", "start_time", "end_time"))
TASK_FIELDS = FieldMap("Task", ("id", "description", "assigned_to", "due_date", "status"))
ABSENCE_FIELDS = FieldMap("Absence", ("id", "staff_id", "date", "reason"))
SALARY_ADVANCE_FIELDS = FieldMap("SalaryAdvance", ("id", "staff_id", "date", "amount", "reason"))
ROOM_FIELDS = FieldMap(
    "Room",
    ("id", "name", "condition", "maintenance_notes", "beds"),
    nested={"beds": BED_FIELDS},
)
UTILITY_RECORD_FIELDS = FieldMap("UtilityRecord", ("id", "utility_type", "date", "cost", "bill_image"))
UTILITY_CATEGORY_FIELDS = FieldMap("UtilityCategory", ("id", "name"))
ACTIVITY_FIELDS = FieldMap("Activity", (
    "id", "name", "description", "price", "image_url", "commission", "type", "company_cost",
))
SPEED_BOAT_TRIP_FIELDS = FieldMap("SpeedBoatTrip", ("id", "route", "company", "price", "cost", "commission"))
TAXI_BOAT_OPTION_FIELDS = FieldMap("TaxiBoatOption", ("id", "name", "price", "commission"))
EXTRA_FIELDS = FieldMap("Extra", ("id", "name", "price", "commission"))
PAYMENT_TYPE_FIELDS = FieldMap("PaymentType", ("id", "name"))
BOOKING_FIELDS = FieldMap(
    "Booking",
    (
        "id", "item_id", "item_type", "item_name", "staff_id", "booking_date",
        "customer_price", "number_of_people", "discount", "extras", "extras_total",
        "payment_method", "receipt_image", "fuel_cost", "captain_cost", "item_cost",
        "employee_commission", "hostel_commission", "created_at",
    ),
    nested={"extras": EXTRA_LINE_FIELDS},
)
EXTERNAL_SALE_FIELDS = FieldMap("ExternalSale", ("id", "date", "amount", "description"))
PLATFORM_PAYMENT_FIELDS = FieldMap("PlatformPayment", ("id", "date", "platform", "amount", "booking_reference"))
WALK_IN_GUEST_FIELDS = FieldMap("WalkInGuest", (
    "id", "guest_name", "room_id", "bed_number", "check_in_date", "number_of_nights",
    "price_per_night", "amount_paid", "payment_method", "nationality", "id_number",
    "notes", "status",
))
ACCOMMODATION_BOOKING_FIELDS = FieldMap("AccommodationBooking", (
    "id", "guest_name", "platform", "room_id", "bed_number", "check_in_date",
    "number_of_nights", "total_price", "amount_paid", "status",
))

ENTITY_FIELDS: Dict[str, FieldMap] = {
    fm.entity: fm
    for fm in (
        STAFF_FIELDS, USER_FIELDS, SHIFT_FIELDS, TASK_FIELDS, ABSENCE_FIELDS,
        SALARY_ADVANCE_FIELDS, ROOM_FIELDS, BED_FIELDS, UTILITY_RECORD_FIELDS,
        UTILITY_CATEGORY_FIELDS, ACTIVITY_FIELDS, SPEED_BOAT_TRIP_FIELDS,
        TAXI_BOAT_OPTION_FIELDS, EXTRA_FIELDS, EXTRA_LINE_FIELDS, PAYMENT_TYPE_FIELDS,
        BOOKING_FIELDS, EXTERNAL_SALE_FIELDS, PLATFORM_PAYMENT_FIELDS,
        WALK_IN_GUEST_FIELDS, ACCOMMODATION_BOOKING_FIELDS,
    )
}
