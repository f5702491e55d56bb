from datetime import date
from decimal import Decimal

import pytest

from hostel_ops.casing import BOOKING_FIELDS, ENTITY_FIELDS, ROOM_FIELDS, STAFF_FIELDS, FieldMap
from hostel_ops.core import ValidationError
from hostel_ops.models import Base


def _sample_row(field_map: FieldMap) -> dict:
    row = {}
    for name in field_map.fields:
        if name in field_map.nested:
            row[name] = [_sample_row(field_map.nested[name])]
        else:
            row[name] = f"value-{name}"
    return row


@pytest.mark.parametrize("entity", sorted(ENTITY_FIELDS))
def test_round_trip_every_entity(entity):
    field_map = ENTITY_FIELDS[entity]
    row = _sample_row(field_map)
    record = field_map.to_record(row)
    assert field_map.to_row(record) == row
    assert field_map.to_record(field_map.to_row(record)) == record


def test_booking_keys_are_camel_case():
    record = BOOKING_FIELDS.to_record({
        "id": "b1",
        "customer_price": Decimal("2000"),
        "booking_date": date(2024, 3, 1),
        "extras": [{"name": "Snorkel", "price": 200.0}],
    })
    assert record == {
        "id": "b1",
        "customerPrice": Decimal("2000"),
        "bookingDate": date(2024, 3, 1),
        "extras": [{"name": "Snorkel", "price": 200.0}],
    }


def test_nested_beds_are_translated():
    row = ROOM_FIELDS.to_row({"name": "Dorm A", "maintenanceNotes": "", "beds": [{"number": 1, "status": "Ready"}]})
    assert row == {"name": "Dorm A", "maintenance_notes": "", "beds": [{"number": 1, "status": "Ready"}]}


def test_optional_nested_value_passes_through():
    assert BOOKING_FIELDS.to_record({"extras": None}) == {"extras": None}


def test_undeclared_key_is_rejected():
    with pytest.raises(ValidationError):
        STAFF_FIELDS.to_row({"name": "Nok", "favouriteColour": "blue"})
    with pytest.raises(ValidationError):
        STAFF_FIELDS.to_record({"name": "Nok", "favourite_colour": "blue"})


def test_colliding_fields_refused():
    with pytest.raises(ValueError):
        FieldMap("Broken", ("item_id", "itemId"))


@pytest.mark.parametrize("entity, table", [
    ("Staff", "staff"), ("Booking", "bookings"), ("Activity", "activities"),
    ("WalkInGuest", "walk_in_guests"), ("UtilityRecord", "utility_records"),
])
def test_field_maps_cover_table_columns(entity, table):
    columns = set(Base.metadata.tables[table].columns.keys())
    assert columns <= set(ENTITY_FIELDS[entity].fields)
