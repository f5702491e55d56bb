from hostel_ops.state import AppState, Collection


def _staff():
    collection = Collection("staff", sort_key=lambda r: r["name"])
    collection.load([{"id": "1", "name": "Aom"}, {"id": "2", "name": "Nok"}])
    return collection


def test_insert_keeps_display_order():
    collection = _staff()
    collection.apply_insert({"id": "3", "name": "Bee"})
    assert [r["name"] for r in collection.all()] == ["Aom", "Bee", "Nok"]


def test_replace_swaps_record_by_id():
    collection = _staff()
    collection.apply_replace({"id": "1", "name": "Zed"})
    assert [r["name"] for r in collection.all()] == ["Nok", "Zed"]


def test_double_delete_leaves_other_rows_alone():
    collection = _staff()
    assert collection.apply_delete("1") is True
    assert collection.apply_delete("1") is False
    assert collection.all() == [{"id": "2", "name": "Nok"}]


def test_reverse_order_with_missing_keys():
    collection = Collection("shifts", sort_key=lambda r: r.get("date"), reverse=True)
    collection.load([])
    collection.apply_insert({"id": "a", "date": "2024-01-01"})
    collection.apply_insert({"id": "b", "date": None})
    collection.apply_insert({"id": "c", "date": "2024-02-01"})
    assert [r["id"] for r in collection.all()] == ["c", "a", "b"]


def test_all_returns_a_copy():
    collection = _staff()
    collection.all().clear()
    assert len(collection.all()) == 2


def test_register_is_idempotent_and_invalidate_all():
    state = AppState()
    first = state.register("rooms")
    first.load([{"id": "r1"}])
    assert state.register("rooms") is first
    assert "rooms" in state
    state.invalidate_all()
    assert not state.collection("rooms").loaded
    assert state.collection("rooms").all() == []
