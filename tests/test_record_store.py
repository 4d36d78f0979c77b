import pytest
from pydantic import ValidationError

from partsearch.store.record_store import RecordStore


def test_lookup_by_id(toyota_store):
    assert toyota_store.lookup("A1").short_description == "sensor oxigeno"
    assert toyota_store.lookup("ZZZ") is None


def test_count_and_iteration(toyota_store):
    assert toyota_store.count() == 2
    assert len(toyota_store) == 2
    assert [r.product_id for r in toyota_store] == ["A1", "A2"]


def test_distinct_values_are_sorted_and_unique(make_record):
    store = RecordStore(
        [
            make_record("1", "Toyota", "a", 2010, 2012, condition="Usado"),
            make_record("2", "Hyundai", "b", 2010, 2012, condition="Nuevo"),
            make_record("3", "Toyota", "c", 2010, 2012, condition="Nuevo"),
        ]
    )
    assert store.distinct_values("vehicle_brand") == ["Hyundai", "Toyota"]
    assert store.distinct_values("condition") == ["Nuevo", "Usado"]


def test_distinct_values_rejects_unknown_field(toyota_store):
    with pytest.raises(ValueError):
        toyota_store.distinct_values("price")


def test_first_record_wins_for_duplicate_ids(make_record):
    store = RecordStore(
        [make_record("X", "Toyota", "first", 2010, 2012), make_record("X", "Kia", "second", 2010, 2012)]
    )
    assert store.lookup("X").short_description == "first"
    assert store.count() == 2


def test_records_are_immutable(toyota_store):
    with pytest.raises(ValidationError):
        toyota_store.lookup("A1").vehicle_brand = "Kia"
    assert isinstance(toyota_store.records, tuple)
