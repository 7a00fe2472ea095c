"""
Unit tests for DayRecord and rating normalization.
"""

import pytest
from advent.models.record import DayRecord, normalize_rating


def test_empty_record_has_defaults():
    """An empty record has blank text fields and an unset rating."""
    record = DayRecord.empty()
    assert record == DayRecord(title="", rating=None, notes="", service="")
    assert not record.is_filled()


def test_is_filled_any_field():
    """Any non-default field marks the record as filled."""
    assert DayRecord(title="Elf").is_filled()
    assert DayRecord(notes="cosy").is_filled()
    assert DayRecord(service="Netflix").is_filled()
    assert DayRecord(rating=1).is_filled()


def test_set_field_rating_clamps_and_truncates():
    """Ratings clamp to 1..10 and truncate to int."""
    record = DayRecord.empty()
    assert record.set_field("rating", "15").rating == 10
    assert record.set_field("rating", "0").rating == 1
    assert record.set_field("rating", 7.9).rating == 7
    assert record.set_field("rating", " 4 ").rating == 4


def test_set_field_rating_unset_on_bad_input():
    """Blank, non-numeric and non-finite input leaves the rating unset."""
    record = DayRecord(rating=5)
    assert record.set_field("rating", "abc").rating is None
    assert record.set_field("rating", "").rating is None
    assert record.set_field("rating", None).rating is None
    assert normalize_rating("nan") is None
    assert normalize_rating(float("inf")) is None
    assert normalize_rating(True) is None


def test_set_field_returns_copy():
    """set_field leaves the original record untouched."""
    original = DayRecord(title="Elf", rating=8)
    updated = original.set_field("title", "Klaus")
    assert original.title == "Elf"
    assert updated == DayRecord(title="Klaus", rating=8)


def test_set_field_unknown_field():
    """Unknown field names are rejected."""
    with pytest.raises(ValueError):
        DayRecord.empty().set_field("director", "x")


def test_service_is_free_text():
    """Services outside the suggested list round-trip unchanged."""
    record = DayRecord.from_dict({"service": "Local cinema"})
    assert DayRecord.from_dict(record.to_dict()) == record


def test_from_dict_partial_and_legacy_rating():
    """Missing fields default; string ratings from old saves are coerced."""
    record = DayRecord.from_dict({"title": "Home Alone", "rating": "8", "extra": 1})
    assert record == DayRecord(title="Home Alone", rating=8)
    assert DayRecord.from_dict({"rating": ""}).rating is None
