"""
Unit tests for CalendarSession: save-on-change, selection and async import.
"""

import asyncio
import json

import pytest
from advent.core import day_store
from advent.core.errors import OutOfRange, ParseError, PersistError
from advent.core.persistence import MemoryStorage, serialize
from advent.core.session import CalendarSession
from advent.models.record import DayRecord


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail (e.g. disk full)."""

    def save(self, snapshot):
        raise PersistError("quota exceeded")


def test_open_fresh_and_from_storage():
    """open() starts fresh without data and restores saved data otherwise."""
    assert CalendarSession.open(MemoryStorage(), 24).store == day_store.create(24)
    saved = day_store.set_day(day_store.create(6), 6, DayRecord(title="Saved"))
    session = CalendarSession.open(MemoryStorage(serialize(saved)), 24)
    assert session.days == 6
    assert session.get(6).title == "Saved"


def test_every_mutation_saves():
    """Each successful mutation writes a snapshot."""
    storage = MemoryStorage()
    session = CalendarSession.open(storage, 5)
    assert session.set_field(2, "title", "Elf")
    assert session.set_field(2, "rating", "15")
    session.clear_day(3)
    session.resize(4)
    session.reset_all()
    assert storage.saves == 5
    assert storage.snapshot["days"] == 4


def test_set_field_normalizes_rating():
    session = CalendarSession.open(MemoryStorage(), 5)
    session.set_field(1, "rating", "15")
    assert session.get(1).rating == 10
    session.set_field(1, "rating", "abc")
    assert session.get(1).rating is None


def test_save_failure_keeps_memory_state():
    """A failed save is reported but the edit stays in memory."""
    session = CalendarSession.open(FailingStorage(), 5)
    assert session.set_field(1, "title", "Unsaved") is False
    assert session.get(1).title == "Unsaved"
    assert isinstance(session.last_save_error, PersistError)


def test_out_of_range_edit_changes_nothing():
    storage = MemoryStorage()
    session = CalendarSession.open(storage, 3)
    with pytest.raises(OutOfRange):
        session.set_field(4, "title", "x")
    assert storage.saves == 0
    assert session.store == day_store.create(3)


def test_failed_import_does_not_save():
    """A parse error leaves the store unchanged and writes nothing."""
    storage = MemoryStorage()
    session = CalendarSession.open(storage, 3)
    session.set_field(1, "title", "A")
    before = session.store
    with pytest.raises(ParseError):
        session.import_json("{not json")
    assert session.store == before
    assert storage.saves == 1


def test_selection_lifecycle():
    """Selecting, clearing the selected day and resetting close the editor."""
    session = CalendarSession.open(MemoryStorage(), 5)
    assert session.select("03") == "3"
    session.set_field(3, "title", "Klaus")
    assert session.selected_record().title == "Klaus"
    session.clear_day(3)
    assert session.selected_day is None
    session.select(2)
    session.reset_all()
    assert session.selected_day is None
    with pytest.raises(OutOfRange):
        session.select(9)


def test_clearing_other_day_keeps_selection():
    session = CalendarSession.open(MemoryStorage(), 5)
    session.select(2)
    session.clear_day(4)
    assert session.selected_day == "2"


def test_resize_drops_stale_selection():
    """Shrinking below the selected day clears the selection."""
    session = CalendarSession.open(MemoryStorage(), 10)
    session.select(8)
    session.resize(5)
    assert session.selected_day is None
    session.select(4)
    session.resize(6)
    assert session.selected_day == "4"


def test_import_from_merges_into_store_at_resolution():
    """An import that resolves after a resize merges into the resized store."""
    session = CalendarSession.open(MemoryStorage(), 10)

    async def scenario():
        released = asyncio.Event()

        async def fetch():
            await released.wait()
            return '{"2": {"title": "Two"}, "8": {"title": "Eight"}}'

        task = asyncio.ensure_future(session.import_from(fetch, "json"))
        await asyncio.sleep(0)
        session.resize(5)
        released.set()
        return await task

    result = asyncio.run(scenario())
    assert session.days == 5
    assert session.get(2).title == "Two"
    assert result.ignored == ["8"]


def test_share_round_trip_through_session():
    session = CalendarSession.open(MemoryStorage(), 4)
    session.set_field(4, "notes", "snow")
    token = session.share_token()
    other = CalendarSession.open(MemoryStorage(), 24)
    other.load_shared(token)
    assert other.store == session.store
    before = other.store
    with pytest.raises(ParseError):
        other.load_shared("###")
    assert other.store == before


def test_export_json_is_importable():
    """export_json output can be imported back unchanged."""
    session = CalendarSession.open(MemoryStorage(), 3)
    session.set_day(2, DayRecord(title="B", rating=3, notes="n", service="Disney+"))
    exported = session.export_json()
    other = CalendarSession.open(MemoryStorage(), 3)
    other.import_json(json.dumps(exported))
    assert other.store == session.store
