"""Calendar session: the live store, the selected day, and save-on-change."""
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from advent.config import DEFAULT_DAYS
from advent.core import day_store, importers, share
from advent.core.day_store import DayStore, in_range, parse_day_key
from advent.core.errors import OutOfRange, PersistError
from advent.core.importers import ImportResult
from advent.core.persistence import StorageAdapter, load_store, save_store
from advent.models.record import DayRecord

logger = logging.getLogger(__name__)


class CalendarSession:
    """Owns one DayStore and the selection. Each mutation swaps in a new
    snapshot and saves it; a failed save is logged and kept in
    last_save_error, the in-memory store stays as is.
    """

    def __init__(self, adapter: StorageAdapter, store: DayStore) -> None:
        self.adapter = adapter
        self.store = store
        self.selected_day: Optional[str] = None
        self.last_save_error: Optional[PersistError] = None

    @classmethod
    def open(cls, adapter: StorageAdapter, default_days: int = DEFAULT_DAYS) -> "CalendarSession":
        return cls(adapter, load_store(adapter, default_days))

    @property
    def days(self) -> int:
        return self.store.days

    def _commit(self, store: DayStore) -> bool:
        """Swap in the new snapshot, then save. Returns True if the save succeeded."""
        self.store = store
        self._drop_stale_selection()
        try:
            save_store(self.adapter, store)
        except PersistError as e:
            logger.warning("Save failed, keeping in-memory calendar: %s", e)
            self.last_save_error = e
            return False
        self.last_save_error = None
        return True

    def _drop_stale_selection(self) -> None:
        if self.selected_day is not None and int(self.selected_day) > self.store.days:
            logger.warning("Selected day %s no longer exists; closing it", self.selected_day)
            self.selected_day = None

    # Records

    def get(self, day: Any) -> DayRecord:
        return day_store.get(self.store, day)

    def set_day(self, day: Any, record: DayRecord) -> bool:
        return self._commit(day_store.set_day(self.store, day, record))

    def set_field(self, day: Any, field: str, value: Any) -> bool:
        record = day_store.get(self.store, day).set_field(field, value)
        return self._commit(day_store.set_day(self.store, day, record))

    def clear_day(self, day: Any) -> bool:
        new_store = day_store.clear_day(self.store, day)
        if self.selected_day == parse_day_key(day):
            self.selected_day = None
        return self._commit(new_store)

    def reset_all(self) -> bool:
        self.selected_day = None
        return self._commit(day_store.reset_all(self.store))

    def resize(self, new_days: Any) -> bool:
        return self._commit(day_store.resize(self.store, new_days))

    # Import / export

    def _apply(self, result: ImportResult) -> ImportResult:
        self._commit(result.store)
        return result

    def import_json(self, text: str) -> ImportResult:
        return self._apply(importers.import_json(self.store, text))

    def import_csv(self, text: str) -> ImportResult:
        return self._apply(importers.import_csv(self.store, text))

    def import_text(self, text: str, fmt: str) -> ImportResult:
        return self._apply(importers.import_text(self.store, text, fmt))

    async def import_from(self, fetch: Callable[[], Awaitable[str]], fmt: str) -> ImportResult:
        """Await fetch(), then merge into the store as it is when the text arrives."""
        text = await fetch()
        return self.import_text(text, fmt)

    def export_json(self) -> Dict[str, dict]:
        return day_store.to_day_map(self.store)

    def share_token(self) -> str:
        return share.encode_share(self.store)

    def load_shared(self, value: str) -> bool:
        """Replace the calendar with a shared one. ParseError leaves it unchanged."""
        new_store = share.store_from_share(value)
        self.selected_day = None
        return self._commit(new_store)

    # Selection (not persisted)

    def select(self, day: Any) -> str:
        key = parse_day_key(day)
        if not in_range(key, self.store.days):
            raise OutOfRange(day, self.store.days)
        self.selected_day = key
        return key

    def deselect(self) -> None:
        self.selected_day = None

    def selected_record(self) -> Optional[DayRecord]:
        if self.selected_day is None:
            return None
        return self.get(self.selected_day)
