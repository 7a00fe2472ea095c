"""Persist and load the calendar snapshot (JSON, one storage key)."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from advent.config import MAX_DAYS, STORE_PATH, ensure_data_dir
from advent.core.day_store import DayStore, clamp_days, create, overlay, parse_day_key, to_day_map
from advent.core.errors import ParseError, PersistError
from advent.models.record import DayRecord

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class StorageAdapter(Protocol):
    """Durable key-value slot holding one serialized snapshot."""

    def load(self) -> Optional[Dict[str, Any]]:
        ...

    def save(self, snapshot: Dict[str, Any]) -> None:
        ...


class JsonFileStorage:
    """Snapshot stored as a JSON file (default: data/advent_calendar_v1.json)."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else STORE_PATH

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored snapshot, or None if missing or unreadable."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: snapshot is not an object", self.path)
            return None
        return data

    def save(self, snapshot: Dict[str, Any]) -> None:
        """Write the snapshot atomically (temp file + rename); raises PersistError."""
        try:
            if self.path == STORE_PATH:
                ensure_data_dir()
            else:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(snapshot, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistError(f"Could not save {self.path}: {e}") from e
        logger.debug("Saved snapshot to %s", self.path)


class MemoryStorage:
    """In-process storage, for tests and ephemeral sessions."""

    def __init__(self, snapshot: Optional[Dict[str, Any]] = None) -> None:
        self.snapshot = snapshot
        self.saves = 0

    def load(self) -> Optional[Dict[str, Any]]:
        if self.snapshot is None:
            return None
        return json.loads(json.dumps(self.snapshot))

    def save(self, snapshot: Dict[str, Any]) -> None:
        self.snapshot = json.loads(json.dumps(snapshot))
        self.saves += 1


def serialize(store: DayStore) -> Dict[str, Any]:
    """Snapshot shape: {"version": 1, "days": N, "records": {"1": {...}, ...}}."""
    return {"version": SNAPSHOT_VERSION, "days": store.days, "records": to_day_map(store)}


def deserialize(snapshot: Any) -> DayStore:
    """Rebuild a store from a snapshot.

    Also accepts the legacy bare day map ({"1": {...}, ...}), where days is
    the highest key. Saved records are laid over a fresh empty map, so gaps
    come back as empty days. Raises ParseError on an unusable shape.
    """
    if not isinstance(snapshot, dict):
        raise ParseError("Snapshot is not an object")
    if "records" in snapshot:
        records = snapshot["records"]
        if not isinstance(records, dict):
            raise ParseError("Snapshot 'records' is not an object")
        try:
            days = clamp_days(snapshot.get("days", len(records) or 1))
        except (TypeError, ValueError, OverflowError) as e:
            raise ParseError(f"Snapshot 'days' is not a number: {e}") from e
    else:
        records = snapshot
        keys = [parse_day_key(k) for k in records]
        numbers = [int(k) for k in keys if k is not None and len(k) <= len(str(MAX_DAYS))]
        if not numbers:
            raise ParseError("Snapshot has no day keys")
        days = clamp_days(max(numbers))

    partial: Dict[str, DayRecord] = {}
    for key, value in records.items():
        if not isinstance(value, dict):
            raise ParseError(f"Snapshot day {key!r} is not an object")
        partial[key] = DayRecord.from_dict(value)
    store, _, _ = overlay(create(days), partial)
    return store


def load_store(adapter: StorageAdapter, default_days: int) -> DayStore:
    """Load from the adapter, falling back to create(default_days) on missing or corrupt data."""
    snapshot = adapter.load()
    if snapshot is None:
        logger.info("No saved calendar; starting with %s empty days", clamp_days(default_days))
        return create(default_days)
    try:
        return deserialize(snapshot)
    except ParseError as e:
        logger.warning("Saved calendar unusable (%s); starting fresh", e)
        return create(default_days)


def save_store(adapter: StorageAdapter, store: DayStore) -> None:
    """Save a store snapshot; raises PersistError on failure."""
    try:
        adapter.save(serialize(store))
    except PersistError:
        raise
    except (OSError, TypeError, ValueError) as e:
        raise PersistError(str(e)) from e
