"""Day store: day-key -> DayRecord for keys "1".."days", replaced on every change."""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from advent.config import MAX_DAYS, MIN_DAYS
from advent.core.errors import OutOfRange
from advent.models.record import DayRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayStore:
    """Snapshot of the calendar. Key set is exactly "1".."days"."""
    days: int
    records: Dict[str, DayRecord] = field(default_factory=dict)

    def keys(self) -> List[str]:
        return [str(d) for d in range(1, self.days + 1)]

    def items(self) -> Iterator[Tuple[str, DayRecord]]:
        for key in self.keys():
            yield key, self.records[key]


def clamp_days(value: Any) -> int:
    """Clamp a day count to [MIN_DAYS, MAX_DAYS]; raises ValueError if not a number."""
    if isinstance(value, int):
        number = value
    else:
        parsed = float(str(value).strip())
        if not math.isfinite(parsed):
            raise ValueError(f"Day count is not finite: {value!r}")
        number = int(parsed)
    return max(MIN_DAYS, min(MAX_DAYS, number))


def parse_day_key(raw: Any) -> Optional[str]:
    """Canonical day-key for raw input ("03", 3, " 3 " -> "3"), or None if not an integer."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return str(raw) if 0 <= raw < 10 ** 6 else None
    text = str(raw).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return text.lstrip("0") or "0"


def in_range(key: Optional[str], days: int) -> bool:
    """True if a canonical day-key names a day in [1, days]."""
    return key is not None and len(key) <= len(str(MAX_DAYS)) and 1 <= int(key) <= days


def _require_key(store: DayStore, day: Any) -> str:
    key = parse_day_key(day)
    if not in_range(key, store.days):
        raise OutOfRange(day, store.days)
    return key


def _fresh(days: int) -> Dict[str, DayRecord]:
    return {str(d): DayRecord.empty() for d in range(1, days + 1)}


def create(days: int) -> DayStore:
    """Store with exactly `days` empty records (days clamped to [1, 31])."""
    days = clamp_days(days)
    return DayStore(days=days, records=_fresh(days))


def get(store: DayStore, day: Any) -> DayRecord:
    """Record at `day`; raises OutOfRange outside [1, days]."""
    return store.records[_require_key(store, day)]


def set_day(store: DayStore, day: Any, record: DayRecord) -> DayStore:
    """Replace one day's record entirely."""
    key = _require_key(store, day)
    records = dict(store.records)
    records[key] = record
    return DayStore(days=store.days, records=records)


def clear_day(store: DayStore, day: Any) -> DayStore:
    return set_day(store, day, DayRecord.empty())


def reset_all(store: DayStore) -> DayStore:
    return create(store.days)


def resize(store: DayStore, new_days: Any) -> DayStore:
    """Change the day count, keeping records for days 1..min(old, new).

    Days past the new count are dropped for good; growing back brings them
    back empty.
    """
    new_days = clamp_days(new_days)
    records = _fresh(new_days)
    for key in records:
        if key in store.records:
            records[key] = store.records[key]
    dropped = sum(1 for r in store.records.values() if r.is_filled()) - sum(
        1 for r in records.values() if r.is_filled()
    )
    if dropped > 0:
        logger.warning("Resize %s -> %s dropped %s filled day(s)", store.days, new_days, dropped)
    return DayStore(days=new_days, records=records)


def overlay(store: DayStore, partial: Mapping[Any, DayRecord]) -> Tuple[DayStore, List[str], List[str]]:
    """Replace records wholesale for every in-range key in `partial`.

    Returns (new store, applied keys, ignored keys). Keys outside [1, days]
    or not integers are ignored; `days` never changes.
    """
    records = dict(store.records)
    applied: List[str] = []
    ignored: List[str] = []
    for raw_key, record in partial.items():
        key = parse_day_key(raw_key)
        if not in_range(key, store.days):
            ignored.append(str(raw_key))
            continue
        records[key] = record
        applied.append(key)
    if ignored:
        logger.warning("Ignored %s day key(s) outside 1..%s: %s", len(ignored), store.days, ", ".join(ignored))
    return DayStore(days=store.days, records=records), applied, ignored


def to_day_map(store: DayStore) -> Dict[str, dict]:
    """Plain JSON-ready day map ({"1": {...}, ...})."""
    return {key: record.to_dict() for key, record in store.items()}
