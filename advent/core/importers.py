"""Import partial day maps from JSON or CSV text and merge them into a store."""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List

from advent.core.day_store import DayStore, overlay
from advent.core.errors import ParseError
from advent.models.record import DayRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("day", "title", "service", "rating", "notes")

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass
class ImportResult:
    """Outcome of a merge: the new store plus which keys were applied or ignored."""
    store: DayStore
    applied: List[str] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)


def parse_json(text: str) -> Dict[str, DayRecord]:
    """Parse a JSON day map ({"3": {"title": ...}, ...}) into records.

    Raises ParseError on malformed JSON, a non-object top level, or a
    non-object day value. Nothing is returned partially.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("JSON import must be an object keyed by day number")
    out: Dict[str, DayRecord] = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            raise ParseError(f"Day {key!r} must be an object, got {type(value).__name__}")
        out[key] = DayRecord.from_dict(value)
    return out


def parse_csv(text: str) -> Dict[str, DayRecord]:
    """Parse CSV text with a day,title,service,rating,notes header.

    Columns are matched by name, case-insensitively, in any order; missing
    columns are empty. Fields are split on bare commas: quoting is not
    supported, so a comma inside a title shifts the remaining columns.
    Rows with a blank day (or no day column at all) are skipped. Header-only input gives {}.
    """
    lines = [line for line in _LINE_SPLIT.split(text or "") if line.strip()]
    if len(lines) < 2:
        return {}
    header = [h.strip().lower() for h in lines[0].split(",")]
    index = {name: header.index(name) for name in CSV_COLUMNS if name in header}

    out: Dict[str, DayRecord] = {}
    for line in lines[1:]:
        cells = line.split(",")

        def cell(name: str) -> str:
            i = index.get(name)
            if i is None or i >= len(cells):
                return ""
            return cells[i].strip()

        day = cell("day")
        if not day:
            continue
        out[day] = DayRecord.from_dict(
            {
                "title": cell("title"),
                "service": cell("service"),
                "rating": cell("rating"),
                "notes": cell("notes"),
            }
        )
    return out


def merge(store: DayStore, partial: Dict[str, DayRecord]) -> ImportResult:
    """Overwrite whole records for every in-range key; out-of-range keys are ignored."""
    new_store, applied, ignored = overlay(store, partial)
    logger.info("Imported %s day(s), ignored %s", len(applied), len(ignored))
    return ImportResult(store=new_store, applied=applied, ignored=ignored)


def import_json(store: DayStore, text: str) -> ImportResult:
    return merge(store, parse_json(text))


def import_csv(store: DayStore, text: str) -> ImportResult:
    return merge(store, parse_csv(text))


def import_text(store: DayStore, text: str, fmt: str) -> ImportResult:
    """Dispatch on format name ("json" or "csv")."""
    fmt = (fmt or "").strip().lower()
    if fmt == "json":
        return import_json(store, text)
    if fmt == "csv":
        return import_csv(store, text)
    raise ParseError(f"Unsupported import format: {fmt!r}")
