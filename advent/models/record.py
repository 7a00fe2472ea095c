"""Day record: title, rating, notes and service for one calendar slot."""
import math
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from advent.config import RATING_MAX, RATING_MIN

RECORD_FIELDS = ("title", "rating", "notes", "service")
TEXT_FIELDS = ("title", "notes", "service")


def normalize_rating(value: Any) -> Optional[int]:
    """Coerce user input to a rating or None (unset).

    Empty or non-numeric input is unset; numbers are truncated to int and
    clamped to [RATING_MIN, RATING_MAX]. Never returns NaN.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return max(RATING_MIN, min(RATING_MAX, int(number)))


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class DayRecord:
    """What was watched on one day. All defaults means an empty day."""
    title: str = ""
    rating: Optional[int] = None
    notes: str = ""
    service: str = ""  # free text; see SUGGESTED_SERVICES

    @classmethod
    def empty(cls) -> "DayRecord":
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DayRecord":
        """Build a record from a partial mapping; missing fields take defaults, unknown keys are dropped."""
        return cls(
            title=_text(data.get("title")),
            rating=normalize_rating(data.get("rating")),
            notes=_text(data.get("notes")),
            service=_text(data.get("service")),
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "rating": self.rating,
            "notes": self.notes,
            "service": self.service,
        }

    def is_filled(self) -> bool:
        """True if any field differs from its default (display only)."""
        return bool(self.title or self.notes or self.service) or self.rating is not None

    def set_field(self, field: str, value: Any) -> "DayRecord":
        """Return a copy with one field replaced; rating is normalized."""
        if field not in RECORD_FIELDS:
            raise ValueError(f"Unknown record field: {field!r}")
        if field == "rating":
            return replace(self, rating=normalize_rating(value))
        return replace(self, **{field: _text(value)})
