"""Error taxonomy for the day store, importers and persistence."""


class AdventError(Exception):
    """Base class for calendar errors."""


class OutOfRange(AdventError, LookupError):
    """Day key outside [1, days] of the current store."""

    def __init__(self, day, days: int) -> None:
        super().__init__(f"Day {day!r} is outside 1..{days}")
        self.day = day
        self.days = days


class ParseError(AdventError, ValueError):
    """Malformed JSON, CSV or share payload. The store is left unchanged."""


class PersistError(AdventError, OSError):
    """Snapshot could not be written. In-memory state stays authoritative."""
