"""Data models for day records."""
from advent.models.record import RECORD_FIELDS, DayRecord, normalize_rating

__all__ = [
    "DayRecord",
    "RECORD_FIELDS",
    "normalize_rating",
]
