"""Core: day store, importers, persistence, share links, session."""
from advent.core.errors import AdventError, OutOfRange, ParseError, PersistError
from advent.core.session import CalendarSession

__all__ = ["AdventError", "CalendarSession", "OutOfRange", "ParseError", "PersistError"]
