"""Shared application state (injected into routes)."""
from advent.config import DEFAULT_DAYS
from advent.core.persistence import JsonFileStorage, StorageAdapter
from advent.core.session import CalendarSession


class AppState:
    def __init__(self, adapter: StorageAdapter | None = None, default_days: int = DEFAULT_DAYS) -> None:
        self._adapter = adapter
        self._default_days = default_days
        self._session: CalendarSession | None = None

    def open_session(self) -> CalendarSession:
        """Load the calendar from storage (or start fresh); replaces any open session."""
        adapter = self._adapter if self._adapter is not None else JsonFileStorage()
        self._session = CalendarSession.open(adapter, self._default_days)
        return self._session

    def close_session(self) -> None:
        self._session = None

    @property
    def session(self) -> CalendarSession:
        if self._session is None:
            return self.open_session()
        return self._session


_state = AppState()


def get_state() -> AppState:
    return _state
