"""Day records: list, read, edit, clear, reset, resize."""
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from advent.api.state import AppState, get_state
from advent.core.errors import OutOfRange
from advent.core.session import CalendarSession
from advent.models.record import DayRecord

router = APIRouter()


class DayBody(BaseModel):
    title: str = ""
    rating: Optional[Any] = None
    notes: str = ""
    service: str = ""


class DayPatchBody(BaseModel):
    title: Optional[str] = None
    rating: Optional[Any] = None
    notes: Optional[str] = None
    service: Optional[str] = None


class DayCountBody(BaseModel):
    days: int


def _day_to_dict(day: str, record: DayRecord) -> dict:
    return {"day": day, **record.to_dict(), "filled": record.is_filled()}


def _saved(session: CalendarSession, ok: bool) -> dict:
    out = {"saved": ok}
    if not ok and session.last_save_error is not None:
        out["save_error"] = str(session.last_save_error)
    return out


def _not_found(e: OutOfRange) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.get("/")
def list_days(state: AppState = Depends(get_state)):
    """All days with their records and a filled flag for display."""
    session = state.session
    return {
        "days": session.days,
        "selected_day": session.selected_day,
        "records": [_day_to_dict(key, record) for key, record in session.store.items()],
    }


@router.post("/reset")
def reset_days(state: AppState = Depends(get_state)):
    """Empty every day, keeping the day count. Closes the editor."""
    session = state.session
    ok = session.reset_all()
    return {"days": session.days, **_saved(session, ok)}


@router.put("/count")
def set_day_count(body: DayCountBody, state: AppState = Depends(get_state)):
    """Change the number of days (clamped to 1..31). Days past the new count are dropped."""
    session = state.session
    ok = session.resize(body.days)
    return {"days": session.days, "selected_day": session.selected_day, **_saved(session, ok)}


@router.get("/{day}")
def get_day(day: int, state: AppState = Depends(get_state)):
    try:
        record = state.session.get(day)
    except OutOfRange as e:
        raise _not_found(e)
    return _day_to_dict(str(day), record)


@router.put("/{day}")
def put_day(day: int, body: DayBody, state: AppState = Depends(get_state)):
    """Replace a day's record entirely; missing fields are empty."""
    session = state.session
    record = DayRecord.from_dict(body.model_dump())
    try:
        ok = session.set_day(day, record)
    except OutOfRange as e:
        raise _not_found(e)
    return {**_day_to_dict(str(day), session.get(day)), **_saved(session, ok)}


@router.patch("/{day}")
def patch_day(day: int, body: DayPatchBody, state: AppState = Depends(get_state)):
    """Edit individual fields. Rating is normalized (blank or non-numeric clears it, numbers clamp to 1..10)."""
    session = state.session
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Provide at least one of title, rating, notes, service")
    try:
        record = session.get(day)
        for field, value in changes.items():
            record = record.set_field(field, value)
        ok = session.set_day(day, record)
    except OutOfRange as e:
        raise _not_found(e)
    return {**_day_to_dict(str(day), session.get(day)), **_saved(session, ok)}


@router.delete("/{day}")
def delete_day(day: int, state: AppState = Depends(get_state)):
    """Clear a day back to an empty record."""
    session = state.session
    try:
        ok = session.clear_day(day)
    except OutOfRange as e:
        raise _not_found(e)
    return {**_day_to_dict(str(day), session.get(day)), **_saved(session, ok)}
