"""Which day is open in the editor (not persisted)."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from advent.api.state import AppState, get_state
from advent.core.errors import OutOfRange

router = APIRouter()


class SelectBody(BaseModel):
    day: int


def _selection(state: AppState) -> dict:
    session = state.session
    record = session.selected_record()
    return {
        "selected_day": session.selected_day,
        "record": record.to_dict() if record is not None else None,
    }


@router.get("/")
def get_selection(state: AppState = Depends(get_state)):
    return _selection(state)


@router.put("/")
def select_day(body: SelectBody, state: AppState = Depends(get_state)):
    try:
        state.session.select(body.day)
    except OutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _selection(state)


@router.delete("/")
def deselect_day(state: AppState = Depends(get_state)):
    state.session.deselect()
    return _selection(state)
