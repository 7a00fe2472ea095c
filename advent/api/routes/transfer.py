"""Import (JSON / CSV text), export, share links and service suggestions."""
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from advent.api.state import AppState, get_state
from advent.config import SUGGESTED_SERVICES
from advent.core.errors import ParseError
from advent.core.importers import ImportResult
from advent.core.session import CalendarSession
from advent.core.share import share_url

router = APIRouter()


class ShareBody(BaseModel):
    token: str


async def _body_text(request: Request) -> str:
    raw = await request.body()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Import body must be UTF-8 text")


def _import_response(session: CalendarSession, result: ImportResult) -> dict:
    out = {
        "applied": result.applied,
        "ignored": result.ignored,
        "days": session.days,
        "saved": session.last_save_error is None,
    }
    if session.last_save_error is not None:
        out["save_error"] = str(session.last_save_error)
    return out


async def _import(request: Request, state: AppState, fmt: str) -> dict:
    text = await _body_text(request)
    session = state.session
    try:
        result = session.import_text(text, fmt)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _import_response(session, result)


@router.post("/import/json")
async def import_json(request: Request, state: AppState = Depends(get_state)):
    """Merge a JSON day map from the request body. Each named day is replaced whole."""
    return await _import(request, state, "json")


@router.post("/import/csv")
async def import_csv(request: Request, state: AppState = Depends(get_state)):
    """Merge CSV rows (day,title,service,rating,notes header, no quoting) from the request body."""
    return await _import(request, state, "csv")


@router.get("/export/json")
def export_json(state: AppState = Depends(get_state)):
    """Day map in the same shape /import/json accepts."""
    return state.session.export_json()


@router.get("/share")
def get_share(state: AppState = Depends(get_state)):
    session = state.session
    return {"token": session.share_token(), "url": share_url(session.store)}


@router.post("/share")
def load_share(body: ShareBody, state: AppState = Depends(get_state)):
    """Replace the calendar with a shared one (token, #token or full URL)."""
    session = state.session
    try:
        ok = session.load_shared(body.token)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    out = {"days": session.days, "saved": ok}
    if not ok and session.last_save_error is not None:
        out["save_error"] = str(session.last_save_error)
    return out


@router.get("/services")
def list_services():
    """Suggested streaming services for the picker. Any string is accepted."""
    return list(SUGGESTED_SERVICES)
