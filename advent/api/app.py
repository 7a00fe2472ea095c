"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configure logging in the worker process (so load/save warnings are visible with uvicorn --reload)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from advent.api.state import AppState, get_state
from advent.config import ensure_data_dir

# Import routes after state to avoid circular imports
from advent.api.routes import days, selection, transfer

__all__ = ["app", "AppState", "get_state"]

_state = get_state()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    session = _state.open_session()
    logging.getLogger(__name__).info("Calendar loaded with %s days", session.days)

    yield

    _state.close_session()


app = FastAPI(
    title="Advent Calendar API",
    description="Local REST API for the day-by-day advent calendar",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(days.router, prefix="/api/days", tags=["days"])
app.include_router(selection.router, prefix="/api/selection", tags=["selection"])
app.include_router(transfer.router, prefix="/api", tags=["import-export"])
