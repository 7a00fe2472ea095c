"""Configuration: env, storage location, day and rating bounds."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of advent package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so ADVENT_DATA_DIR etc. are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("ADVENT_DATA_DIR", str(BASE_DIR / "data")))
STORAGE_KEY = os.getenv("ADVENT_STORAGE_KEY", "advent_calendar_v1")
STORE_PATH = DATA_DIR / f"{STORAGE_KEY}.json"

# API
API_HOST = os.getenv("ADVENT_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("ADVENT_API_PORT", "8000"))

# Day slots
MIN_DAYS = 1
MAX_DAYS = 31
DEFAULT_DAYS = max(MIN_DAYS, min(MAX_DAYS, int(os.getenv("ADVENT_DAYS", "24"))))

# Rating (unset is None, zero is clamped up)
RATING_MIN = 1
RATING_MAX = 10

# Suggestions for the service picker; any string is accepted
SUGGESTED_SERVICES = ("Netflix", "Disney+", "Amazon Prime", "Paramount")

# Share links: base URL the encoded calendar is appended to as a fragment
SHARE_BASE_URL = os.getenv("ADVENT_SHARE_BASE_URL", "")


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
