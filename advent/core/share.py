"""Share links: day array as JSON, UTF-8, then base64, carried in a URL fragment."""
import base64
import binascii
import json
from typing import List
from urllib.parse import urlsplit

from advent.config import SHARE_BASE_URL
from advent.core.day_store import DayStore, clamp_days, create, overlay
from advent.core.errors import ParseError
from advent.models.record import DayRecord


def encode_share(store: DayStore) -> str:
    """Base64 token for the store's records, ordered by day."""
    payload = [record.to_dict() for _, record in store.items()]
    raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def share_url(store: DayStore, base_url: str = SHARE_BASE_URL) -> str:
    return f"{base_url}#{encode_share(store)}"


def _token_from(value: str) -> str:
    value = (value or "").strip()
    if "#" in value:
        value = urlsplit(value).fragment if "://" in value else value.split("#", 1)[1]
    return value.strip()


def decode_share(value: str) -> List[DayRecord]:
    """Decode a token, "#token" or full share URL back into the day array.

    Raises ParseError on bad base64, bad UTF-8, bad JSON, a non-array
    payload or a non-object entry.
    """
    token = _token_from(value)
    if not token:
        raise ParseError("Share link is empty")
    try:
        raw = base64.b64decode(token, validate=True)
        text = raw.decode("utf-8")
        data = json.loads(text)
    except (binascii.Error, ValueError) as e:
        raise ParseError(f"Invalid share link: {e}") from e
    if not isinstance(data, list):
        raise ParseError("Share payload must be an array of days")
    out = []
    for i, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise ParseError(f"Shared day {i} is not an object")
        out.append(DayRecord.from_dict(item))
    return out


def store_from_share(value: str) -> DayStore:
    """New store with days = length of the shared array (clamped to [1, 31])."""
    records = decode_share(value)
    if not records:
        raise ParseError("Share payload has no days")
    store, _, _ = overlay(
        create(clamp_days(len(records))),
        {str(i): record for i, record in enumerate(records, start=1)},
    )
    return store
