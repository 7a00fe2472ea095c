"""
Unit tests for share-link encoding.
"""

import base64
import json

import pytest
from advent.core import day_store
from advent.core.errors import ParseError
from advent.core.share import decode_share, encode_share, share_url, store_from_share
from advent.models.record import DayRecord


def test_share_round_trip_unicode():
    """Encoding then decoding gives back the same store, non-ASCII text included."""
    store = day_store.create(3)
    store = day_store.set_day(store, 2, DayRecord(title="Frozen ❄", rating=7, notes="ça va"))
    assert store_from_share(encode_share(store)) == store


def test_share_accepts_fragment_and_url():
    """Tokens may come with a leading # or as a full URL."""
    store = day_store.set_day(day_store.create(2), 1, DayRecord(title="Elf"))
    url = share_url(store, "https://example.org/advent/")
    assert url.startswith("https://example.org/advent/#")
    assert store_from_share(url) == store
    assert store_from_share("#" + encode_share(store)) == store


def test_share_rejects_non_array():
    """A payload that is not an array is rejected."""
    token = base64.b64encode(json.dumps({"1": {}}).encode("utf-8")).decode("ascii")
    with pytest.raises(ParseError):
        decode_share(token)


def test_share_rejects_garbage():
    """Bad base64 or bad JSON inside raises ParseError."""
    with pytest.raises(ParseError):
        decode_share("!!!not base64!!!")
    with pytest.raises(ParseError):
        decode_share(base64.b64encode(b"{nope").decode("ascii"))
    with pytest.raises(ParseError):
        decode_share("")


def test_share_clamps_day_count():
    """Arrays longer than 31 days are cut to 31."""
    token = base64.b64encode(json.dumps([{"title": str(i)} for i in range(40)]).encode("utf-8")).decode("ascii")
    store = store_from_share(token)
    assert store.days == 31
    assert day_store.get(store, 31).title == "30"
