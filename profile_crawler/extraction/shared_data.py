"""
Embedded-data extraction from profile pages.

The profile page carries its state as a JSON literal assigned to
``window._sharedData`` inside an inline ``<script>``.  The blob is located
with BeautifulSoup and decoded with :class:`json.JSONDecoder`; nothing in
the page is ever evaluated.
"""

import json
from typing import Any

from bs4 import BeautifulSoup

from profile_crawler.config import PROFILE_ENTRY_KEY, SHARED_DATA_MARKER
from profile_crawler.errors import ExtractionError, ProfileNotFoundError
from profile_crawler.models import SeedData

_decoder = json.JSONDecoder()


def _decode_assignment(script: str, marker: str) -> Any:
    """Decode the JSON value assigned right after *marker* in *script*."""
    start = script.index(marker) + len(marker)
    eq = script.find("=", start)
    if eq < 0 or script[start:eq].strip():
        raise ExtractionError(f"no assignment follows {marker}")
    pos = eq + 1
    while pos < len(script) and script[pos].isspace():
        pos += 1
    try:
        value, _ = _decoder.raw_decode(script, pos)
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"malformed {marker} blob: {exc.msg}") from exc
    return value


def find_shared_data(html: str, marker: str = SHARED_DATA_MARKER) -> dict[str, Any]:
    """Return the object assigned to *marker* in the first inline script
    that mentions it.

    Raises :class:`ExtractionError` when no script carries the marker or
    the assigned value is not a JSON object.
    """
    soup = BeautifulSoup(html, "lxml")
    for script_el in soup.find_all("script"):
        if script_el.get("src"):
            continue
        text = script_el.get_text()
        if marker not in text:
            continue
        data = _decode_assignment(text, marker)
        if not isinstance(data, dict):
            raise ExtractionError(f"{marker} is not an object")
        return data
    raise ExtractionError("no data found in profile")


def extract_seed_data(html: str) -> SeedData:
    """Pull the profile metadata and the first batch of raw items out of a
    profile page."""
    data = find_shared_data(html)
    entry_data = data.get("entry_data")
    if not isinstance(entry_data, dict):
        raise ProfileNotFoundError("profile not found")
    entries = entry_data.get(PROFILE_ENTRY_KEY)
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
        raise ProfileNotFoundError("profile not found")

    entry = entries[0]
    profile = entry.get("user") or {}
    raw_items = entry.get("userMedia") or []
    if not isinstance(profile, dict) or not isinstance(raw_items, list):
        raise ExtractionError("unexpected profile entry layout")
    return SeedData(profile=profile, raw_items=raw_items)
