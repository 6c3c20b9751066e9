"""
Identifier normalisation and seed-input helpers.
"""

import re
import urllib.parse
from pathlib import Path

_PROFILE_HOST_RE = re.compile(r"(^|\.)instagram\.com$", re.I)


def normalise_handle(raw: str) -> str | None:
    """
    Reduce *raw* to a bare profile handle.

    Surrounding whitespace and a leading ``@`` are stripped, and a profile
    URL (``https://instagram.com/<handle>/``) is reduced to its first path
    segment.  Returns ``None`` for an empty result.
    """
    if not isinstance(raw, str):
        return None
    handle = raw.strip()
    if "/" in handle:
        candidate = handle if "://" in handle else "https://" + handle
        parsed = urllib.parse.urlparse(candidate)
        if _PROFILE_HOST_RE.search(parsed.netloc):
            parts = [p for p in parsed.path.split("/") if p]
            handle = parts[0] if parts else ""
    handle = handle.lstrip("@").strip()
    return handle or None


def read_seed_input(value: str) -> list[str]:
    """
    Resolve the ``--input`` argument into a list of raw identifiers.

    *value* is read as a file with one identifier per line when such a
    file exists, otherwise it is taken as a single identifier.
    """
    path = Path(value)
    if path.is_file():
        return path.read_text(encoding="utf-8").splitlines()
    return [value]
