"""
Paginated retrieval of a single profile's media feed.
"""

import urllib.parse

import requests

from profile_crawler.config import BASE_URL, CURSOR_PARAM, MEDIA_PATH
from profile_crawler.errors import CrawlError, ExtractionError, PageDecodeError, ProfileNotFoundError, TransportError
from profile_crawler.extraction.media import ItemFormatError, decode_page, parse_items
from profile_crawler.extraction.shared_data import extract_seed_data
from profile_crawler.models import FetchResult
from profile_crawler.session import fetch_json, fetch_text
from profile_crawler.utils.log import log


class PaginationFetcher:
    """
    Fetch one profile page, then follow ``max_id`` pagination until the
    feed reports no more items.

    The result is all-or-nothing: any failure along the way raises a
    :class:`CrawlError` and no partial item list escapes.
    """

    def __init__(self, session: requests.Session, base_url: str = BASE_URL) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/") + "/"

    def profile_url(self, handle: str) -> str:
        return self.base_url + urllib.parse.quote(handle, safe="")

    def media_url(self, handle: str, cursor: str) -> str:
        query = urllib.parse.urlencode({CURSOR_PARAM: cursor})
        return f"{self.profile_url(handle)}{MEDIA_PATH}?{query}"

    def fetch(self, handle: str) -> FetchResult:
        try:
            return self._fetch(handle)
        except CrawlError as exc:
            exc.handle = handle
            raise

    def _fetch(self, handle: str) -> FetchResult:
        url = self.profile_url(handle)
        log.debug("GET %s", url)
        try:
            html = fetch_text(self.session, url)
        except TransportError as exc:
            if exc.status_code == 404:
                raise ProfileNotFoundError("profile not found") from exc
            raise

        seed = extract_seed_data(html)
        try:
            items, cursor = parse_items(seed.raw_items)
        except ItemFormatError as exc:
            raise ExtractionError(str(exc)) from exc

        pages = 1
        seen_cursors: set[str] = set()
        while cursor:
            seen_cursors.add(cursor)
            page = decode_page(fetch_json(self.session, self.media_url(handle, cursor)))
            pages += 1
            items.extend(page.items)
            log.debug("  [PAGE] %s page %d: +%d items (more=%s)",
                      handle, pages, len(page.items), page.has_more)
            if page.cursor is not None and page.cursor in seen_cursors:
                raise PageDecodeError(f"pagination cursor {page.cursor} was already requested")
            cursor = page.cursor

        return FetchResult(handle=handle, profile=seed.profile, items=items, pages=pages)
