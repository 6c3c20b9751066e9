"""
Media item parsing and pagination page decoding.
"""

from typing import Any, Iterable

from profile_crawler.config import IMAGE_ITEM_TYPE
from profile_crawler.errors import PageDecodeError
from profile_crawler.models import Item, MediaPage


class ItemFormatError(ValueError):
    """A raw media item lacks a field the crawler depends on."""


def _usernames(entries: Any, path: tuple[str, ...]) -> tuple[str, ...]:
    """Collect the string found at *path* inside each dict of *entries*."""
    found: list[str] = []
    if not isinstance(entries, list):
        return ()
    for entry in entries:
        value = entry
        for key in path:
            value = value.get(key) if isinstance(value, dict) else None
        if isinstance(value, str):
            found.append(value)
    return tuple(found)


def parse_item(raw: Any) -> Item | None:
    """Build an :class:`Item` from a raw media dict.

    Returns ``None`` for non-image items.  Raises :class:`ItemFormatError`
    when the item has no id, is an image without a source URL, or carries
    a like count that is not an integer.
    """
    if not isinstance(raw, dict) or raw.get("id") in (None, ""):
        raise ItemFormatError("media item without id")
    if raw.get("type") != IMAGE_ITEM_TYPE:
        return None

    try:
        src = raw["images"]["standard_resolution"]["url"]
    except (KeyError, TypeError) as exc:
        raise ItemFormatError(f"image {raw['id']} has no source url") from exc

    caption = raw.get("caption")
    likes = raw.get("likes") if isinstance(raw.get("likes"), dict) else {}
    comments = raw.get("comments") if isinstance(raw.get("comments"), dict) else {}
    created = raw.get("created_time")
    try:
        like_count = int(likes.get("count") or 0)
    except (ValueError, TypeError) as exc:
        raise ItemFormatError(f"image {raw['id']} has invalid like count") from exc

    return Item(
        id=str(raw["id"]),
        src=src,
        caption=caption.get("text") if isinstance(caption, dict) else None,
        link=raw.get("link", ""),
        likes=like_count,
        created=str(created) if created is not None else None,
        liked_by=_usernames(likes.get("data"), ("username",)),
        commented_by=_usernames(comments.get("data"), ("from", "username")),
    )


def parse_items(raw_items: Iterable[Any]) -> tuple[list[Item], str | None]:
    """Parse a batch of raw items.

    Returns the retained image items in feed order and the id of the last
    raw item of any type, which is the cursor for the next page.
    """
    items: list[Item] = []
    last_id: str | None = None
    for raw in raw_items:
        item = parse_item(raw)
        last_id = str(raw["id"])
        if item is not None:
            items.append(item)
    return items, last_id


def decode_page(payload: Any) -> MediaPage:
    """Decode one pagination response.

    The next cursor is the last item id when the response declares that
    more items are available, otherwise ``None``.
    """
    if not isinstance(payload, dict):
        raise PageDecodeError("media page is not an object")
    raw_items = payload.get("items") or []
    if not isinstance(raw_items, list):
        raise PageDecodeError("media page items is not a list")
    try:
        items, last_id = parse_items(raw_items)
    except ItemFormatError as exc:
        raise PageDecodeError(str(exc)) from exc
    has_more = bool(payload.get("more_available"))
    return MediaPage(items=items, cursor=last_id if has_more else None, has_more=has_more)
