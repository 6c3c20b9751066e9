"""Data extraction from profile pages and media pages."""

from profile_crawler.extraction.media import ItemFormatError, decode_page, parse_item, parse_items
from profile_crawler.extraction.shared_data import extract_seed_data, find_shared_data

__all__ = [
    "ItemFormatError",
    "decode_page",
    "parse_item",
    "parse_items",
    "extract_seed_data",
    "find_shared_data",
]
