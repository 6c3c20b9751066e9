"""Utility helpers for identifier handling and logging."""

from profile_crawler.utils.handles import normalise_handle, read_seed_input
from profile_crawler.utils.log import setup_logging, log

__all__ = [
    "normalise_handle",
    "read_seed_input",
    "setup_logging",
    "log",
]
