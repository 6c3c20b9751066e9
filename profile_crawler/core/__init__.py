"""Core crawler logic – frontier, fetcher, worker pool, BFS controller and storage."""

from profile_crawler.core.crawler import Crawler
from profile_crawler.core.expander import expand
from profile_crawler.core.fetcher import PaginationFetcher
from profile_crawler.core.frontier import IdentifierSet, WorkList
from profile_crawler.core.pool import WorkerPool
from profile_crawler.core.storage import ProfileStore

__all__ = [
    "Crawler",
    "expand",
    "PaginationFetcher",
    "IdentifierSet",
    "WorkList",
    "WorkerPool",
    "ProfileStore",
]
