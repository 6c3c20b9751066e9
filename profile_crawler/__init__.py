"""
profile_crawler
===============
Python package for crawling a social graph of public profiles: every
seed profile's image feed is downloaded, and the people who liked or
commented on those images become the next generation of the crawl.

Package structure
-----------------
profile_crawler/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── errors.py         – per-profile error taxonomy
├── models.py         – Item, FetchResult, outcomes and reports
├── session.py        – requests.Session factory and fetch helpers
├── cli.py            – argparse CLI (``python -m profile_crawler``)
├── extraction/       – embedded page data and media page decoding
├── core/             – frontier, fetcher, worker pool, BFS controller, storage
└── utils/            – handle normalisation and logging

Quick start
-----------
    from profile_crawler import Crawler

    report = Crawler(["alice", "bob"], depth=2, workers=10).run()
    print(report.reason.value)
"""

__version__ = "1.0.0"

from .core.crawler import Crawler
from .core.frontier import IdentifierSet, WorkList
from .core.fetcher import PaginationFetcher
from .core.pool import WorkerPool
from .core.storage import ProfileStore
from .models import CrawlReport, FetchResult, Item, TerminationReason

__all__ = [
    "Crawler",
    "IdentifierSet",
    "WorkList",
    "PaginationFetcher",
    "WorkerPool",
    "ProfileStore",
    "CrawlReport",
    "FetchResult",
    "Item",
    "TerminationReason",
]
