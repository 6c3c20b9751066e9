"""
Tests for the bounded worker pool.
"""

import threading
import time
import unittest
from unittest.mock import MagicMock

from profile_crawler.core.frontier import IdentifierSet, WorkList
from profile_crawler.core.pool import WorkerPool
from profile_crawler.errors import TransportError
from profile_crawler.extraction.media import parse_item
from profile_crawler.models import FetchResult
from tests.fakes import raw_image


class StubFetcher:
    """Fetcher returning canned feeds; records peak concurrency."""

    def __init__(self, feeds, delay=0.0):
        self.feeds = feeds
        self.delay = delay
        self.in_flight = 0
        self.peak = 0
        self._lock = threading.Lock()

    def fetch(self, handle):
        with self._lock:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
        try:
            time.sleep(self.delay)
            feed = self.feeds[handle]
            if isinstance(feed, Exception):
                raise feed
            return FetchResult(
                handle=handle, profile={"username": handle},
                items=[parse_item(raw) for raw in feed],
            )
        finally:
            with self._lock:
                self.in_flight -= 1


class TestWorkerPool(unittest.TestCase):
    def test_failure_does_not_abort_siblings(self):
        fetcher = StubFetcher({
            "a": TransportError("boom"),
            "b": [raw_image("1")],
            "c": [raw_image("2"), raw_image("3")],
        })
        pool = WorkerPool(fetcher, IdentifierSet(["a", "b", "c"]))

        result = pool.run_generation(["a", "b", "c"], concurrency=2, remaining_depth=1)

        by_handle = {o.handle: o for o in result.outcomes}
        self.assertEqual(set(by_handle), {"a", "b", "c"})
        self.assertFalse(by_handle["a"].ok)
        self.assertIn("boom", by_handle["a"].error)
        self.assertTrue(by_handle["b"].ok)
        self.assertEqual(by_handle["c"].items, 2)

    def test_unexpected_exception_recorded(self):
        fetcher = StubFetcher({"a": RuntimeError("bug"), "b": []})
        pool = WorkerPool(fetcher, IdentifierSet())
        with self.assertLogs("profile-crawler", level="ERROR"):
            result = pool.run_generation(["a", "b"], concurrency=2, remaining_depth=1)
        self.assertEqual([o.handle for o in result.failed], ["a"])
        self.assertEqual([o.handle for o in result.succeeded], ["b"])

    def test_concurrency_bound(self):
        handles = [f"u{n}" for n in range(12)]
        fetcher = StubFetcher({h: [] for h in handles}, delay=0.05)
        pool = WorkerPool(fetcher, IdentifierSet(handles))

        result = pool.run_generation(handles, concurrency=3, remaining_depth=0)

        self.assertEqual(len(result.outcomes), 12)
        self.assertLessEqual(fetcher.peak, 3)
        self.assertGreater(fetcher.peak, 1)

    def test_shared_discoveries_queued_once(self):
        feeds = {
            h: [raw_image(f"{h}1", liked=["zed", "yan"], commented=[h])]
            for h in ("a", "b", "c", "d")
        }
        pool = WorkerPool(StubFetcher(feeds, delay=0.01), IdentifierSet(feeds))

        result = pool.run_generation(list(feeds), concurrency=4, remaining_depth=1)

        self.assertEqual(sorted(result.discovered), ["yan", "zed"])
        self.assertEqual(sum(o.discovered for o in result.outcomes), 2)

    def test_no_discovery_without_depth(self):
        feeds = {"a": [raw_image("1", liked=["bob"])]}
        ids = IdentifierSet(["a"])
        result = WorkerPool(StubFetcher(feeds), ids).run_generation(
            WorkList(["a"]), concurrency=1, remaining_depth=0
        )
        self.assertEqual(result.discovered, [])
        self.assertNotIn("bob", ids)

    def test_admit_filters_discoveries(self):
        feeds = {"a": [raw_image("1", liked=["bob", "carol"])]}
        ids = IdentifierSet(["a"])
        pool = WorkerPool(StubFetcher(feeds), ids, admit=lambda h: h != "bob")

        result = pool.run_generation(["a"], concurrency=1, remaining_depth=1)

        self.assertEqual(result.discovered, ["carol"])
        # Rejected handles stay marked so they are never reconsidered.
        self.assertIn("bob", ids)

    def test_sink_called_for_successes_only(self):
        sink = MagicMock()
        fetcher = StubFetcher({"a": [raw_image("1")], "b": TransportError("down")})
        pool = WorkerPool(fetcher, IdentifierSet(), sink=sink)

        pool.run_generation(["a", "b"], concurrency=2, remaining_depth=0)

        sink.assert_called_once()
        handle, fetched = sink.call_args.args
        self.assertEqual(handle, "a")
        self.assertEqual([i.id for i in fetched.items], ["1"])

    def test_empty_work_list(self):
        pool = WorkerPool(StubFetcher({}), IdentifierSet())
        result = pool.run_generation([], concurrency=4, remaining_depth=1)
        self.assertEqual(result.outcomes, [])
        self.assertEqual(result.discovered, [])


if __name__ == "__main__":
    unittest.main()
