"""
Tests for actor collection and graph expansion.
"""

import unittest

from profile_crawler.core.expander import collect_actors, expand
from profile_crawler.core.frontier import IdentifierSet
from profile_crawler.extraction.media import parse_item
from profile_crawler.models import FetchResult
from tests.fakes import raw_image


def _result(*raw_items):
    return FetchResult(
        handle="alice",
        profile={},
        items=[parse_item(raw) for raw in raw_items],
    )


class TestCollectActors(unittest.TestCase):
    def test_likes_and_comments_merged(self):
        result = _result(
            raw_image("1", liked=["bob", "carol"], commented=["dave"]),
            raw_image("2", liked=["bob"], commented=["carol", " erin "]),
        )
        self.assertEqual(collect_actors(result), {"bob", "carol", "dave", "erin"})

    def test_blank_usernames_dropped(self):
        result = _result(raw_image("1", liked=["", "  "], commented=["bob"]))
        self.assertEqual(collect_actors(result), {"bob"})


class TestExpand(unittest.TestCase):
    def test_new_actors_discovered_and_marked(self):
        ids = IdentifierSet(["alice"])
        result = _result(raw_image("1", liked=["bob"], commented=["carol"]))

        found = expand(result, 1, ids)

        self.assertEqual(found, {"bob", "carol"})
        self.assertIn("bob", ids)
        self.assertIn("carol", ids)

    def test_seen_actors_not_rediscovered(self):
        ids = IdentifierSet(["alice", "bob"])
        result = _result(raw_image("1", liked=["alice", "bob", "carol"]))
        self.assertEqual(expand(result, 2, ids), {"carol"})
        self.assertEqual(expand(result, 2, ids), set())

    def test_no_depth_left_discovers_nothing(self):
        ids = IdentifierSet()
        result = _result(raw_image("1", liked=["bob"], commented=["carol"]))

        self.assertEqual(expand(result, 0, ids), set())
        self.assertEqual(len(ids), 0)

    def test_empty_feed(self):
        self.assertEqual(expand(_result(), 3, IdentifierSet()), set())


if __name__ == "__main__":
    unittest.main()
