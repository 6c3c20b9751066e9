"""
Tests for handle normalisation and seed-input reading.
"""

import tempfile
import unittest
from pathlib import Path

from profile_crawler.utils.handles import normalise_handle, read_seed_input


class TestNormaliseHandle(unittest.TestCase):
    def test_plain(self):
        self.assertEqual(normalise_handle("alice"), "alice")

    def test_whitespace_trimmed(self):
        self.assertEqual(normalise_handle("  alice \n"), "alice")

    def test_blank_is_none(self):
        self.assertIsNone(normalise_handle(""))
        self.assertIsNone(normalise_handle("   "))
        self.assertIsNone(normalise_handle("@"))

    def test_at_prefix(self):
        self.assertEqual(normalise_handle("@alice"), "alice")

    def test_profile_url(self):
        self.assertEqual(normalise_handle("https://www.instagram.com/alice/"), "alice")
        self.assertEqual(normalise_handle("instagram.com/alice"), "alice")

    def test_profile_url_without_path(self):
        self.assertIsNone(normalise_handle("https://instagram.com/"))

    def test_other_host_untouched(self):
        self.assertEqual(normalise_handle("example.com/alice"), "example.com/alice")

    def test_non_string(self):
        self.assertIsNone(normalise_handle(None))


class TestReadSeedInput(unittest.TestCase):
    def test_single_handle(self):
        self.assertEqual(read_seed_input("alice"), ["alice"])

    def test_file_lines(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "seeds.txt"
            path.write_text("alice\nbob\n\ncarol\n", encoding="utf-8")
            self.assertEqual(read_seed_input(str(path)), ["alice", "bob", "", "carol"])


if __name__ == "__main__":
    unittest.main()
