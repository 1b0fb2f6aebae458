"""Tests for locale resolution."""
from __future__ import annotations

import pathlib
import tempfile
import unittest

from translations_sync.locales import detect_locales, parse_option_list


class TestParseOptionList(unittest.TestCase):

    def test_absent_returns_default(self):
        self.assertEqual(parse_option_list(None, ["app", "routes"]), ["app", "routes"])

    def test_trims_and_drops_empty(self):
        self.assertEqual(parse_option_list(" nl, en ,,de ", ["x"]), ["nl", "en", "de"])

    def test_empty_string_gives_empty_list(self):
        self.assertEqual(parse_option_list("", ["x"]), [])


class TestDetectLocales(unittest.TestCase):

    def test_missing_directory_is_empty(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(detect_locales(pathlib.Path(tmpdir) / "lang"), [])

    def test_only_json_files_in_sorted_order(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            lang = pathlib.Path(tmpdir)
            for name in ("nl.json", "en.json", "fr.php", "README.md"):
                (lang / name).write_text("{}", encoding="utf-8")
            (lang / "de").mkdir()
            (lang / "de" / "auth.json").write_text("{}", encoding="utf-8")
            self.assertEqual(detect_locales(lang), ["en", "nl"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
