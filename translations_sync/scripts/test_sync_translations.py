# -*- coding: utf-8 -*-
"""
Test suite for the sync_translations CLI and pipeline.

Builds a throwaway Laravel-style project (app/, resources/, routes/,
resources/lang/) per test and runs the command against it.
"""
from __future__ import annotations

import contextlib
import io
import json
import pathlib
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from translations_sync.config import SyncConfig
from translations_sync.merge import Accept, Decline, EditTo
from translations_sync.pipeline import sync_translations
from translations_sync.scripts.sync_translations import build_arg_parser, main


class ProjectTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = pathlib.Path(self._tmp.name)
        self.lang = self.root / "resources" / "lang"

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, rel: str, text: str) -> pathlib.Path:
        p = self.root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(textwrap.dedent(text), encoding="utf-8")
        return p

    def write_dictionary(self, locale: str, data) -> pathlib.Path:
        p = self.lang / f"{locale}.json"
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data), encoding="utf-8")
        return p

    def read_dictionary(self, locale: str):
        return json.loads((self.lang / f"{locale}.json").read_text(encoding="utf-8"))

    def sources(self):
        self.write("app/Http/Controllers/HomeController.php", "<?php return view('home', ['t' => __('hello.world')]);")
        self.write("resources/views/home.blade.php", "<h1>@lang('goodbye')</h1>")

    def cli(self, *argv: str):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            rc = main(["--root", str(self.root), *argv])
        return rc, out.getvalue()


class TestScenarios(ProjectTestCase):
    """Reference scenarios for a fresh or partially translated project."""

    def test_base_locale_identity(self):
        self.sources()
        rc, _ = self.cli("--locales=en")
        self.assertEqual(rc, 0)
        self.assertEqual(self.read_dictionary("en"), {"goodbye": "goodbye", "hello.world": "hello.world"})

    def test_other_locale_without_file(self):
        self.sources()
        rc, out = self.cli("--locales=fr")
        self.assertEqual(rc, 0)
        self.assertEqual(
            self.read_dictionary("fr"),
            {"goodbye": "[TODO] goodbye", "hello.world": "[TODO] hello.world"},
        )
        self.assertIn("Updated: resources/lang/fr.json", out)

    def test_mark_todo_with_existing_translation(self):
        self.sources()
        self.write_dictionary("fr", {"hello.world": "bonjour"})
        rc, _ = self.cli("--locales=fr", "--mark-todo")
        self.assertEqual(rc, 0)
        raw = (self.lang / "fr.json").read_text(encoding="utf-8")
        self.assertEqual(
            json.loads(raw),
            {"_meta": {"todo": ["goodbye"]}, "goodbye": "[TODO] goodbye", "hello.world": "bonjour"},
        )
        self.assertEqual(list(json.loads(raw)), ["_meta", "goodbye", "hello.world"])

    def test_dry_run_leaves_disk_untouched(self):
        self.sources()
        p = self.write_dictionary("fr", {"hello.world": "bonjour"})
        before = p.read_bytes()
        rc, out = self.cli("--locales=fr,de", "--dry-run", "--mark-todo")
        self.assertEqual(rc, 0)
        self.assertEqual(p.read_bytes(), before)
        self.assertFalse((self.lang / "de.json").exists())
        self.assertIn("[Dry Run] resources/lang/fr.json:", out)
        self.assertIn("[Dry Run] resources/lang/de.json:", out)
        self.assertIn('"goodbye": "[TODO] goodbye"', out)

    def test_commented_call_not_extracted(self):
        self.write(
            "app/a.php",
            """\
            <?php
            /* __('key') // with comment */
            echo __('live');
            """,
        )
        self.cli("--locales=en")
        self.assertEqual(self.read_dictionary("en"), {"live": "live"})


class TestProperties(ProjectTestCase):

    def test_second_run_is_byte_identical(self):
        self.sources()
        self.write_dictionary("fr", {"hello.world": "bonjour", "zzz": "Z"})
        self.write_dictionary("en", {})
        self.cli("--mark-todo")
        first = {loc: (self.lang / f"{loc}.json").read_bytes() for loc in ("en", "fr")}
        self.cli("--mark-todo")
        second = {loc: (self.lang / f"{loc}.json").read_bytes() for loc in ("en", "fr")}
        self.assertEqual(first, second)

    def test_keys_are_superset_and_sorted(self):
        self.sources()
        existing = {"Zebra": "Zèbre", "apple": "pomme", "Ünïcode": "ü"}
        self.write_dictionary("fr", existing)
        self.cli("--locales=fr", "--mark-todo")
        raw = (self.lang / "fr.json").read_text(encoding="utf-8")
        doc = json.loads(raw)
        self.assertTrue(set(existing) | {"hello.world", "goodbye"} <= set(doc))
        self.assertEqual(list(doc), sorted(doc))
        self.assertIn("Zèbre", raw)
        self.assertNotIn("\\u", raw)

    def test_todo_tracks_manual_translations(self):
        self.sources()
        self.cli("--locales=fr", "--mark-todo")
        self.assertEqual(self.read_dictionary("fr")["_meta"]["todo"], ["hello.world", "goodbye"])

        doc = self.read_dictionary("fr")
        doc["goodbye"] = "au revoir"
        self.write_dictionary("fr", doc)
        self.cli("--locales=fr", "--mark-todo")
        self.assertEqual(self.read_dictionary("fr")["_meta"]["todo"], ["hello.world"])

        doc = self.read_dictionary("fr")
        doc["hello.world"] = "bonjour"
        self.write_dictionary("fr", doc)
        self.cli("--locales=fr", "--mark-todo")
        self.assertNotIn("_meta", self.read_dictionary("fr"))

    def test_locales_auto_detected(self):
        self.sources()
        self.write_dictionary("nl", {})
        self.write_dictionary("en", {})
        rc, out = self.cli()
        self.assertEqual(rc, 0)
        self.assertEqual(self.read_dictionary("nl")["goodbye"], "[TODO] goodbye")
        self.assertEqual(self.read_dictionary("en")["goodbye"], "goodbye")
        self.assertLess(out.index("en.json"), out.index("nl.json"))


class TestNoOps(ProjectTestCase):

    def test_no_keys_found(self):
        self.write("app/a.php", "<?php echo 'plain';")
        rc, out = self.cli("--locales=fr")
        self.assertEqual(rc, 0)
        self.assertEqual(out, "")
        self.assertFalse(self.lang.exists())

    def test_no_locales(self):
        self.sources()
        rc, out = self.cli()
        self.assertEqual(rc, 0)
        self.assertEqual(out, "")
        self.assertFalse(self.lang.exists())


class TestErrors(ProjectTestCase):

    def test_malformed_dictionary_aborts_with_exit_2(self):
        self.sources()
        bad = self.lang / "de.json"
        bad.parent.mkdir(parents=True)
        bad.write_text('{"hello.world": ', encoding="utf-8")
        rc, _ = self.cli("--locales=de,fr")
        self.assertEqual(rc, 2)
        self.assertEqual(bad.read_text(encoding="utf-8"), '{"hello.world": ')
        # Whole run aborted: later locales untouched
        self.assertFalse((self.lang / "fr.json").exists())

    def test_bad_config_exit_2(self):
        self.sources()
        self.write("translations-sync.json", "{oops")
        rc, _ = self.cli("--locales=en")
        self.assertEqual(rc, 2)

    def test_non_utf8_dictionary_exit_2(self):
        self.sources()
        bad = self.lang / "fr.json"
        bad.parent.mkdir(parents=True)
        bad.write_bytes(b'{"k": "caf\xe9"}')
        rc, _ = self.cli("--locales=fr")
        self.assertEqual(rc, 2)
        self.assertEqual(bad.read_bytes(), b'{"k": "caf\xe9"}')

    def test_non_utf8_config_exit_2(self):
        self.sources()
        (self.root / "translations-sync.json").write_bytes(b'{"base_locale": "fran\xe7ais"}')
        rc, _ = self.cli("--locales=en")
        self.assertEqual(rc, 2)
        self.assertFalse((self.lang / "en.json").exists())

    def test_missing_root_exit_2(self):
        with contextlib.redirect_stderr(io.StringIO()):
            rc = main(["--root", str(self.root / "nope")])
        self.assertEqual(rc, 2)


class TestOptions(ProjectTestCase):

    def test_custom_path_and_lang_path(self):
        self.write("modules/Blog/view.blade.php", "{{ __('blog.title') }}")
        self.sources()
        rc, _ = self.cli("--path=modules", "--lang-path=lang", "--locales=en")
        self.assertEqual(rc, 0)
        data = json.loads((self.root / "lang" / "en.json").read_text(encoding="utf-8"))
        self.assertEqual(data, {"blog.title": "blog.title"})

    def test_config_file_base_locale(self):
        self.sources()
        self.write("translations-sync.json", json.dumps({"base_locale": "nl", "todo_marker": "[VERTALEN]"}))
        self.cli("--locales=nl,en")
        self.assertEqual(self.read_dictionary("nl")["goodbye"], "goodbye")
        self.assertEqual(self.read_dictionary("en")["goodbye"], "[VERTALEN] goodbye")

    def test_base_locale_flag_beats_config(self):
        self.sources()
        self.write("translations-sync.json", json.dumps({"base_locale": "nl"}))
        self.cli("--locales=de", "--base-locale=de")
        self.assertEqual(self.read_dictionary("de")["goodbye"], "goodbye")

    def test_parser_defaults(self):
        args = build_arg_parser().parse_args([])
        self.assertIsNone(args.locales)
        self.assertIsNone(args.path)
        self.assertFalse(args.mark_todo)
        self.assertFalse(args.dry_run)
        self.assertFalse(args.interactive)
        self.assertEqual(args.root, ".")


class TestInteractive(ProjectTestCase):

    def test_console_prompts_accept_decline_edit(self):
        self.write("app/a.php", "__('one') __('two') __('three')")
        answers = ["yes", "no", "edit", "Drie"]
        with patch("builtins.input", side_effect=answers):
            rc, _ = self.cli("--locales=nl", "--interactive")
        self.assertEqual(rc, 0)
        self.assertEqual(self.read_dictionary("nl"), {"one": "[TODO] one", "three": "Drie"})

    def test_interrupt_exits_130(self):
        self.write("app/a.php", "__('one')")
        with patch("builtins.input", side_effect=KeyboardInterrupt), contextlib.redirect_stderr(io.StringIO()):
            rc, _ = self.cli("--locales=nl", "--interactive")
        self.assertEqual(rc, 130)
        self.assertFalse((self.lang / "nl.json").exists())

    def test_injected_resolver(self):
        self.sources()
        answers = {"hello.world": EditTo("hello.world"), "goodbye": Decline()}
        report = sync_translations(
            SyncConfig(root=self.root),
            locales=["fr"],
            resolver=lambda key, placeholder: answers.get(key, Accept()),
            out=io.StringIO(),
        )
        self.assertEqual(self.read_dictionary("fr"), {"hello.world": "hello.world"})
        self.assertEqual(report.results[0].declined, ["goodbye"])
        self.assertEqual(len(report.written), 1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
