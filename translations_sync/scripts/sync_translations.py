# -*- coding: utf-8 -*-
"""
sync_translations.py — Sync translation strings from the codebase into <lang dir>/<locale>.json.

Scans PHP/Blade/Vue sources for __('...') and @lang('...') calls and adds every
missing key to each locale dictionary. Existing translations are never touched.

Usage Examples
--------------

1. Preview what would change (no writes):
   translations-sync --dry-run

2. Sync two locales and track untranslated keys in _meta.todo:
   translations-sync --locales=en,fr --mark-todo

3. Scan custom paths and confirm each new key:
   translations-sync --path=app,modules --interactive

Project defaults can live in translations-sync.json at the project root
(lang_path, paths, suffixes, base_locale, todo_marker, log_level).
"""
from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import List, Optional

from ..config import load_sync_config
from ..exceptions import SyncError
from ..locales import parse_option_list
from ..pipeline import sync_translations
from ..utils.logging import configure_level, sync_logger, temporarily

EXIT_OK = 0
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130


def run(args: argparse.Namespace) -> int:
    root = pathlib.Path(args.root).resolve()
    if not root.is_dir():
        print(f"Project root not found: {root}", file=sys.stderr)
        return EXIT_ERROR

    config = load_sync_config(root, pathlib.Path(args.config) if args.config else None)
    config = config.with_overrides(
        lang_path=args.lang_path,
        base_locale=args.base_locale,
        paths=parse_option_list(args.path, []) if args.path is not None else None,
    )
    if not args.verbose:
        configure_level(config.log_level)

    locales: Optional[List[str]] = None
    if args.locales is not None:
        locales = parse_option_list(args.locales, [])

    report = sync_translations(
        config,
        locales=locales,
        mark_todo=args.mark_todo,
        dry_run=args.dry_run,
        interactive=args.interactive,
    )

    if report.keys and report.locales:
        sync_logger.info(
            "Done. Keys: %d, locales: %d, files written: %d",
            len(report.keys),
            len(report.locales),
            len(report.written),
        )
    return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="translations-sync",
        description="Sync translation strings from the codebase into <lang dir>/<locale>.json",
    )
    ap.add_argument("--locales", help="Comma-separated list of locales (e.g., nl,en,de); default: every <locale>.json in the lang dir")
    ap.add_argument("--path", help="Comma-separated paths to scan (default: app,resources,routes)")
    ap.add_argument("--mark-todo", action="store_true", help="Track untranslated keys in _meta.todo")
    ap.add_argument("--dry-run", action="store_true", help="Display the resulting files only; no writes")
    ap.add_argument("--interactive", action="store_true", help="Ask before adding each new key")

    ap.add_argument("--root", default=".", help="Project root (default: current directory)")
    ap.add_argument("--lang-path", help="Dictionary directory relative to the root (default: resources/lang)")
    ap.add_argument("--config", help="Config file (default: <root>/translations-sync.json when present)")
    ap.add_argument("--base-locale", help="Locale whose placeholder is the key itself (default: en)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        if args.verbose:
            with temporarily(logging.DEBUG):
                return run(args)
        return run(args)
    except SyncError as e:
        sync_logger.error("%s", e)
        return EXIT_ERROR
    except OSError as e:
        sync_logger.error("Filesystem error: %s", e)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("", file=sys.stderr)
        return EXIT_INTERRUPTED

