# -*- coding: utf-8 -*-
"""
translations_sync.pipeline — one run: resolve locales, extract keys, merge and emit each locale.

Usage
-----
from translations_sync.config import load_sync_config
from translations_sync.pipeline import sync_translations
report = sync_translations(load_sync_config(Path(".")), locales=["en", "fr"], mark_todo=True)

Locales are processed one after another. The first fatal error (malformed
dictionary, encode failure, filesystem error) aborts the whole run; locales
already written stay written.
"""
from __future__ import annotations

import dataclasses
from typing import List, Optional, Sequence, TextIO

from .config import SyncConfig
from .extract import extract_translation_keys
from .locales import detect_locales
from .merge import LocaleResult, Resolver, accept_all, sync_locale
from .prompt import ConsoleResolver
from .utils.logging import sync_logger
from .writer import emit

logger = sync_logger.getChild("pipeline")


@dataclasses.dataclass
class SyncReport:
    keys: List[str] = dataclasses.field(default_factory=list)
    locales: List[str] = dataclasses.field(default_factory=list)
    results: List[LocaleResult] = dataclasses.field(default_factory=list)

    @property
    def written(self) -> List[LocaleResult]:
        return [r for r in self.results if r.written]


def sync_translations(
    config: SyncConfig,
    locales: Optional[Sequence[str]] = None,
    mark_todo: bool = False,
    dry_run: bool = False,
    interactive: bool = False,
    resolver: Optional[Resolver] = None,
    out: Optional[TextIO] = None,
) -> SyncReport:
    """Run the sync for ``config``.

    ``locales=None`` auto-detects from the dictionary directory. ``resolver``
    overrides the per-key policy; otherwise interactive runs prompt on the
    console and everything else accepts the placeholder.
    """
    report = SyncReport()
    report.keys = extract_translation_keys(config.root, config.paths, config.suffixes)

    if not report.keys:
        logger.warning("No translation keys found.")
        return report

    report.locales = list(locales) if locales is not None else detect_locales(config.lang_dir)
    if not report.locales:
        logger.warning("No locales found in %s; nothing to sync.", config.lang_dir)
        return report

    for locale in report.locales:
        if resolver is not None:
            locale_resolver = resolver
        elif interactive:
            locale_resolver = ConsoleResolver(locale=locale, out=out)
        else:
            locale_resolver = accept_all

        result = sync_locale(
            locale,
            config.dictionary_path(locale),
            report.keys,
            resolver=locale_resolver,
            mark_todo=mark_todo,
            base_locale=config.base_locale,
            todo_marker=config.todo_marker,
        )
        emit(result, config.display_path(locale), dry_run=dry_run, out=out)
        report.results.append(result)

    return report
