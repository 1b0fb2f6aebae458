# -*- coding: utf-8 -*-
"""
Translation key extraction.

Finds the first literal argument of ``__('...')`` and ``@lang('...')`` calls in
PHP, Blade and Vue sources. Calls with extra arguments (``__('key', [...])``)
are matched too.

Comments are stripped from the whole file before matching, in one regex pass.
That pass does not know about string literals, so ``'http://x'`` loses
everything after ``//`` on that line. Keys sitting behind such a literal on the
same line are not extracted.
"""
from __future__ import annotations

import pathlib
import re
from typing import Iterable, Iterator, List, Sequence, Tuple

from .utils.logging import sync_logger

logger = sync_logger.getChild("extract")

DEFAULT_PATHS: Tuple[str, ...] = ("app", "resources", "routes")
SOURCE_SUFFIXES: Tuple[str, ...] = (".php", ".blade.php", ".vue")

COMMENT_RE = re.compile(r"//[^\n]*|/\*.*?\*/", re.S)
KEY_PATTERN = re.compile(r"""(?:__|@lang)\(\s*['"](?P<key>[^'"]+)['"]\s*[),]""")


def strip_comments(text: str) -> str:
    return COMMENT_RE.sub("", text)


def extract_keys_from_text(text: str) -> List[str]:
    """All non-empty keys in ``text`` (comments already removed), in source order."""
    return [m.group("key") for m in KEY_PATTERN.finditer(text) if m.group("key")]


def discover_files(base: pathlib.Path, suffixes: Sequence[str] = SOURCE_SUFFIXES) -> Iterator[pathlib.Path]:
    """Recursively yield files under ``base`` whose name ends with one of ``suffixes``.

    Sorted so extraction order (and therefore first-seen key order) is stable
    across filesystems.
    """
    wanted = tuple(suffixes)
    for p in sorted(base.rglob("*")):
        if p.is_file() and p.name.endswith(wanted):
            yield p


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def extract_translation_keys(
    root: pathlib.Path,
    paths: Sequence[str] = DEFAULT_PATHS,
    suffixes: Sequence[str] = SOURCE_SUFFIXES,
) -> List[str]:
    """Scan ``paths`` (relative to ``root``) and return unique keys in first-seen order."""
    keys: List[str] = []
    scanned = 0

    for rel in paths:
        base = root / rel
        if not base.is_dir():
            logger.warning("Scan path not found, skipping: %s", base)
            continue

        for p in discover_files(base, suffixes):
            try:
                text = p.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                logger.warning("Skipping non UTF-8 file %s: %s", p, e)
                continue
            scanned += 1
            found = extract_keys_from_text(strip_comments(text))
            if found:
                logger.debug("%s: %d key(s)", p, len(found))
            keys.extend(found)

    unique = _unique(keys)
    logger.info("Scanned %d file(s), %d key(s) (unique: %d)", scanned, len(keys), len(unique))
    return unique
