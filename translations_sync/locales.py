from __future__ import annotations

import pathlib
from typing import List, Optional, Sequence

from .utils.logging import sync_logger

logger = sync_logger.getChild("locales")


def parse_option_list(raw: Optional[str], default: Sequence[str]) -> List[str]:
    """Split a comma-separated CLI value; ``None`` means the option was not given."""
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def detect_locales(lang_dir: pathlib.Path) -> List[str]:
    """Return locale codes for every ``<locale>.json`` directly under ``lang_dir``.

    Missing directory yields an empty list.
    """
    if not lang_dir.is_dir():
        logger.info("Dictionary directory not found: %s", lang_dir)
        return []

    locales: List[str] = []
    for p in sorted(lang_dir.iterdir()):
        if not p.is_file() or p.suffix != ".json":
            continue
        locale = p.stem
        if locale and locale not in locales:
            locales.append(locale)
    return locales

