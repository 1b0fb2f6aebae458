# FILE: translations_sync/utils/logging.py
"""
Unified logging helpers for translations-sync.

- One package logger writing to stderr ("LEVEL: message"), installed once.
- Level comes from TRANSLATIONS_SYNC_LOG_LEVEL, then the config "log_level", then the default.
- Small helper to compact JSON for log lines.
"""

import json
import logging
import os
from contextlib import contextmanager
from typing import Any, Optional

LOG_LEVEL_ENV = "TRANSLATIONS_SYNC_LOG_LEVEL"


# ---------------------------
# Level helpers
# ---------------------------

def _level_from_string(level_str: Any) -> int:
    """Map string level to logging constant; defaults to INFO on unknown."""
    level = getattr(logging, str(level_str).upper(), None)
    return level if isinstance(level, int) else logging.INFO


def resolve_level(configured: Optional[str] = None, default: int = logging.WARNING) -> int:
    """Environment override first, then the configured value, then ``default``."""
    env_val = os.environ.get(LOG_LEVEL_ENV)
    if env_val:
        return _level_from_string(env_val)
    if configured:
        return _level_from_string(configured)
    return default


# ---------------------------
# Public logger factory
# ---------------------------

def get_sync_logger(
    name: str = "translations_sync",
    *,
    default_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Create or return the package logger.

    Child loggers (``translations_sync.extract`` etc.) propagate here, so only
    this one carries a handler.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(h)
        logger.setLevel(resolve_level(default=default_level))
    return logger


# Singleton logger used across the package
sync_logger = get_sync_logger()


def configure_level(configured: Optional[str]) -> int:
    """Apply the config-file level (env still wins). Returns the effective level."""
    level = resolve_level(configured, default=sync_logger.level or logging.WARNING)
    sync_logger.setLevel(level)
    return level


# ---------------------------
# Format utilities
# ---------------------------

def compact_json(obj: Any, limit: int = 1200) -> str:
    """Compact JSON string for logging; truncate if too long."""
    try:
        s = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        s = str(obj)
    return s if len(s) <= limit else s[:limit] + "…(truncated)"


# ---------------------------
# Temporary level override
# ---------------------------

@contextmanager
def temporarily(level: int):
    """
    Temporarily raise/lower the package logger level.

    Example:
        with temporarily(logging.DEBUG):
            sync_translations(config)
    """
    logger = sync_logger
    old = logger.level
    try:
        logger.setLevel(level)
        yield logger
    finally:
        logger.setLevel(old)
