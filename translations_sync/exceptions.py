# -*- coding: utf-8 -*-
"""Exceptions raised by the translation sync pipeline."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

__all__ = [
    "SyncError",
    "ConfigError",
    "DictionaryParseError",
    "DictionaryEncodeError",
]


class SyncError(Exception):
    """Base exception for translations_sync."""


class ConfigError(SyncError):
    """Raised when the sync configuration is missing or invalid."""


class DictionaryParseError(SyncError):
    """Raised when an existing <locale>.json cannot be parsed into a mapping.

    Never fall back to an empty dictionary here: the next write would wipe
    every existing translation for the locale.
    """

    def __init__(self, message: str, path: Optional[Path] = None, locale: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path
        self.locale = locale


class DictionaryEncodeError(SyncError):
    """Raised when a merged dictionary cannot be serialized to JSON."""

    def __init__(self, message: str, locale: Optional[str] = None) -> None:
        super().__init__(message)
        self.locale = locale
