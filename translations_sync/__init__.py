"""Sync translation keys found in PHP/Blade/Vue sources into per-locale JSON dictionaries."""

__version__ = "1.0.0"
