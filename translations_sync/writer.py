from __future__ import annotations

import os
import pathlib
import sys
import tempfile
from typing import Optional, TextIO

from .merge import LocaleResult
from .utils.logging import sync_logger

logger = sync_logger.getChild("writer")

NEWLINE = "\n"


def _existing_mode(path: pathlib.Path) -> Optional[int]:
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        return None


def atomic_write(path: pathlib.Path, data: str) -> None:
    """Replace the dictionary at ``path`` with ``data`` in one step.

    The document goes to a hidden ``.<locale>.json.*.tmp`` sibling first and is
    swapped in with ``os.replace``, so a crash mid-write leaves the previous
    dictionary intact. Creates the lang directory on first write and keeps the
    old file's permission bits.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _existing_mode(path)

    fd, staged = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline=NEWLINE) as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        if mode is not None:
            os.chmod(staged, mode)
        os.replace(staged, str(path))
    except BaseException:
        # staged file is orphaned if the swap never happened
        if os.path.exists(staged):
            os.unlink(staged)
        raise


def emit(result: LocaleResult, label: str, dry_run: bool, out: Optional[TextIO] = None) -> LocaleResult:
    """Print the document (dry-run) or persist it. ``label`` is the root-relative path."""
    out = out or sys.stdout
    if dry_run:
        out.write(f"[Dry Run] {label}:{NEWLINE}")
        out.write(result.document)
        return result

    atomic_write(result.path, result.document)
    logger.debug("Wrote %d byte(s) to %s", len(result.document.encode("utf-8")), result.path)
    result.written = True
    out.write(f"Updated: {label}{NEWLINE}")
    return result
