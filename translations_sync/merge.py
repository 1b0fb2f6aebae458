# -*- coding: utf-8 -*-
"""
Dictionary merge for one locale.

A dictionary is the parsed ``<locale>.json``: key -> translation, plus the
reserved ``_meta`` entry ``{"todo": [key, ...]}`` which is sorted together with
the translations.

Rules
- Existing entries are never overwritten.
- New keys go through a resolver: Accept (placeholder), Decline (skip) or
  EditTo(text). Non-interactive runs use ``accept_all``.
- Placeholder is the key itself for the base locale, ``"<marker> <key>"`` otherwise.
- With mark-todo, ``_meta.todo`` lists exactly the keys still missing, empty or
  marker-prefixed; an empty list removes ``_meta``.
"""
from __future__ import annotations

import dataclasses
import json
import pathlib
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .exceptions import DictionaryEncodeError, DictionaryParseError
from .utils.logging import compact_json, sync_logger

logger = sync_logger.getChild("merge")

META_KEY = "_meta"
TODO_KEY = "todo"
DEFAULT_BASE_LOCALE = "en"
DEFAULT_TODO_MARKER = "[TODO]"

Dictionary = Dict[str, Any]


# ── Resolutions ──────────────────────────────────────────────────────────────
@dataclasses.dataclass(frozen=True)
class Accept:
    """Insert the generated placeholder."""


@dataclasses.dataclass(frozen=True)
class Decline:
    """Leave the key out of this locale for this run."""


@dataclasses.dataclass(frozen=True)
class EditTo:
    """Insert ``text`` verbatim, even when it equals the key."""
    text: str


Resolution = Union[Accept, Decline, EditTo]
# resolver(key, placeholder) -> Resolution
Resolver = Callable[[str, str], Resolution]


def accept_all(key: str, placeholder: str) -> Resolution:
    return Accept()


# ── Results ──────────────────────────────────────────────────────────────────
@dataclasses.dataclass
class LocaleResult:
    locale: str
    path: pathlib.Path
    document: str
    added: List[str] = dataclasses.field(default_factory=list)
    declined: List[str] = dataclasses.field(default_factory=list)
    todo: Optional[List[str]] = None
    written: bool = False


# ── Load / serialize ─────────────────────────────────────────────────────────
def load_dictionary(path: pathlib.Path, locale: Optional[str] = None) -> Dictionary:
    """Parse ``path`` into an ordered dict, or ``{}`` when the file does not exist."""
    if not path.exists():
        logger.debug("No dictionary at %s; starting empty", path)
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DictionaryParseError(f"Failed to parse {path}: {e}", path=path, locale=locale) from e
    if not isinstance(data, dict):
        raise DictionaryParseError(
            f"Failed to parse {path}: top-level value must be an object, got {type(data).__name__}",
            path=path,
            locale=locale,
        )
    return data


def serialize_dictionary(translations: Dictionary, locale: Optional[str] = None) -> str:
    """Pretty JSON (4-space indent, literal unicode) with a trailing newline."""
    try:
        return json.dumps(translations, indent=4, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise DictionaryEncodeError(f"JSON encoding failed for locale {locale!r}: {e}", locale=locale) from e


def sort_dictionary(translations: Dictionary) -> Dictionary:
    return {k: translations[k] for k in sorted(translations)}


# ── Placeholders / merge ─────────────────────────────────────────────────────
def placeholder_for(
    key: str,
    locale: str,
    base_locale: str = DEFAULT_BASE_LOCALE,
    todo_marker: str = DEFAULT_TODO_MARKER,
) -> str:
    if locale == base_locale:
        return key
    return f"{todo_marker} {key}"


def merge_keys(
    translations: Dictionary,
    keys: Iterable[str],
    locale: str,
    resolver: Resolver = accept_all,
    base_locale: str = DEFAULT_BASE_LOCALE,
    todo_marker: str = DEFAULT_TODO_MARKER,
) -> Tuple[List[str], List[str]]:
    """Insert missing ``keys`` into ``translations`` in place.

    Returns ``(added, declined)``.
    """
    added: List[str] = []
    declined: List[str] = []

    for key in keys:
        if key in translations:
            continue

        placeholder = placeholder_for(key, locale, base_locale, todo_marker)
        resolution = resolver(key, placeholder)

        if isinstance(resolution, Decline):
            declined.append(key)
            continue
        if isinstance(resolution, EditTo):
            translations[key] = resolution.text
        elif isinstance(resolution, Accept):
            translations[key] = placeholder
        else:
            raise TypeError(f"Resolver returned {resolution!r} for {key!r}; expected Accept, Decline or EditTo")
        added.append(key)

    return added, declined


# ── TODO metadata ────────────────────────────────────────────────────────────
def is_untranslated(value: Any, todo_marker: str = DEFAULT_TODO_MARKER) -> bool:
    """Missing, empty or still carrying the marker prefix."""
    if value is None or value == "":
        return True
    return str(value).startswith(todo_marker)


def existing_todo(translations: Dictionary) -> List[str]:
    meta = translations.get(META_KEY)
    if not isinstance(meta, dict):
        return []
    items = meta.get(TODO_KEY)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, str) and item]


def build_todo_list(
    translations: Dictionary,
    keys: Sequence[str],
    todo_marker: str = DEFAULT_TODO_MARKER,
) -> List[str]:
    """Previous ``_meta.todo`` plus untranslated extracted keys, minus anything translated since."""
    candidates = existing_todo(translations)
    candidates.extend(key for key in keys if is_untranslated(translations.get(key), todo_marker))

    todo: List[str] = []
    for key in candidates:
        if key in todo:
            continue
        if not is_untranslated(translations.get(key), todo_marker):
            continue
        todo.append(key)
    return todo


def apply_todo_meta(translations: Dictionary, todo: List[str]) -> Dictionary:
    if todo:
        translations[META_KEY] = {TODO_KEY: todo}
    else:
        translations.pop(META_KEY, None)
    return translations


# ── One locale, end to end ───────────────────────────────────────────────────
def sync_locale(
    locale: str,
    path: pathlib.Path,
    keys: Sequence[str],
    resolver: Resolver = accept_all,
    mark_todo: bool = False,
    base_locale: str = DEFAULT_BASE_LOCALE,
    todo_marker: str = DEFAULT_TODO_MARKER,
) -> LocaleResult:
    """Load, merge, sort and serialize one locale. Nothing is written here."""
    translations = load_dictionary(path, locale=locale)

    added, declined = merge_keys(
        translations,
        keys,
        locale,
        resolver=resolver,
        base_locale=base_locale,
        todo_marker=todo_marker,
    )

    todo: Optional[List[str]] = None
    if mark_todo:
        todo = build_todo_list(translations, keys, todo_marker)
        apply_todo_meta(translations, todo)
        logger.debug("%s todo=%s", locale, compact_json(todo))

    final = sort_dictionary(translations)
    logger.info("%s: %d added, %d declined", locale, len(added), len(declined))

    return LocaleResult(
        locale=locale,
        path=path,
        document=serialize_dictionary(final, locale=locale),
        added=added,
        declined=declined,
        todo=todo,
    )
