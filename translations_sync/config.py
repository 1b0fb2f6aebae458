"""Project configuration: built-in defaults, overridden by translations-sync.json, overridden by CLI options."""
import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .exceptions import ConfigError
from .utils.logging import sync_logger

CONFIG_FILENAME = "translations-sync.json"

SYNC_DEFAULTS: Dict[str, Any] = {
    "lang_path": "resources/lang",
    "paths": ["app", "resources", "routes"],
    "suffixes": [".php", ".blade.php", ".vue"],
    "base_locale": "en",
    "todo_marker": "[TODO]",
    "log_level": "WARNING",
}


@dataclass(frozen=True)
class SyncConfig:
    root: Path
    lang_path: str = SYNC_DEFAULTS["lang_path"]
    paths: Tuple[str, ...] = tuple(SYNC_DEFAULTS["paths"])
    suffixes: Tuple[str, ...] = tuple(SYNC_DEFAULTS["suffixes"])
    base_locale: str = SYNC_DEFAULTS["base_locale"]
    todo_marker: str = SYNC_DEFAULTS["todo_marker"]
    log_level: str = SYNC_DEFAULTS["log_level"]
    source: Optional[Path] = field(default=None, compare=False)

    @property
    def lang_dir(self) -> Path:
        return self.root / self.lang_path

    def dictionary_path(self, locale: str) -> Path:
        return self.lang_dir / f"{locale}.json"

    def display_path(self, locale: str) -> str:
        """Root-relative path used in operator-facing messages."""
        return f"{self.lang_path.rstrip('/')}/{locale}.json"

    def with_overrides(self, **overrides: Any) -> "SyncConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        for key in ("paths", "suffixes"):
            if key in values:
                values[key] = tuple(values[key])
        return replace(self, **values)


def _as_str_list(key: str, value: Any, cfg_path: Path) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"{cfg_path}: '{key}' must be a list of non-empty strings")
    return tuple(value)


def _read_config_file(cfg_path: Path) -> Dict[str, Any]:
    try:
        raw = cfg_path.read_text(encoding="utf-8")
        data = json.loads(raw or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to parse {cfg_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path}: top-level value must be an object")
    return data


def load_sync_config(root: Path, config_file: Optional[Path] = None) -> SyncConfig:
    """Build a SyncConfig for ``root``.

    Reads ``config_file`` when given (it must exist), otherwise
    ``<root>/translations-sync.json`` when present. Unknown keys are ignored
    with a warning.
    """
    root = Path(root)
    cfg_path = config_file
    if cfg_path is not None:
        cfg_path = Path(cfg_path)
        if not cfg_path.is_absolute():
            cfg_path = root / cfg_path
        if not cfg_path.exists():
            raise ConfigError(f"Config file not found: {cfg_path}")
    else:
        candidate = root / CONFIG_FILENAME
        cfg_path = candidate if candidate.exists() else None

    if cfg_path is None:
        sync_logger.debug("No %s under %s; using defaults", CONFIG_FILENAME, root)
        return SyncConfig(root=root)

    data = _read_config_file(cfg_path)
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in SYNC_DEFAULTS:
            sync_logger.warning("Ignoring unknown config key %r in %s", key, cfg_path)
            continue
        if key in ("paths", "suffixes"):
            values[key] = _as_str_list(key, value, cfg_path)
        elif not isinstance(value, str) or not value:
            raise ConfigError(f"{cfg_path}: '{key}' must be a non-empty string")
        else:
            values[key] = value

    sync_logger.debug("Loaded config from %s", cfg_path)
    return SyncConfig(root=root, source=cfg_path, **values)
