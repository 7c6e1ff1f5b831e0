"""Per-project soldoc configuration (.soldoc/config.json)."""

from __future__ import annotations

import fnmatch
import json
import logging
import os
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = ".soldoc"
DEFAULT_CONFIG_NAME = "config.json"

DEFAULTS: dict[str, Any] = {
    "hlevel": 1,
    "include_tests": False,
    "exclude": [],
}


def find_project_root(start: str = ".") -> Path:
    """Find the project root by looking for .git directory."""
    current = Path(start).resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return Path(start).resolve()


def get_config_path(project_root: Path | None = None) -> Path:
    if project_root is None:
        project_root = find_project_root()
    return project_root / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_NAME


def _load_project_config(project_root: Path) -> dict:
    """Load .soldoc/config.json if it exists.

    Returns an empty dict if the file is missing or malformed.
    """
    config_path = get_config_path(project_root)
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring config %s: expected a JSON object", config_path)
        return {}
    return data


def _validated(key: str, value: Any) -> Any:
    default = DEFAULTS[key]
    if key == "hlevel":
        ok = isinstance(value, int) and not isinstance(value, bool) and value >= 1
    elif key == "include_tests":
        ok = isinstance(value, bool)
    else:
        ok = isinstance(value, list) and all(isinstance(p, str) for p in value)
    if not ok:
        log.warning("Invalid config value for %r: %r (using %r)", key, value, default)
        return default
    return value


def load_config(project_root: Path | None = None) -> dict[str, Any]:
    """Effective configuration: defaults, then the config file, then env.

    Resolution order for ``hlevel`` (first match wins):

    1. ``SOLDOC_HLEVEL`` environment variable.
    2. ``.soldoc/config.json`` → ``"hlevel"``.
    3. Default: 1.
    """
    if project_root is None:
        project_root = find_project_root()
    raw = _load_project_config(project_root)
    config = {key: _validated(key, raw[key]) if key in raw else value for key, value in DEFAULTS.items()}
    config["exclude"] = list(config["exclude"])

    override = os.environ.get("SOLDOC_HLEVEL")
    if override:
        try:
            config["hlevel"] = _validated("hlevel", int(override))
        except ValueError:
            log.warning("Ignoring non-integer SOLDOC_HLEVEL=%r", override)
    return config


def write_project_config(config: dict, project_root: Path | None = None) -> Path:
    """Write (or update) .soldoc/config.json.

    Merges *config* into the existing config so existing keys are preserved.
    Returns the path of the written file.
    """
    if project_root is None:
        project_root = find_project_root()
    config_path = get_config_path(project_root)
    config_path.parent.mkdir(exist_ok=True)
    existing = _load_project_config(project_root)
    existing.update(config)
    config_path.write_text(json.dumps(existing, indent=2) + "\n", encoding="utf-8")
    return config_path


def is_excluded(contract_name: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatchcase(contract_name, pattern) for pattern in patterns)
