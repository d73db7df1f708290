"""Configuration loader.

Reads the ordered list of applications from the apps JSON file and the
optional launcher settings from YAML.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from ..system.paths import expand_tilde
from .models import DEFAULT_APPS_PATH, DEFAULT_SETTINGS_PATH, AppEntry, LauncherSettings

logger = logging.getLogger(__name__)

APPS_ENV_VAR = "HTPC_LAUNCHER_APPS"
SETTINGS_ENV_VAR = "HTPC_LAUNCHER_SETTINGS"


def resolve_apps_path(path: Optional[str] = None) -> Path:
    """Pick the apps file: explicit path, then environment, then default."""
    chosen = path or os.environ.get(APPS_ENV_VAR) or DEFAULT_APPS_PATH
    return Path(expand_tilde(chosen))


def resolve_settings_path(path: Optional[str] = None) -> Path:
    """Pick the settings file: explicit path, then environment, then default."""
    chosen = path or os.environ.get(SETTINGS_ENV_VAR) or DEFAULT_SETTINGS_PATH
    return Path(expand_tilde(chosen))


def _entry_from_item(name: Any, item: Any, position: int) -> AppEntry:
    """Build one AppEntry from a raw JSON item.

    Args:
        name: Entry name (may be None when the item carries it)
        item: Raw JSON object with ``run`` and optional ``icon``
        position: Position in the file, for error messages

    Returns:
        Validated app entry
    """
    if not isinstance(item, dict):
        raise ConfigError(f"App entry #{position} must be an object, got {type(item).__name__}")

    identifier = name if name is not None else item.get("name")
    if "run" not in item:
        raise ConfigError(f"App entry '{identifier or position}' has no 'run' command")

    try:
        return AppEntry(
            identifier=str(identifier) if identifier is not None else f"app{position}",
            launch_command=item["run"],
            icon_path=item.get("icon") or "",
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid app entry '{identifier or position}': {e}") from e


def parse_apps(data: Any) -> List[AppEntry]:
    """Convert decoded apps JSON into an ordered list of entries.

    Accepts a list of ``{"name", "run", "icon"}`` objects or an object
    keyed by name. Order follows the file in both cases.

    Args:
        data: Decoded JSON document

    Returns:
        Ordered app entries
    """
    if isinstance(data, list):
        return [_entry_from_item(None, item, i) for i, item in enumerate(data)]

    if isinstance(data, dict):
        return [
            _entry_from_item(name, item, i)
            for i, (name, item) in enumerate(data.items())
        ]

    raise ConfigError(f"Apps config must be a list or an object, got {type(data).__name__}")


def load_apps(path: Optional[str] = None) -> List[AppEntry]:
    """Load application entries from JSON.

    Args:
        path: Apps file path (optional)

    Returns:
        Ordered app entries

    Raises:
        ConfigError: If the file is missing, unreadable or malformed
    """
    apps_path = resolve_apps_path(path)

    try:
        with open(apps_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Apps config not found: {apps_path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read apps config {apps_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed JSON in {apps_path}: {e}") from e

    apps = parse_apps(data)
    logger.info(f"Loaded {len(apps)} apps from {apps_path}")
    return apps


def load_settings(path: Optional[str] = None) -> LauncherSettings:
    """Load launcher settings from YAML.

    A missing file yields the defaults.

    Args:
        path: Settings file path (optional)

    Returns:
        Launcher settings

    Raises:
        ConfigError: If the file exists but is unreadable or invalid
    """
    settings_path = resolve_settings_path(path)

    if not settings_path.exists():
        logger.warning(f"No settings file at {settings_path}, using defaults")
        return LauncherSettings()

    try:
        with open(settings_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read settings {settings_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {settings_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings in {settings_path} must be a mapping")

    try:
        settings = LauncherSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {settings_path}: {e}") from e

    logger.info(f"Loaded settings from {settings_path}")
    return settings
