"""Launcher configuration: app entries and settings."""

from .loader import load_apps, load_settings, parse_apps
from .models import AppEntry, GamepadMapping, LauncherSettings

__all__ = [
    "AppEntry",
    "GamepadMapping",
    "LauncherSettings",
    "load_apps",
    "load_settings",
    "parse_apps",
]
