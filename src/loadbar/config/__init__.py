"""Configuration management for loadbar."""
from __future__ import annotations

from loadbar.config.paths import LoadbarPaths, get_paths, reset_paths
from loadbar.config.settings import Settings, get_settings_path, settings

__all__ = [
    "LoadbarPaths",
    "Settings",
    "get_paths",
    "get_settings_path",
    "reset_paths",
    "settings",
]
