"""Centralized path management for loadbar.

Follows XDG Base Directory Specification:
- Config: $XDG_CONFIG_HOME/loadbar (default: ~/.config/loadbar)
- State: $XDG_STATE_HOME/loadbar (default: ~/.local/state/loadbar)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _xdg_config_home() -> Path:
    """Get XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _xdg_state_home() -> Path:
    """Get XDG_STATE_HOME, defaulting to ~/.local/state."""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


@dataclass
class LoadbarPaths:
    """Centralized path management following XDG spec."""

    _config_home: Path = field(default_factory=_xdg_config_home)
    _state_home: Path = field(default_factory=_xdg_state_home)

    @property
    def config_dir(self) -> Path:
        """Global config: ~/.config/loadbar/"""
        return self._config_home / "loadbar"

    @property
    def settings_file(self) -> Path:
        """Settings file: ~/.config/loadbar/settings.json"""
        return self.config_dir / "settings.json"

    @property
    def state_dir(self) -> Path:
        """Global state: ~/.local/state/loadbar/"""
        return self._state_home / "loadbar"

    @property
    def debug_log(self) -> Path:
        """Debug log: ~/.local/state/loadbar/debug.log"""
        return self.state_dir / "debug.log"


# Singleton instance
_paths: LoadbarPaths | None = None


def get_paths() -> LoadbarPaths:
    """Get the paths singleton, resolving XDG locations on first call."""
    global _paths
    if _paths is None:
        _paths = LoadbarPaths()
    return _paths


def reset_paths() -> None:
    """Reset paths singleton (for testing)."""
    global _paths
    _paths = None
