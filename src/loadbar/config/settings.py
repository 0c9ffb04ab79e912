"""Configuration and settings persistence."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from loadbar.config.paths import get_paths
from loadbar.models.loading_config import (
    DEFAULT_DELAY_START_MS,
    DEFAULT_MAX_LOADING_TIME_MS,
    DEFAULT_MIN_LOADING_TIME_MS,
    LoadingConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_READY_SETTLE_MS = 50


def get_settings_path() -> Path:
    """Get the path to the settings file."""
    return get_paths().settings_file


def detect_terminal_theme() -> str:
    """Detect terminal light/dark preference."""
    # Check COLORFGBG env var (format: "fg;bg" where bg < 7 means dark)
    colorfgbg = os.environ.get("COLORFGBG", "")
    if colorfgbg:
        try:
            parts = colorfgbg.split(";")
            if len(parts) >= 2:
                bg = int(parts[-1])
                return "textual-light" if bg >= 7 else "textual-dark"
        except (ValueError, IndexError):
            pass
    return "textual-dark"


class Settings:
    """Persistent settings for loadbar."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        path = get_settings_path()
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable settings file %s: %s", path, e)
                data = {}
            if not isinstance(data, dict):
                logger.warning("Ignoring settings file %s: not a JSON object", path)
                data = {}
            self._data = data
        else:
            self._data = {}

    def _save(self) -> None:
        """Save settings to disk."""
        path = get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
            logger.info("Saved settings to %s: %s", path, self._data)
        except OSError as e:
            logger.error("Failed to save settings: %s", e)

    def get(self, key: str) -> Any:
        """Get a raw setting value."""
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value and persist to disk."""
        self._data[key] = value
        self._save()

    @property
    def theme(self) -> str:
        """Get the current theme, detecting from terminal if not set."""
        saved = self._data.get("theme")
        if saved:
            return str(saved)
        return detect_terminal_theme()

    @theme.setter
    def theme(self, value: str) -> None:
        self.set("theme", value)

    # --- Loading indicator timings ---

    def _get_loading_settings(self) -> dict[str, Any]:
        raw = self._data.get("loading", {})
        if isinstance(raw, dict):
            return raw
        return {}

    def _get_ms(self, key: str, default: int) -> int:
        raw = self._get_loading_settings().get(key, default)
        try:
            return int(raw)
        except (TypeError, ValueError):
            return default

    def _set_ms(self, key: str, value: int) -> None:
        loading = self._get_loading_settings()
        loading[key] = int(value)
        self.set("loading", loading)

    @property
    def delay_start_ms(self) -> int:
        """Milliseconds before the indicator may appear."""
        return self._get_ms("delay_start_ms", DEFAULT_DELAY_START_MS)

    @delay_start_ms.setter
    def delay_start_ms(self, value: int) -> None:
        self._set_ms("delay_start_ms", value)

    @property
    def min_loading_time_ms(self) -> int:
        """Milliseconds the indicator stays visible once shown."""
        return self._get_ms("min_loading_time_ms", DEFAULT_MIN_LOADING_TIME_MS)

    @min_loading_time_ms.setter
    def min_loading_time_ms(self, value: int) -> None:
        self._set_ms("min_loading_time_ms", value)

    @property
    def max_loading_time_ms(self) -> int:
        """Milliseconds after which the indicator is force-hidden."""
        return self._get_ms("max_loading_time_ms", DEFAULT_MAX_LOADING_TIME_MS)

    @max_loading_time_ms.setter
    def max_loading_time_ms(self, value: int) -> None:
        self._set_ms("max_loading_time_ms", value)

    @property
    def ready_settle_ms(self) -> int:
        """Grace period between a page-ready signal and completion."""
        return max(0, self._get_ms("ready_settle_ms", DEFAULT_READY_SETTLE_MS))

    @ready_settle_ms.setter
    def ready_settle_ms(self, value: int) -> None:
        self._set_ms("ready_settle_ms", max(0, int(value)))

    def loading_config(self) -> LoadingConfig:
        """Build a validated LoadingConfig from the stored timings.

        Raises:
            InvalidLoadingConfigError: If the stored timings are inconsistent.
        """
        return LoadingConfig(
            delay_start_ms=self.delay_start_ms,
            min_loading_time_ms=self.min_loading_time_ms,
            max_loading_time_ms=self.max_loading_time_ms,
        )


# Global settings instance
settings = Settings()
