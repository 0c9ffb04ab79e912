"""Data models for loadbar."""

from .loading_config import (
    DEFAULT_DELAY_START_MS,
    DEFAULT_MAX_LOADING_TIME_MS,
    DEFAULT_MIN_LOADING_TIME_MS,
    InvalidLoadingConfigError,
    LoadingConfig,
)
from .session import (
    VALID_PHASE_TRANSITIONS,
    VISIBLE_PHASES,
    InvalidPhaseTransitionError,
    LoadingPhase,
    Session,
)

__all__ = [
    "DEFAULT_DELAY_START_MS",
    "DEFAULT_MAX_LOADING_TIME_MS",
    "DEFAULT_MIN_LOADING_TIME_MS",
    "InvalidLoadingConfigError",
    "InvalidPhaseTransitionError",
    "LoadingConfig",
    "LoadingPhase",
    "Session",
    "VALID_PHASE_TRANSITIONS",
    "VISIBLE_PHASES",
]
