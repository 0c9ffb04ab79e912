"""Timing configuration for the loading indicator."""

from dataclasses import dataclass

DEFAULT_DELAY_START_MS = 100
DEFAULT_MIN_LOADING_TIME_MS = 300
DEFAULT_MAX_LOADING_TIME_MS = 5000


class InvalidLoadingConfigError(ValueError):
    """Raised when loading timings violate their ordering constraints."""


@dataclass(frozen=True, slots=True)
class LoadingConfig:
    """Immutable timings governing one indicator controller.

    Attributes:
        delay_start_ms: How long a start must wait before the indicator
            may appear. Work that completes inside this window never
            shows the indicator.
        min_loading_time_ms: How long the indicator stays visible once
            shown, even if completion arrives sooner.
        max_loading_time_ms: Hard cap on visibility, measured from the
            moment the indicator appeared.
    """

    delay_start_ms: int = DEFAULT_DELAY_START_MS
    min_loading_time_ms: int = DEFAULT_MIN_LOADING_TIME_MS
    max_loading_time_ms: int = DEFAULT_MAX_LOADING_TIME_MS

    def __post_init__(self) -> None:
        if self.delay_start_ms < 0:
            raise InvalidLoadingConfigError(
                f"delay_start_ms must be >= 0, got {self.delay_start_ms}"
            )
        if self.min_loading_time_ms < 0:
            raise InvalidLoadingConfigError(
                f"min_loading_time_ms must be >= 0, got {self.min_loading_time_ms}"
            )
        if self.min_loading_time_ms > self.max_loading_time_ms:
            raise InvalidLoadingConfigError(
                "min_loading_time_ms must not exceed max_loading_time_ms "
                f"({self.min_loading_time_ms} > {self.max_loading_time_ms})"
            )
