"""Shared context helpers for CLI command modules."""

from __future__ import annotations

import argparse

from loadbar.config import settings
from loadbar.models import LoadingConfig


def _override(args: argparse.Namespace, name: str, fallback: int) -> int:
    value = getattr(args, name, None)
    return fallback if value is None else int(value)


def resolve_loading_config(args: argparse.Namespace) -> LoadingConfig:
    """Build the run's LoadingConfig: CLI flags first, then settings.

    Raises:
        InvalidLoadingConfigError: If the combined timings are inconsistent.
    """
    return LoadingConfig(
        delay_start_ms=_override(args, "delay_start", settings.delay_start_ms),
        min_loading_time_ms=_override(
            args, "min_loading_time", settings.min_loading_time_ms
        ),
        max_loading_time_ms=_override(
            args, "max_loading_time", settings.max_loading_time_ms
        ),
    )


def resolve_ready_settle_ms(args: argparse.Namespace) -> int:
    """Ready settle delay for the run: CLI flag first, then settings."""
    return max(0, _override(args, "ready_settle", settings.ready_settle_ms))
