"""Configuration loading, validation and normalization package."""

from .loader import is_remote_source, load_config_source, load_host_config, resolve_config_source
from .models import (
    DEFAULT_FADE_MS,
    DEFAULT_INTERVAL_MS,
    DEFAULT_SLOT_COUNT,
    FaderConfig,
    HostConfig,
    RotationTiming,
    TelemetryConfig,
)
from .normalize import normalize_config

__all__ = [
    "DEFAULT_FADE_MS",
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_SLOT_COUNT",
    "FaderConfig",
    "HostConfig",
    "RotationTiming",
    "TelemetryConfig",
    "is_remote_source",
    "load_config_source",
    "load_host_config",
    "normalize_config",
    "resolve_config_source",
]
