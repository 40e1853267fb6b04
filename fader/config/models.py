"""Typed configuration models for the image rotator.

The config subsystem relies on pydantic to validate host YAML files and to
hand strongly-typed, immutable objects to the rotation engine. Two families
live here: the *rotation* config (image pool plus timing) that is replaced
wholesale on every reload, and the *host* config that decides where the
rotation config comes from and which defaults apply.
"""
from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

DEFAULT_INTERVAL_MS = 5000.0
DEFAULT_FADE_MS = 3000.0
DEFAULT_SLOT_COUNT = 3


class RotationTiming(BaseModel):
    """Cadence of rotation ticks and duration of each crossfade."""

    interval_ms: float = Field(DEFAULT_INTERVAL_MS, gt=0)
    fade_ms: float = Field(DEFAULT_FADE_MS, gt=0)

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class FaderConfig(BaseModel):
    """Normalized rotation config: the image pool and its timing.

    Instances are compared by value; the host only reconfigures the engine
    when a freshly loaded config differs from the applied one.
    """

    images: Tuple[str, ...] = ()
    timing: RotationTiming = Field(default_factory=RotationTiming)

    model_config = ConfigDict(frozen=True)

    @property
    def is_idle(self) -> bool:
        return not self.images


class TelemetryConfig(BaseModel):
    """Logging switches for the host process."""

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    log_dir: str = Field("data/logs")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value


class HostConfig(BaseModel):
    """Host-facing parameters (``config/fader.yml``).

    ``config_source`` is opaque to the engine: a local path or an http(s)
    URL resolved by :func:`fader.config.loader.load_config_source`. The two
    defaults apply whenever the loaded document omits or invalidates the
    corresponding timing value. ``reload_interval_sec`` of zero means the
    source is loaded once at startup.
    """

    config_source: str = Field("images.json", min_length=1)
    default_interval_ms: float = Field(DEFAULT_INTERVAL_MS, gt=0)
    default_fade_ms: float = Field(DEFAULT_FADE_MS, gt=0)
    slot_count: PositiveInt = DEFAULT_SLOT_COUNT
    reload_interval_sec: float = Field(0.0, ge=0)
    seed: Optional[int] = None
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    model_config = ConfigDict(allow_inf_nan=False)


__all__ = [
    "DEFAULT_FADE_MS",
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_SLOT_COUNT",
    "FaderConfig",
    "HostConfig",
    "RotationTiming",
    "TelemetryConfig",
]
