"""Host-side glue tying config, engine and scheduler together.

``RotationService.apply`` is the single entry point for freshly loaded
configuration. It normalizes the decoded document, compares it with what is
applied, and only on a difference reconfigures the engine and reschedules
ticks. Because the old schedule is stopped before the engine reads the new
pool, no tick planned against the old interval can observe the new state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fader.config.models import DEFAULT_FADE_MS, DEFAULT_INTERVAL_MS, FaderConfig
from fader.config.normalize import normalize_config
from fader.rotation.models import RotationSnapshot
from fader.rotation.rotation_engine import RotationEngine
from fader.rotation.scheduler import Scheduler

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimingDefaults:
    """Fallback timing used when a loaded document omits or breaks a value."""

    interval_ms: float = DEFAULT_INTERVAL_MS
    fade_ms: float = DEFAULT_FADE_MS


class RotationService:
    """Drive a :class:`RotationEngine` from config reloads and a scheduler."""

    def __init__(
        self,
        engine: RotationEngine,
        scheduler: Scheduler,
        defaults: TimingDefaults | None = None,
    ) -> None:
        self._engine = engine
        self._scheduler = scheduler
        self._defaults = defaults or TimingDefaults()
        self._applied: FaderConfig | None = None
        self._closed = False

    @property
    def engine(self) -> RotationEngine:
        return self._engine

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def applied_config(self) -> FaderConfig | None:
        return self._applied

    @property
    def closed(self) -> bool:
        return self._closed

    def apply(self, raw: Any) -> bool:
        """Apply a decoded config document; returns ``True`` if anything changed."""

        if self._closed:
            return False
        config = normalize_config(raw, self._defaults.interval_ms, self._defaults.fade_ms)
        if config == self._applied:
            LOGGER.debug("Config unchanged, keeping current rotation")
            return False
        self._scheduler.stop()
        self._engine.reconfigure(config)
        self._applied = config
        if config.is_idle:
            LOGGER.info("No images configured, rotation stopped")
        else:
            self._scheduler.start(config.timing.interval_ms, self._on_tick)
        return True

    def snapshot(self) -> RotationSnapshot:
        return self._engine.snapshot()

    def close(self) -> None:
        """Stop ticking and close the engine; safe to call repeatedly."""

        if self._closed:
            return
        self._closed = True
        self._scheduler.stop()
        self._engine.close()
        LOGGER.info("Rotation service closed")

    def _on_tick(self) -> None:
        if self._closed:
            return
        self._engine.tick()


__all__ = ["RotationService", "TimingDefaults"]
