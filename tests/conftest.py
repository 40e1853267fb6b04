from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import pytest

from fader.config.models import FaderConfig, RotationTiming
from fader.rotation.rotation_engine import RotationEngine
from fader.rotation.scheduler import Scheduler
from fader.rotation.service import RotationService, TimingDefaults


@dataclass
class ManualTimer:
    when: float
    callback: Callable[..., Any]
    args: tuple = ()
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> None:
        """Invoke the callback regardless of cancellation (an in-flight firing)."""

        self.callback(*self.args)


@dataclass
class ManualLoop:
    """Event-loop stand-in whose clock only moves when the test says so."""

    now: float = 0.0
    timers: list[ManualTimer] = field(default_factory=list)

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualTimer:
        timer = ManualTimer(when=self.now + delay, callback=callback, args=args)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [timer for timer in self.pending if timer.when <= target]
            if not due:
                break
            timer = min(due, key=lambda item: item.when)
            self.timers.remove(timer)
            self.now = max(self.now, timer.when)
            timer.run()
        self.now = max(self.now, target)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def manual_loop() -> ManualLoop:
    return ManualLoop()


@pytest.fixture
def scheduler(manual_loop: ManualLoop) -> Scheduler:
    return Scheduler(manual_loop)


@pytest.fixture
def engine(rng: random.Random) -> RotationEngine:
    return RotationEngine(3, rng=rng)


@pytest.fixture
def service(engine: RotationEngine, scheduler: Scheduler) -> RotationService:
    return RotationService(engine, scheduler, TimingDefaults(interval_ms=5000, fade_ms=3000))


@pytest.fixture
def image_pool() -> tuple[str, ...]:
    return ("a.png", "b.png", "c.png", "d.png", "e.png", "f.png")


@pytest.fixture
def fader_config_factory() -> Callable[..., FaderConfig]:
    def _factory(images: tuple[str, ...] = ("a.png", "b.png", "c.png", "d.png"), **timing: float) -> FaderConfig:
        return FaderConfig(
            images=images,
            timing=RotationTiming(
                interval_ms=timing.get("interval_ms", 5000),
                fade_ms=timing.get("fade_ms", 3000),
            ),
        )

    return _factory


@pytest.fixture
def write_text(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
