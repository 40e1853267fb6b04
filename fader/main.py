from __future__ import annotations

import asyncio
import logging
import os
import random
import signal
import sys
from pathlib import Path

from fader.config.loader import load_config_source, load_host_config
from fader.config.models import HostConfig
from fader.interfaces import ConsoleRenderer
from fader.rotation.rotation_engine import RotationEngine
from fader.rotation.scheduler import Scheduler
from fader.rotation.service import RotationService, TimingDefaults
from fader.telemetry import configure_logging

LOGGER = logging.getLogger(__name__)


def main() -> None:
    project_root = Path(__file__).resolve().parents[1]
    host_path = _resolve_host_config_path(project_root / "config")
    host = load_host_config(host_path)

    log_dir = Path(host.telemetry.log_dir)
    if not log_dir.is_absolute():
        log_dir = project_root / log_dir
    logger = configure_logging(log_dir=log_dir, level=host.telemetry.log_level)
    logger.info(
        "Bootstrapping rotator",
        extra={"config_source": host.config_source, "slot_count": host.slot_count},
    )
    try:
        asyncio.run(run(host))
    except KeyboardInterrupt:  # pragma: no cover - manual exit
        logger.info("Interrupted by user")
    logger.info("Shutdown complete")


async def run(
    host: HostConfig,
    *,
    stop_event: asyncio.Event | None = None,
    renderer: ConsoleRenderer | None = None,
) -> RotationService:
    """Run the rotator until ``stop_event`` is set (or a signal arrives).

    Returns the closed service so callers can inspect the final state.
    """

    loop = asyncio.get_running_loop()
    stop_event = stop_event or asyncio.Event()
    engine = RotationEngine(host.slot_count, rng=random.Random(host.seed))
    service = RotationService(
        engine,
        Scheduler(loop),
        TimingDefaults(interval_ms=host.default_interval_ms, fade_ms=host.default_fade_ms),
    )
    renderer = renderer or ConsoleRenderer()
    renderer.attach(engine)
    _install_signal_handlers(loop, stop_event)

    try:
        await _reload(service, host)
        while not stop_event.is_set():
            if host.reload_interval_sec <= 0:
                await stop_event.wait()
                break
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=host.reload_interval_sec)
            except asyncio.TimeoutError:
                await _reload(service, host)
    finally:
        renderer.detach()
        service.close()
    return service


async def _reload(service: RotationService, host: HostConfig) -> bool:
    # Fetch off-loop; apply on-loop so ticks and reconfiguration never overlap.
    raw = await asyncio.to_thread(load_config_source, host.config_source)
    changed = service.apply(raw)
    if changed:
        applied = service.applied_config
        LOGGER.info(
            "Config applied",
            extra={
                "config_source": host.config_source,
                "pool_size": len(applied.images) if applied else 0,
                "interval_ms": applied.timing.interval_ms if applied else None,
            },
        )
    return changed


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, stop_event: asyncio.Event) -> None:
    def _request_stop(signum: int) -> None:
        LOGGER.info("Received signal", extra={"signal": signum})
        stop_event.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, _request_stop, signum)
        except (NotImplementedError, RuntimeError, ValueError):  # pragma: no cover - platform specific
            LOGGER.debug("Signal handlers unavailable", extra={"signal": signum})


def _resolve_host_config_path(config_dir: Path) -> Path:
    env_path = os.environ.get("FADER_CONFIG")
    if env_path:
        return Path(env_path)
    return config_dir / "fader.yml"


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - top-level safety
        print(f"Fatal error: {exc}", file=sys.stderr)
        raise
