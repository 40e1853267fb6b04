"""Periodic tick scheduler on a single-threaded event loop.

The scheduler arms one timer at a time through the loop's ``call_later`` and
re-arms it after every firing, aiming each firing at ``start + n * interval``
on the loop clock so callback latency does not accumulate as drift.

Cancellation uses an explicit token per schedule. :meth:`Scheduler.stop`
deactivates the token *and* cancels the pending handle, so a firing that was
already queued when stop was requested finds an inactive token and does
nothing. Changing the interval is always stop-then-start.
"""
from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Callable, Protocol

from fader.core.errors import SchedulerError
from fader.core.types import TickCallback

LOGGER = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerLoop(Protocol):
    """Subset of :class:`asyncio.AbstractEventLoop` the scheduler relies on."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...

    def time(self) -> float: ...


class _ScheduleToken:
    """Liveness flag shared by all firings of one started schedule."""

    __slots__ = ("active",)

    def __init__(self) -> None:
        self.active = True


class Scheduler:
    """Invoke a callback every ``interval_ms`` until stopped."""

    def __init__(self, loop: TimerLoop | None = None) -> None:
        self._loop = loop
        self._token: _ScheduleToken | None = None
        self._handle: TimerHandle | None = None
        self._callback: TickCallback | None = None
        self._interval_ms: float | None = None
        self._fired = 0

    @property
    def running(self) -> bool:
        return self._token is not None and self._token.active

    @property
    def interval_ms(self) -> float | None:
        return self._interval_ms if self.running else None

    @property
    def fired(self) -> int:
        """Number of callbacks delivered since construction."""

        return self._fired

    def start(self, interval_ms: float, callback: TickCallback) -> None:
        """Start calling ``callback`` every ``interval_ms`` milliseconds.

        A running schedule is stopped first.
        """

        if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)):
            raise SchedulerError(f"interval_ms must be a number, got {interval_ms!r}")
        if not math.isfinite(interval_ms) or interval_ms <= 0:
            raise SchedulerError(f"interval_ms must be finite and positive, got {interval_ms!r}")
        self.stop()
        loop = self._resolve_loop()
        token = _ScheduleToken()
        self._token = token
        self._callback = callback
        self._interval_ms = float(interval_ms)
        period = self._interval_ms / 1_000.0
        self._arm(loop, token, period, loop.time() + period)
        LOGGER.debug("Scheduler started", extra={"interval_ms": self._interval_ms})

    def restart(self, interval_ms: float) -> None:
        """Stop and start again with the current callback and a new interval."""

        if self._callback is None:
            raise SchedulerError("Scheduler.restart() called before start()")
        self.start(interval_ms, self._callback)

    def stop(self) -> None:
        """Stop the schedule; calling it again is a no-op."""

        token, handle = self._token, self._handle
        self._token = None
        self._handle = None
        if token is None or not token.active:
            return
        token.active = False
        if handle is not None:
            handle.cancel()
        LOGGER.debug("Scheduler stopped", extra={"interval_ms": self._interval_ms})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _resolve_loop(self) -> TimerLoop:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError as exc:
                raise SchedulerError("Scheduler.start() requires a running event loop") from exc
        return self._loop

    def _arm(self, loop: TimerLoop, token: _ScheduleToken, period: float, deadline: float) -> None:
        delay = max(0.0, deadline - loop.time())
        self._handle = loop.call_later(delay, self._fire, loop, token, period, deadline)

    def _fire(self, loop: TimerLoop, token: _ScheduleToken, period: float, deadline: float) -> None:
        if not token.active:
            return
        callback = self._callback
        try:
            if callback is not None:
                self._fired += 1
                callback()
        except Exception:
            LOGGER.exception("Scheduled callback failed", extra={"interval_ms": self._interval_ms})
        if not token.active:
            return
        next_deadline = deadline + period
        now = loop.time()
        if next_deadline < now:
            # Fell behind (suspended host, slow callback): skip missed periods.
            missed = math.ceil((now - next_deadline) / period)
            next_deadline += missed * period
        self._arm(loop, token, period, next_deadline)


__all__ = ["Scheduler", "TimerHandle", "TimerLoop"]
