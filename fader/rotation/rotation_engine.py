"""Rotation state machine for the crossfading display slots.

``RotationEngine`` owns the slot array, the current image pool and the
current timing. It is mutated only through :meth:`RotationEngine.initialize`,
:meth:`RotationEngine.tick` and :meth:`RotationEngine.reconfigure`; renderers
read :class:`RotationSnapshot` objects, either by polling
:meth:`RotationEngine.snapshot` or by subscribing to changes.

Each tick rotates exactly one randomly chosen slot so visible change stays
sparse. All operations are synchronous and expected to run on the host's
single event loop; there is no locking.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Tuple

from fader.config.models import DEFAULT_SLOT_COUNT, FaderConfig, RotationTiming
from fader.core.errors import RotationError
from fader.core.types import ImagePool
from fader.rotation.models import RotationSnapshot, SlotState, visible_set
from fader.rotation.selection import RandomSource, pick_random, select_next

LOGGER = logging.getLogger(__name__)

SnapshotListener = Callable[[RotationSnapshot], None]


@dataclass(frozen=True, slots=True)
class ReconfigureResult:
    """What a :meth:`RotationEngine.reconfigure` call changed."""

    pool_changed: bool
    interval_changed: bool
    reinitialized: bool


class RotationEngine:
    """Track slot layers and rotate one slot per tick."""

    def __init__(
        self,
        slot_count: int = DEFAULT_SLOT_COUNT,
        *,
        rng: RandomSource | None = None,
        timing: RotationTiming | None = None,
    ) -> None:
        if slot_count < 1:
            raise RotationError(f"slot_count must be positive, got {slot_count}")
        self._rng: RandomSource = rng or random.Random()
        self._slots: Tuple[SlotState, ...] = tuple(SlotState() for _ in range(slot_count))
        self._pool: Tuple[str, ...] = ()
        self._timing = timing or RotationTiming()
        self._revision = 0
        self._active = True
        self._listeners: List[SnapshotListener] = []

    @property
    def pool(self) -> Tuple[str, ...]:
        return self._pool

    @property
    def timing(self) -> RotationTiming:
        return self._timing

    @property
    def slot_count(self) -> int:
        return len(self._slots)

    @property
    def active(self) -> bool:
        return self._active

    @property
    def config(self) -> FaderConfig:
        return FaderConfig(images=self._pool, timing=self._timing)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------
    def initialize(self, pool: ImagePool) -> bool:
        """Give every slot a random image from ``pool`` on both layers.

        An empty pool leaves the slots as they were. Returns ``True`` when the
        slots were (re)initialized.
        """

        if not self._active or not pool:
            return False
        self._pool = tuple(pool)
        self._slots = tuple(SlotState.showing(pick_random(self._pool, self._rng)) for _ in self._slots)
        LOGGER.debug("Slots initialized", extra={"visible": list(self.snapshot().visible_images)})
        self._publish()
        return True

    def tick(self) -> int | None:
        """Rotate one random slot to a new image.

        Returns the index of the rotated slot, or ``None`` when the engine is
        idle (empty pool) or already closed.
        """

        if not self._active or not self._pool:
            return None
        target = self._rng.randrange(len(self._slots))
        slot = self._slots[target]
        current = slot.visible_image
        new_image = select_next(self._pool, visible_set(self._slots), current, self._rng)
        if new_image is None:
            return None
        slots = list(self._slots)
        slots[target] = slot.crossfade_to(new_image)
        self._slots = tuple(slots)
        LOGGER.debug(
            "Slot rotated",
            extra={"slot": target, "previous": current, "image": new_image, "layer": slots[target].active_layer.value},
        )
        self._publish()
        return target

    def reconfigure(self, config: FaderConfig) -> ReconfigureResult:
        """Replace pool and timing wholesale with ``config``.

        Slots are re-initialized when the pool goes from empty to non-empty or
        is replaced with a different pool. An empty pool keeps the slots as
        they are so the last images stay on screen.
        """

        if not self._active:
            return ReconfigureResult(pool_changed=False, interval_changed=False, reinitialized=False)
        pool_changed = config.images != self._pool
        interval_changed = config.timing.interval_ms != self._timing.interval_ms
        fade_changed = config.timing.fade_ms != self._timing.fade_ms
        self._timing = config.timing
        reinitialized = False
        if pool_changed:
            if config.images:
                reinitialized = self.initialize(config.images)
            else:
                self._pool = ()
                LOGGER.info("Image pool is empty, rotation idle")
        if (fade_changed or interval_changed) and not reinitialized:
            self._publish()
        LOGGER.info(
            "Rotation reconfigured",
            extra={
                "pool_size": len(self._pool),
                "interval_ms": self._timing.interval_ms,
                "fade_ms": self._timing.fade_ms,
                "reinitialized": reinitialized,
            },
        )
        return ReconfigureResult(
            pool_changed=pool_changed,
            interval_changed=interval_changed,
            reinitialized=reinitialized,
        )

    def close(self) -> None:
        """Deactivate the engine; later transitions are ignored."""

        if not self._active:
            return
        self._active = False
        self._listeners.clear()
        LOGGER.debug("Rotation engine closed")

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    def snapshot(self) -> RotationSnapshot:
        return RotationSnapshot(
            slots=self._slots,
            fade_ms=self._timing.fade_ms,
            interval_ms=self._timing.interval_ms,
            revision=self._revision,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for every new snapshot; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self) -> None:
        self._revision += 1
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                LOGGER.exception("Snapshot listener failed", extra={"revision": snapshot.revision})


__all__ = ["ReconfigureResult", "RotationEngine", "SnapshotListener"]
