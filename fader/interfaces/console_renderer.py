"""Text renderer that prints slot changes to a stream.

The renderer subscribes to :class:`~fader.rotation.models.RotationSnapshot`
updates and writes one line per slot whose visible image changed, including
the layer that became active and the crossfade duration a graphical renderer
would animate. It keeps the last rendered snapshot so unchanged slots stay
quiet. Slots that have no image yet are not printed.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO

from fader.rotation.models import RotationSnapshot, SlotState
from fader.rotation.rotation_engine import RotationEngine

LOGGER = logging.getLogger(__name__)


class ConsoleRenderer:
    """Thin consumer of engine snapshots; never mutates engine state."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self._last: RotationSnapshot | None = None
        self._unsubscribe: Callable[[], None] | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def attach(self, engine: RotationEngine) -> None:
        if self._unsubscribe is not None:
            return
        self._unsubscribe = engine.subscribe(self.render)
        self.render(engine.snapshot())

    def detach(self) -> None:
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, snapshot: RotationSnapshot) -> None:
        previous = self._last
        if previous is not None and snapshot.revision <= previous.revision:
            return
        for index, slot in enumerate(snapshot.slots):
            before = previous.slots[index] if previous and index < len(previous.slots) else None
            if before == slot or slot.visible_image is None:
                continue
            self._write(self.format_slot(index, slot, snapshot.fade_ms))
        self._last = snapshot

    @staticmethod
    def format_slot(index: int, slot: SlotState, fade_ms: float) -> str:
        image = slot.visible_image or "-"
        return f"[slot {index}] layer={slot.active_layer.value.upper()} image={image} fade={fade_ms:.0f}ms"

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text + "\n")
            self._stream.flush()
        except OSError as exc:  # pragma: no cover - depends on terminal availability
            LOGGER.warning("Failed to write slot update", exc_info=exc)


__all__ = ["ConsoleRenderer"]
