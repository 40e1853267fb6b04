"""Datamodels describing slot layers and the snapshots handed to renderers.

Every display slot holds two image layers (A and B) and a flag naming the
active one. A rotation writes the next image into the inactive layer and then
flips the flag, so a renderer can keep the old image on screen while the new
one fades in. :class:`SlotState` and :class:`RotationSnapshot` are immutable:
the engine replaces slot values rather than mutating them, which lets a
snapshot share them without copying.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Tuple

from fader.core.enums import Layer
from fader.core.types import ImageId, MaybeImage


@dataclass(frozen=True, slots=True)
class SlotState:
    """Double-buffered image holder for one display position."""

    layer_a: MaybeImage = None
    layer_b: MaybeImage = None
    active_layer: Layer = Layer.A

    @classmethod
    def showing(cls, image: ImageId) -> "SlotState":
        """Return a freshly initialized slot with both layers set to ``image``."""

        return cls(layer_a=image, layer_b=image, active_layer=Layer.A)

    @property
    def visible_image(self) -> MaybeImage:
        return self.layer(self.active_layer)

    @property
    def inactive_layer(self) -> Layer:
        return self.active_layer.other

    def layer(self, which: Layer) -> MaybeImage:
        return self.layer_a if which is Layer.A else self.layer_b

    def crossfade_to(self, image: ImageId) -> "SlotState":
        """Write ``image`` into the inactive layer and make that layer active.

        The currently active layer is left as-is; it may still be on screen
        while the renderer fades.
        """

        target = self.inactive_layer
        if target is Layer.A:
            return replace(self, layer_a=image, active_layer=target)
        return replace(self, layer_b=image, active_layer=target)


@dataclass(frozen=True, slots=True)
class RotationSnapshot:
    """Read-only view of all slots plus the fade duration for renderers.

    ``revision`` increases with every state change so subscribers can skip
    snapshots they already rendered.
    """

    slots: Tuple[SlotState, ...] = field(default_factory=tuple)
    fade_ms: float = 0.0
    interval_ms: float = 0.0
    revision: int = 0

    @property
    def visible_images(self) -> Tuple[MaybeImage, ...]:
        return tuple(slot.visible_image for slot in self.slots)

    def visible_set(self) -> FrozenSet[ImageId]:
        return visible_set(self.slots)


def visible_set(slots: Iterable[SlotState]) -> FrozenSet[ImageId]:
    """Images currently shown across ``slots``, empty layers excluded."""

    return frozenset(slot.visible_image for slot in slots if slot.visible_image)


__all__ = ["RotationSnapshot", "SlotState", "visible_set"]
