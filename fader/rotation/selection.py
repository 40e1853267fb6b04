"""Selection of the next image for a rotating slot.

Pure functions only; randomness comes from an injected ``random.Random``-like
object so tests can seed it. Fallback order for :func:`select_next`:

1. a single-entry pool always yields that entry;
2. otherwise pick uniformly among entries not visible on any slot;
3. otherwise pick uniformly among entries different from the slot's own image;
4. otherwise (every entry equals the current image) keep the current image.

As long as the pool holds more distinct values than there are distinct
visible images, the chosen image is never already on screen.
"""
from __future__ import annotations

import random
from typing import AbstractSet, Protocol, Sequence, TypeVar

from fader.core.types import ImageId, ImagePool, MaybeImage

T = TypeVar("T")


class RandomSource(Protocol):
    """Subset of :class:`random.Random` used by the rotation subsystem."""

    def choice(self, seq: Sequence[T]) -> T: ...

    def randrange(self, stop: int) -> int: ...


def pick_random(pool: ImagePool, rng: RandomSource) -> ImageId:
    """Uniformly random entry of a non-empty pool."""

    return rng.choice(pool)


def pick_random_not_in(pool: ImagePool, excluded: AbstractSet[ImageId], rng: RandomSource) -> ImageId | None:
    candidates = [image for image in pool if image not in excluded]
    if not candidates:
        return None
    return rng.choice(candidates)


def pick_random_excluding(pool: ImagePool, exclude: MaybeImage, rng: RandomSource) -> ImageId | None:
    candidates = [image for image in pool if image != exclude]
    if not candidates:
        return None
    return rng.choice(candidates)


def select_next(
    pool: ImagePool,
    visible: AbstractSet[ImageId],
    current: MaybeImage,
    rng: RandomSource | None = None,
) -> MaybeImage:
    """Choose the image a slot currently showing ``current`` should fade to.

    ``pool`` must be non-empty; the engine never rotates an idle pool.
    """

    rng = rng or random
    if len(pool) == 1:
        return pool[0]
    chosen = pick_random_not_in(pool, visible, rng)
    if chosen is None:
        chosen = pick_random_excluding(pool, current, rng)
    if chosen is None:
        return current
    return chosen


__all__ = [
    "RandomSource",
    "pick_random",
    "pick_random_excluding",
    "pick_random_not_in",
    "select_next",
]
