"""Normalization of decoded rotation config documents.

Two document shapes are accepted:

* legacy: a plain list of image identifiers, timing taken from the defaults;
* current: a mapping ``{"images": [...], "INTERVAL_MS": n, "FADE_MS": n}``
  where the camel-case keys ``intervalMs``/``fadeMs`` are also recognized.

:func:`normalize_config` is total. Whatever the loader hands over (``None``
after a failed fetch, scalars, half-broken mappings) the worst outcome is an
empty pool with default timing, which leaves the display idle.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Tuple

from .models import DEFAULT_FADE_MS, DEFAULT_INTERVAL_MS, FaderConfig, RotationTiming

LOGGER = logging.getLogger(__name__)

INTERVAL_KEYS: Tuple[str, str] = ("INTERVAL_MS", "intervalMs")
FADE_KEYS: Tuple[str, str] = ("FADE_MS", "fadeMs")


def normalize_config(
    raw: Any,
    default_interval_ms: float = DEFAULT_INTERVAL_MS,
    default_fade_ms: float = DEFAULT_FADE_MS,
) -> FaderConfig:
    """Turn an arbitrary decoded value into a valid :class:`FaderConfig`.

    Pool entries that are not non-empty strings are dropped with a warning,
    so a legacy list is not always used verbatim. Timing values may be
    numbers or plain numeric strings; strings with digit separators such as
    ``"1_000"`` are not numbers and fall back to the default.
    """

    interval_default = _positive_or(default_interval_ms, DEFAULT_INTERVAL_MS)
    fade_default = _positive_or(default_fade_ms, DEFAULT_FADE_MS)

    if _is_sequence(raw):
        images = _image_entries(raw)
        interval, fade = interval_default, fade_default
    elif isinstance(raw, Mapping):
        candidate = raw.get("images")
        images = _image_entries(candidate) if _is_sequence(candidate) else ()
        interval = _positive_or(_first_present(raw, INTERVAL_KEYS), interval_default)
        fade = _positive_or(_first_present(raw, FADE_KEYS), fade_default)
    else:
        if raw is not None:
            LOGGER.warning("Unrecognized config shape, rotation stays idle", extra={"shape": type(raw).__name__})
        images = ()
        interval, fade = interval_default, fade_default

    return FaderConfig(images=images, timing=RotationTiming(interval_ms=interval, fade_ms=fade))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _image_entries(values: Any) -> Tuple[str, ...]:
    """Keep pool entries in source order, duplicates included.

    Entries that are not non-empty strings cannot identify an image and are
    dropped.
    """

    images = tuple(value for value in values if isinstance(value, str) and value)
    if len(images) != len(values):
        LOGGER.warning("Dropped invalid image entries", extra={"dropped": len(values) - len(images)})
    return images


def _first_present(data: Mapping, keys: Tuple[str, ...]) -> Any:
    """Return the value of the first key that is present and not null."""

    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _coerce_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, str):
        if "_" in value:
            return None
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _positive_or(value: Any, fallback: float) -> float:
    number = _coerce_number(value)
    if number is None or not math.isfinite(number) or number <= 0:
        return fallback
    return number


__all__ = ["FADE_KEYS", "INTERVAL_KEYS", "normalize_config"]
