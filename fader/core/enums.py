"""Enumerations shared across fader subsystems."""
from __future__ import annotations

from enum import Enum


class Layer(str, Enum):
    """One of the two image holders of a slot (double buffering)."""

    A = "a"
    B = "b"

    @property
    def other(self) -> "Layer":
        return Layer.B if self is Layer.A else Layer.A
