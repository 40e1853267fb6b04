"""Shared type aliases for readability and contract enforcement.

Image identifiers are opaque strings (paths or URIs); the engine never looks
inside them. Aliases defined here keep signatures readable across the config
and rotation packages.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, TypeAlias

ImageId: TypeAlias = str
ImagePool: TypeAlias = Sequence[ImageId]
MaybeImage: TypeAlias = Optional[ImageId]

TickCallback: TypeAlias = Callable[[], Any]
