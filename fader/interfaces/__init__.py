"""External user interfaces package."""

from .console_renderer import ConsoleRenderer

__all__ = ["ConsoleRenderer"]
