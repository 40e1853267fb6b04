"""Error hierarchy shared by the fader subsystems.

Centralizing exception types lets the host distinguish between recoverable
situations (a bad configuration document, which degrades to an idle display)
and programming errors (scheduling with a nonsensical interval). Degraded
configuration never surfaces as an exception inside the rotation engine.
"""
from __future__ import annotations


class CoreError(Exception):
    """Base class for all custom exceptions in the application."""


class ConfigurationError(CoreError):
    """Raised when host configuration files are invalid."""


class RotationError(CoreError):
    """Raised when the rotation engine is constructed with invalid parameters."""


class SchedulerError(CoreError):
    """Raised when the scheduler is asked to run with an invalid interval."""
