"""Top-level package for the three-slot crossfade image rotator.

The package exposes the subsystems (config, core, rotation, telemetry,
interfaces) that together drive a small set of display slots, each
periodically crossfading to a different image drawn from a shared pool.
Each subpackage should remain import-safe for any runtime component.
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
