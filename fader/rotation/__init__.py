"""Slot rotation package: state machine, selection, scheduling."""
from .models import RotationSnapshot, SlotState, visible_set
from .rotation_engine import ReconfigureResult, RotationEngine
from .scheduler import Scheduler
from .selection import select_next
from .service import RotationService, TimingDefaults

__all__ = [
    "ReconfigureResult",
    "RotationEngine",
    "RotationService",
    "RotationSnapshot",
    "Scheduler",
    "SlotState",
    "TimingDefaults",
    "select_next",
    "visible_set",
]
