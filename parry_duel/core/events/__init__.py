"""Event system for publisher-subscriber communication.

- event_manager.py: Per-tick FIFO event bus
- events.py: Event definitions exchanged between the encounter core and its views
"""

from .event_manager import EventManager, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    EncounterStateChanged,
    CombatantHit,
    AttackParried,
    CombatMessageShown,
    CombatMessageCleared,
    OutcomeDeclared,
    LogMessage,
    DebugMessage,
    LogSaveRequested,
    DebugToggleRequested,
    GameStarted,
    GameEnded,
    ManagerInitialized,
)

__all__ = [
    "EventManager",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "EncounterStateChanged",
    "CombatantHit",
    "AttackParried",
    "CombatMessageShown",
    "CombatMessageCleared",
    "OutcomeDeclared",
    "LogMessage",
    "DebugMessage",
    "LogSaveRequested",
    "DebugToggleRequested",
    "GameStarted",
    "GameEnded",
    "ManagerInitialized",
]
