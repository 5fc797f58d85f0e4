"""Encounter events and their payloads.

Events are immutable dataclasses published on the :class:`EventManager`.
The encounter core uses them to talk to the display and log layers without
holding references to either.

Event Design Principles:
- Every event carries the tick on which it was raised
- Payloads use enums (CombatantRole, EncounterState, Outcome) instead of strings
- Keep event types few; the encounter is a single fixed loop
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..engine.combatants import CombatantRole
    from ..engine.game_state import EncounterState, Outcome


class EventType(Enum):
    """Types of encounter events that managers can subscribe to."""
    # State machine
    ENCOUNTER_STATE_CHANGED = auto()
    COMBATANT_HIT = auto()
    ATTACK_PARRIED = auto()

    # Display
    COMBAT_MESSAGE_SHOWN = auto()
    COMBAT_MESSAGE_CLEARED = auto()
    OUTCOME_DECLARED = auto()

    # Logging
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()
    DEBUG_TOGGLE_REQUESTED = auto()

    # Lifecycle
    GAME_STARTED = auto()
    GAME_ENDED = auto()
    MANAGER_INITIALIZED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all encounter events."""
    tick: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class EncounterStateChanged(GameEvent):
    """Event emitted when the turn state machine changes state."""
    old_state: "EncounterState"
    new_state: "EncounterState"

    def __post_init__(self):
        # Frozen dataclasses need object.__setattr__ for derived fields
        object.__setattr__(self, 'event_type', EventType.ENCOUNTER_STATE_CHANGED)


@dataclass(frozen=True)
class CombatantHit(GameEvent):
    """Event emitted when an attack lands and health drops."""
    role: "CombatantRole"
    damage: int
    health: int
    max_health: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBATANT_HIT)


@dataclass(frozen=True)
class AttackParried(GameEvent):
    """Event emitted when the player cancels an enemy attack."""
    reaction_time: float

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_PARRIED)


@dataclass(frozen=True)
class CombatMessageShown(GameEvent):
    """Transient combat notice, e.g. a telegraph warning."""
    text: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBAT_MESSAGE_SHOWN)


@dataclass(frozen=True)
class CombatMessageCleared(GameEvent):
    """Removes whatever combat notice is currently displayed."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBAT_MESSAGE_CLEARED)


@dataclass(frozen=True)
class OutcomeDeclared(GameEvent):
    """Terminal result of the encounter."""
    outcome: "Outcome"

    @property
    def message(self) -> str:
        return self.outcome.message

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.OUTCOME_DECLARED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Asks the log manager to write its buffer to disk."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)


@dataclass(frozen=True)
class DebugToggleRequested(GameEvent):
    """Asks the log manager to show or hide debug lines."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_TOGGLE_REQUESTED)


@dataclass(frozen=True)
class GameStarted(GameEvent):
    """Event emitted when the encounter loop starts."""
    player_health: int
    enemy_health: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_STARTED)


@dataclass(frozen=True)
class GameEnded(GameEvent):
    """Event emitted when the game loop shuts down."""
    result: str  # "victory", "defeat", "quit"
    reason: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_ENDED)


@dataclass(frozen=True)
class ManagerInitialized(GameEvent):
    """Event emitted when a manager is initialized."""
    manager_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MANAGER_INITIALIZED)
