"""Encounter state and the simulation context passed to every tick.

This module defines the four encounter states, the terminal outcomes, and
:class:`EncounterContext`, which bundles all mutable encounter data (both
combatants, the shared phase timer, the active state) so that the tick
logic receives everything explicitly instead of reaching for globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from .combatants import Combatant, CombatantRole
from .timer import PhaseTimer


# Target of the phase timer before the first telegraph is drawn
INITIAL_PHASE_DURATION = 1.0


class EncounterState(Enum):
    """States of the combat turn state machine."""

    PLAYER_TURN = auto()
    ENEMY_TELEGRAPH = auto()
    ENEMY_ATTACK = auto()
    GAME_OVER = auto()

    @property
    def is_terminal(self) -> bool:
        return self is EncounterState.GAME_OVER


class Outcome(Enum):
    """How an encounter ended, with the text shown to the player."""

    VICTORY = "YOU WIN"
    DEFEAT = "YOU LOSE"

    @property
    def message(self) -> str:
        return self.value


@dataclass
class EncounterContext:
    """All mutable data of one encounter.

    Combatants are held as optional references because the encounter tears
    them down when it reaches GAME_OVER; readers must use
    :meth:`find_combatant` and cope with ``None``.
    """

    player: Optional[Combatant]
    enemy: Optional[Combatant]
    state: EncounterState = EncounterState.PLAYER_TURN
    phase_timer: PhaseTimer = field(
        default_factory=lambda: PhaseTimer(INITIAL_PHASE_DURATION)
    )
    outcome: Optional[Outcome] = None
    active_message: Optional[str] = None
    tick_count: int = 0
    elapsed_total: float = 0.0

    @classmethod
    def new(cls, player_health: int, enemy_health: int) -> EncounterContext:
        """Create a fresh encounter in PLAYER_TURN."""
        return cls(
            player=Combatant.player(player_health),
            enemy=Combatant.enemy(enemy_health),
        )

    @property
    def is_over(self) -> bool:
        return self.state.is_terminal

    def find_combatant(self, role: CombatantRole) -> Optional[Combatant]:
        """Look up a combatant, returning None once the encounter is torn down."""
        if role is CombatantRole.PLAYER:
            return self.player
        return self.enemy

    def require_combatant(self, role: CombatantRole) -> Combatant:
        combatant = self.find_combatant(role)
        if combatant is None:
            raise RuntimeError(f"{role.name} combatant no longer exists")
        return combatant

    def restart_phase_timer(self, target: float) -> PhaseTimer:
        """Replace the phase timer with a new one counting to ``target``."""
        self.phase_timer = PhaseTimer(target)
        return self.phase_timer

    def teardown(self) -> None:
        """Drop all encounter-scoped data after the encounter ends."""
        self.player = None
        self.enemy = None
        self.active_message = None
