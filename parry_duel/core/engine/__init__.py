"""Encounter engine primitives.

- timer.py: PhaseTimer, the one-shot countdown shared by encounter phases
- combatants.py: Player and enemy records
- durations.py: Randomized telegraph durations
- game_state.py: EncounterState, Outcome and the per-tick EncounterContext
"""

from .combatants import Combatant, CombatantRole
from .durations import TelegraphDurationProvider
from .game_state import EncounterContext, EncounterState, Outcome
from .timer import PhaseTimer

__all__ = [
    "Combatant",
    "CombatantRole",
    "TelegraphDurationProvider",
    "EncounterContext",
    "EncounterState",
    "Outcome",
    "PhaseTimer",
]
