"""
Win/loss detection.

Runs after the turn state machine on every tick. When a combatant's health
has dropped to zero or below, it declares the outcome, forces the encounter
into GAME_OVER and tears down the encounter data.
"""

from typing import TYPE_CHECKING, Optional

from ...core.engine.combatants import CombatantRole
from ...core.engine.game_state import EncounterContext, Outcome
from ...core.events.events import LogMessage, OutcomeDeclared

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager
    from .phase_manager import PhaseManager


class OutcomeManager:
    """Declares victory or defeat once a death condition is observed."""

    def __init__(self, event_manager: "EventManager", phase_manager: "PhaseManager"):
        self.event_manager = event_manager
        self.phase_manager = phase_manager

    def check_outcome(self, context: EncounterContext) -> Optional[Outcome]:
        """Work out the outcome without changing anything.

        Player defeat is checked first, so it wins when both sides fall on
        the same tick.
        """
        player = context.find_combatant(CombatantRole.PLAYER)
        if player is not None and player.is_defeated:
            return Outcome.DEFEAT

        enemy = context.find_combatant(CombatantRole.ENEMY)
        if enemy is not None and enemy.is_defeated:
            return Outcome.VICTORY

        return None

    def evaluate(self, context: EncounterContext) -> Optional[Outcome]:
        """Declare the outcome if one has been reached this tick.

        Returns:
            The outcome declared on this call, or None
        """
        if context.is_over:
            return None

        outcome = self.check_outcome(context)
        if outcome is None:
            return None

        self._declare(context, outcome)
        return outcome

    def _declare(self, context: EncounterContext, outcome: Outcome) -> None:
        context.outcome = outcome
        self.event_manager.publish(
            OutcomeDeclared(tick=context.tick_count, outcome=outcome),
            source="OutcomeManager",
        )
        self.event_manager.publish(
            LogMessage(
                tick=context.tick_count,
                message="You won!" if outcome is Outcome.VICTORY else "You lost!",
                category="BATTLE",
                level="INFO",
                source="OutcomeManager",
            ),
            source="OutcomeManager",
        )

        self.phase_manager.force_game_over(context, outcome.message)
        context.teardown()
