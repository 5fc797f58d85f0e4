"""
Input context selection.

Which keys mean what depends on whether the encounter is still running or
has reached its game-over screen.
"""
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine.game_state import EncounterContext


class InputContext(Enum):
    """Input context defines which keys are active and what they do."""
    ENCOUNTER = "encounter"
    GAME_OVER = "game_over"


class InputContextManager:
    """Determines the active input context from the encounter state."""

    def __init__(self, context: "EncounterContext"):
        self.encounter = context

    def get_current_context(self) -> InputContext:
        if self.encounter.is_over:
            return InputContext.GAME_OVER
        return InputContext.ENCOUNTER
