"""
Render context building.

Converts the UI manager's display state (plus a little read-only encounter
information such as the active state) into a :class:`RenderContext` that
any renderer can draw.
"""
from typing import TYPE_CHECKING, Optional

from ..core.engine.combatants import CombatantRole
from ..core.engine.game_state import EncounterState
from ..core.renderable import (
    Color,
    CombatantRenderData,
    MessageRenderData,
    RenderContext,
)

if TYPE_CHECKING:
    from ..core.engine.game_state import EncounterContext
    from .managers.log_manager import LogManager
    from .managers.ui_manager import UIManager


PLAYER_ART = [
    r"    /\ ",
    r"    ( /   @ @    ()",
    r"     \\ __| |__  /",
    r"      \/.   .'.   .\/",
    r"     /-|  .   .   . |-\ ",
    r"    / /-\  .   .  /-\ \ ",
    r"     / /-`---'-\ \ ",
]

GHOST_ART = [
    r"  .-'-.",
    r" ( o o )",
    r" |  ^  |",
    r" | __  |",
    r" '-----'  GHOST",
]

STATE_LABELS = {
    EncounterState.PLAYER_TURN: "Your turn",
    EncounterState.ENEMY_TELEGRAPH: "Enemy turn",
    EncounterState.ENEMY_ATTACK: "Enemy attacks!",
    EncounterState.GAME_OVER: "Game over - press any key",
}


class RenderBuilder:
    """Builds render contexts from display state."""

    def __init__(
        self,
        ui_manager: "UIManager",
        log_manager: Optional["LogManager"] = None,
        key_hints: Optional[list[str]] = None,
        log_lines: int = 3,
    ):
        self.ui_manager = ui_manager
        self.log_manager = log_manager
        self.key_hints = key_hints or []
        self.log_lines = log_lines

        self._combatant_styles = {
            CombatantRole.PLAYER: ("Hero", PLAYER_ART, "left", Color.from_name("white")),
            CombatantRole.ENEMY: ("Ghost", GHOST_ART, "right", Color.from_name("red")),
        }

    def build_render_context(self, encounter: "EncounterContext") -> RenderContext:
        """Build complete render context for the current frame."""
        display = self.ui_manager.display
        context = RenderContext(state_name=encounter.state.name)

        for role, (current, maximum) in display.health.items():
            name, art, side, color = self._combatant_styles[role]
            if display.flashing is role:
                color = Color.from_name("yellow")
            context.combatants.append(
                CombatantRenderData(
                    name=name,
                    art=list(art),
                    hp_current=current,
                    hp_max=maximum,
                    side=side,
                    color=color,
                )
            )

        if display.combat_message:
            context.combat_message = MessageRenderData(text=display.combat_message)

        if display.outcome_message:
            context.outcome_message = MessageRenderData(
                text=display.outcome_message,
                color=Color.from_name("white"),
                emphasis=True,
            )

        context.banner = display.banner
        context.state_label = STATE_LABELS[encounter.state]
        if encounter.state == EncounterState.ENEMY_ATTACK:
            context.phase_progress = encounter.phase_timer.progress

        if display.gameplay_visible:
            context.key_hints = list(self.key_hints)

        if self.log_manager is not None:
            context.log_lines = self.log_manager.get_formatted_messages(self.log_lines)

        return context
