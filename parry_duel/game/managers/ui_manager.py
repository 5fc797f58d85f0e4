"""
Display state for the encounter.

The UI manager is the display sink of the encounter: it turns core events
(combat notices, hits, parries, the final outcome) and per-tick health
reads into a small :class:`DisplayState` that the render builder converts
into a frame. It never writes back to encounter data.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ...core.engine.combatants import CombatantRole
from ...core.engine.timer import PhaseTimer
from ...core.events.events import (
    AttackParried,
    CombatantHit,
    CombatMessageShown,
    EventType,
    ManagerInitialized,
    OutcomeDeclared,
)

if TYPE_CHECKING:
    from ...core.engine.game_state import EncounterContext
    from ...core.events.event_manager import EventManager


@dataclass
class DisplayState:
    """What is currently on screen."""

    health: dict[CombatantRole, tuple[int, int]] = field(default_factory=dict)
    combat_message: Optional[str] = None
    outcome_message: Optional[str] = None
    gameplay_visible: bool = True
    banner: Optional[str] = None
    flashing: Optional[CombatantRole] = None


class UIManager:
    """Tracks display state from encounter events."""

    def __init__(self, event_manager: "EventManager", banner_duration: float = 0.6):
        self.event_manager = event_manager
        self.display = DisplayState()
        self.banner_duration = banner_duration
        self._banner_timer: Optional[PhaseTimer] = None

        self._subscribe_to_events()

        self.event_manager.publish(
            ManagerInitialized(tick=0, manager_name="UIManager"),
            source="UIManager",
        )

    def _subscribe_to_events(self) -> None:
        self.event_manager.subscribe(
            EventType.COMBAT_MESSAGE_SHOWN,
            self._handle_message_shown,
            subscriber_name="UIManager.message_shown",
        )
        self.event_manager.subscribe(
            EventType.COMBAT_MESSAGE_CLEARED,
            self._handle_message_cleared,
            subscriber_name="UIManager.message_cleared",
        )
        self.event_manager.subscribe(
            EventType.OUTCOME_DECLARED,
            self._handle_outcome_declared,
            subscriber_name="UIManager.outcome_declared",
        )
        self.event_manager.subscribe(
            EventType.COMBATANT_HIT,
            self._handle_combatant_hit,
            subscriber_name="UIManager.combatant_hit",
        )
        self.event_manager.subscribe(
            EventType.ATTACK_PARRIED,
            self._handle_attack_parried,
            subscriber_name="UIManager.attack_parried",
        )

    # ============== Event handlers ==============

    def _handle_message_shown(self, event) -> None:
        if isinstance(event, CombatMessageShown) and self.display.gameplay_visible:
            self.display.combat_message = event.text

    def _handle_message_cleared(self, event) -> None:
        self.display.combat_message = None

    def _handle_outcome_declared(self, event) -> None:
        if isinstance(event, OutcomeDeclared):
            self.clear_gameplay_ui()
            self.display.outcome_message = event.message

    def _handle_combatant_hit(self, event) -> None:
        if isinstance(event, CombatantHit) and self.display.gameplay_visible:
            self.display.flashing = event.role
            self.show_banner(f"-{event.damage}")

    def _handle_attack_parried(self, event) -> None:
        if isinstance(event, AttackParried) and self.display.gameplay_visible:
            self.show_banner("Parried!")

    # ============== Display updates ==============

    def refresh_health(self, context: "EncounterContext") -> None:
        """Copy current health values into the display.

        Combatants that no longer exist (after the encounter is torn down)
        are skipped and keep no health line.
        """
        if not self.display.gameplay_visible:
            return
        for role in CombatantRole:
            combatant = context.find_combatant(role)
            if combatant is None:
                continue
            self.display.health[role] = (combatant.health, combatant.max_health)

    def show_banner(self, text: str) -> None:
        """Show a short-lived banner that expires after ``banner_duration``."""
        self.display.banner = text
        self._banner_timer = PhaseTimer(self.banner_duration)

    def update(self, delta: float) -> None:
        """Age the banner and hit flash by one tick."""
        if self._banner_timer is None:
            return
        if self._banner_timer.tick(delta).finished:
            self.display.banner = None
            self.display.flashing = None
            self._banner_timer = None

    def clear_gameplay_ui(self) -> None:
        """Remove health lines, notices and banners once the encounter ends."""
        self.display.gameplay_visible = False
        self.display.health.clear()
        self.display.combat_message = None
        self.display.banner = None
        self.display.flashing = None
        self._banner_timer = None
