"""
Combat turn state machine.

The encounter alternates between the player's turn and the enemy's two-step
attack (a randomized telegraph followed by a fixed-length strike the player
can parry). Each tick, exactly one handler runs: the one registered for the
active :class:`EncounterState` in the dispatch table. Handlers receive the
encounter context, the tick's input and the clock delta explicitly.

Every state change goes through :meth:`PhaseManager._transition`, which
checks it against the transition rules. GAME_OVER has no outgoing rule, so
once entered it can never be left.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from ...core.engine.combatants import CombatantRole
from ...core.engine.durations import TelegraphDurationProvider
from ...core.engine.game_state import EncounterContext, EncounterState
from ...core.encounter_config import EncounterConfig
from ...core.events.events import (
    AttackParried,
    CombatantHit,
    CombatMessageCleared,
    CombatMessageShown,
    EncounterStateChanged,
    LogMessage,
)
from ...core.input import TickInput

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


TELEGRAPH_MESSAGE = "Enemy is preparing to attack..."
PARRY_MESSAGE = "PARRY NOW!"

# Health lost per landed attack, on either side
ATTACK_DAMAGE = 1

StateHandler = Callable[[EncounterContext, TickInput, float], None]


@dataclass(frozen=True)
class StateTransitionRule:
    """A legal edge of the turn state machine."""

    from_state: EncounterState
    to_state: EncounterState
    description: str

    def matches(self, from_state: EncounterState, to_state: EncounterState) -> bool:
        return self.from_state == from_state and self.to_state == to_state


class PhaseManager:
    """Runs the per-state logic of the encounter once per tick."""

    def __init__(
        self,
        event_manager: "EventManager",
        config: Optional[EncounterConfig] = None,
        duration_provider: Optional[TelegraphDurationProvider] = None,
    ):
        self.event_manager = event_manager
        self.config = config or EncounterConfig()
        self.duration_provider = duration_provider or TelegraphDurationProvider(
            self.config.telegraph_min, self.config.telegraph_max, seed=self.config.seed
        )

        self._handlers: dict[EncounterState, StateHandler] = {
            EncounterState.PLAYER_TURN: self._handle_player_turn,
            EncounterState.ENEMY_TELEGRAPH: self._handle_enemy_telegraph,
            EncounterState.ENEMY_ATTACK: self._handle_enemy_attack,
            EncounterState.GAME_OVER: self._handle_game_over,
        }

        # Notice shown once when a state is entered
        self._entry_messages: dict[EncounterState, str] = {
            EncounterState.ENEMY_TELEGRAPH: TELEGRAPH_MESSAGE,
            EncounterState.ENEMY_ATTACK: PARRY_MESSAGE,
        }

        self.transition_rules: list[StateTransitionRule] = []
        self._setup_transition_rules()

    def _setup_transition_rules(self) -> None:
        self.transition_rules = [
            StateTransitionRule(
                from_state=EncounterState.PLAYER_TURN,
                to_state=EncounterState.ENEMY_TELEGRAPH,
                description="Player attacked, enemy winds up",
            ),
            StateTransitionRule(
                from_state=EncounterState.ENEMY_TELEGRAPH,
                to_state=EncounterState.ENEMY_ATTACK,
                description="Telegraph finished, enemy strikes",
            ),
            StateTransitionRule(
                from_state=EncounterState.ENEMY_ATTACK,
                to_state=EncounterState.PLAYER_TURN,
                description="Enemy attack resolved",
            ),
        ]
        for state in EncounterState:
            if not state.is_terminal:
                self.transition_rules.append(
                    StateTransitionRule(
                        from_state=state,
                        to_state=EncounterState.GAME_OVER,
                        description="Outcome declared",
                    )
                )

    def _emit_log(
        self, context: EncounterContext, message: str, category: str = "BATTLE", level: str = "INFO"
    ) -> None:
        self.event_manager.publish(
            LogMessage(
                tick=context.tick_count,
                message=message,
                category=category,
                level=level,
                source="PhaseManager",
            ),
            source="PhaseManager",
        )

    def get_handler(self, state: EncounterState) -> StateHandler:
        """Look up the tick handler for ``state``."""
        return self._handlers[state]

    def tick(self, context: EncounterContext, tick_input: TickInput, delta: float) -> None:
        """Run one tick of the active state's logic.

        Args:
            context: The encounter being simulated
            tick_input: Actions pressed during this tick
            delta: Time elapsed since the previous tick

        Raises:
            ValueError: If delta is negative
        """
        if delta < 0:
            raise ValueError(f"Clock delta must be non-negative, got {delta}")

        context.tick_count += 1
        context.elapsed_total += delta

        self.get_handler(context.state)(context, tick_input, delta)

    # ============== State handlers ==============

    def _handle_player_turn(self, context: EncounterContext, tick_input: TickInput, delta: float) -> None:
        # Blocking wait: no time pressure on the player
        if not tick_input.attack:
            return

        enemy = context.require_combatant(CombatantRole.ENEMY)
        enemy.take_hit(ATTACK_DAMAGE)
        self._publish_hit(context, CombatantRole.ENEMY, enemy.health, enemy.max_health)
        self._emit_log(context, f"Player attacks! Enemy health is now {enemy.health}")

        duration = self.duration_provider.next_telegraph_duration()
        context.restart_phase_timer(duration)
        self._emit_log(context, f"Enemy telegraph lasts {duration:.2f}s", category="STATE", level="DEBUG")

        self._transition(context, EncounterState.ENEMY_TELEGRAPH)

    def _handle_enemy_telegraph(self, context: EncounterContext, tick_input: TickInput, delta: float) -> None:
        if not context.phase_timer.tick(delta).finished:
            return

        self._clear_message(context)
        context.restart_phase_timer(self.config.attack_duration)
        self._transition(context, EncounterState.ENEMY_ATTACK)

    def _handle_enemy_attack(self, context: EncounterContext, tick_input: TickInput, delta: float) -> None:
        timer = context.phase_timer.tick(delta)

        # Parry is checked before the timeout so a parry on the final tick still counts
        if timer.elapsed < self.config.parry_window and tick_input.parry:
            self._clear_message(context)
            self.event_manager.publish(
                AttackParried(tick=context.tick_count, reaction_time=timer.elapsed),
                source="PhaseManager",
            )
            self._emit_log(context, f"Parry successful! ({timer.elapsed:.2f}s)")
            self._transition(context, EncounterState.PLAYER_TURN)
            return

        if timer.finished:
            player = context.require_combatant(CombatantRole.PLAYER)
            player.take_hit(ATTACK_DAMAGE)
            self._publish_hit(context, CombatantRole.PLAYER, player.health, player.max_health)
            self._emit_log(context, f"Enemy hits! Player health: {player.health}")
            self._clear_message(context)
            self._transition(context, EncounterState.PLAYER_TURN)

    def _handle_game_over(self, context: EncounterContext, tick_input: TickInput, delta: float) -> None:
        pass

    # ============== Transitions and notices ==============

    def _find_rule(self, from_state: EncounterState, to_state: EncounterState) -> Optional[StateTransitionRule]:
        for rule in self.transition_rules:
            if rule.matches(from_state, to_state):
                return rule
        return None

    def _transition(self, context: EncounterContext, new_state: EncounterState) -> None:
        old_state = context.state
        rule = self._find_rule(old_state, new_state)
        if rule is None:
            raise RuntimeError(
                f"Illegal encounter transition: {old_state.name} -> {new_state.name}"
            )

        context.state = new_state
        self.event_manager.publish(
            EncounterStateChanged(tick=context.tick_count, old_state=old_state, new_state=new_state),
            source="PhaseManager",
        )
        self._emit_log(
            context,
            f"State: {old_state.name} -> {new_state.name} ({rule.description})",
            category="STATE",
            level="DEBUG",
        )

        entry_message = self._entry_messages.get(new_state)
        if entry_message:
            self._show_message(context, entry_message)

    def force_game_over(self, context: EncounterContext, reason: str) -> None:
        """Move any non-terminal encounter straight to GAME_OVER.

        Used by the outcome evaluator, which may override a transition the
        state handler made earlier in the same tick.
        """
        if context.is_over:
            return
        self._transition(context, EncounterState.GAME_OVER)
        self._emit_log(context, f"Encounter over: {reason}", category="STATE", level="DEBUG")

    def _show_message(self, context: EncounterContext, text: str) -> None:
        if context.active_message == text:
            return
        context.active_message = text
        self.event_manager.publish(
            CombatMessageShown(tick=context.tick_count, text=text),
            source="PhaseManager",
        )

    def _clear_message(self, context: EncounterContext) -> None:
        if context.active_message is None:
            return
        context.active_message = None
        self.event_manager.publish(
            CombatMessageCleared(tick=context.tick_count),
            source="PhaseManager",
        )

    def _publish_hit(self, context: EncounterContext, role: CombatantRole, health: int, max_health: int) -> None:
        self.event_manager.publish(
            CombatantHit(
                tick=context.tick_count,
                role=role,
                damage=ATTACK_DAMAGE,
                health=health,
                max_health=max_health,
            ),
            source="PhaseManager",
        )
