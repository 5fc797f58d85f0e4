"""
Input handling for the encounter.

Raw renderer events are turned into a :class:`TickInput` once per tick:
- KeyConfigLoader: Loads key bindings from YAML
- InputContextManager: Picks the binding set (encounter or game over)

Key presses are edges by construction (renderers report a press once), so
every flag in the resulting TickInput is "just pressed" for that tick.
"""

from typing import TYPE_CHECKING, Optional

from ..core.events.events import DebugToggleRequested, LogMessage, LogSaveRequested, ManagerInitialized
from ..core.input import InputEvent, InputType, TickInput
from ..core.input_system import InputContext, InputContextManager, KeyConfigLoader

if TYPE_CHECKING:
    from ..core.engine.game_state import EncounterContext
    from ..core.events.event_manager import EventManager


class InputHandler:
    """Maps key events to encounter actions through the active context."""

    def __init__(
        self,
        encounter: "EncounterContext",
        event_manager: "EventManager",
        key_config: Optional[KeyConfigLoader] = None,
    ):
        self.encounter = encounter
        self.event_manager = event_manager
        self.context_manager = InputContextManager(encounter)

        if key_config is None:
            key_config = KeyConfigLoader()
            key_config.load_config()
        self.key_config = key_config

        self.event_manager.publish(
            ManagerInitialized(tick=0, manager_name="InputHandler"),
            source="InputHandler",
        )

    def _emit_log(self, message: str) -> None:
        self.event_manager.publish(
            LogMessage(
                tick=self.encounter.tick_count,
                message=message,
                category="INPUT",
                level="DEBUG",
                source="InputHandler",
            ),
            source="InputHandler",
        )

    def collect(self, events: list[InputEvent]) -> TickInput:
        """Reduce this tick's raw events to a single TickInput."""
        attack = parry = any_key = quit_requested = False
        context = self.context_manager.get_current_context()

        for event in events:
            if event.event_type == InputType.QUIT:
                quit_requested = True
                continue
            if not event.is_key_press() or event.key is None:
                continue

            any_key = True
            action = self.key_config.get_action_for_key(event.key, context)
            if action is None:
                continue

            self._emit_log(f"{event.key.name} -> {action} ({context.value})")

            if action == "attack":
                attack = True
            elif action == "parry":
                parry = True
            elif action == "quit_game":
                quit_requested = True
            elif action == "save_log":
                self.event_manager.publish(
                    LogSaveRequested(tick=self.encounter.tick_count),
                    source="InputHandler",
                )
            elif action == "toggle_debug":
                self.event_manager.publish(
                    DebugToggleRequested(tick=self.encounter.tick_count),
                    source="InputHandler",
                )

        return TickInput(attack=attack, parry=parry, any_key=any_key, quit=quit_requested)

    def get_key_hints(self, context: InputContext = InputContext.ENCOUNTER) -> list[str]:
        """Describe the bindings of ``context`` as "KEY: action" strings."""
        hints = []
        for key, action in self.key_config.get_key_mappings(context).items():
            hints.append(f"{key.name}: {action.replace('_game', '').replace('_', ' ')}")
        return hints
