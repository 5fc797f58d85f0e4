from typing import Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import RenderContext
from ..core.input import InputEvent, Key


class SimpleRenderer(Renderer):
    """Line-printing renderer with an optional scripted player.

    In demo mode the renderer plays the encounter itself: it attacks on every
    player turn, parries every other enemy attack, and presses a key once the
    result is shown.
    """

    def __init__(self, config: Optional[RendererConfig] = None, demo_mode: bool = True):
        super().__init__(config)
        self._frame_count = 0
        self._auto_quit_at = 600
        self._demo_mode = demo_mode  # Enable/disable auto input simulation
        self._last_context: Optional[RenderContext] = None
        self._last_state = ""
        self._printed_state = ""
        self._attacks_seen = 0
        self._parried_this_attack = False

    def initialize(self) -> None:
        print(f"Initializing SimpleRenderer ({self.config.width}x{self.config.height})")
        print("=" * self.config.width)

    def cleanup(self) -> None:
        print("\nSimpleRenderer cleanup complete")

    def clear(self) -> None:
        pass

    def present(self) -> None:
        pass

    def render_frame(self, context: RenderContext) -> None:
        self._frame_count += 1
        self._last_context = context

        # Only print frames where something visible changed
        state_changed = context.state_name != self._printed_state
        self._printed_state = context.state_name
        if not state_changed and not context.banner and not context.outcome_message:
            return

        print(f"\n--- Frame {self._frame_count} [{context.state_label}] ---")

        for combatant in context.combatants:
            print(f"{combatant.name:<8} {combatant.hp_text}")

        if context.combat_message:
            print(f">> {context.combat_message.text}")
        if context.banner:
            print(f"   {context.banner}")
        if context.outcome_message:
            print("-" * self.config.width)
            print(context.outcome_message.text.center(self.config.width))
            print("-" * self.config.width)

    def get_input_events(self) -> list[InputEvent]:
        events = []

        # Only generate demo input if in demo mode
        if not self._demo_mode or self._last_context is None:
            return events

        context = self._last_context
        state = context.state_name
        entered = state != self._last_state
        self._last_state = state

        if self._frame_count >= self._auto_quit_at:
            events.append(InputEvent.quit_event())
        elif context.outcome_message:
            print(f"Demo frame {self._frame_count}: Any key to leave")
            events.append(InputEvent.key_press(Key.ENTER))
        elif state == "PLAYER_TURN":
            print(f"Demo frame {self._frame_count}: Attack")
            events.append(InputEvent.key_press(Key.A))
        elif state == "ENEMY_ATTACK":
            if entered:
                self._attacks_seen += 1
                self._parried_this_attack = False
            # Parry every other attack so both outcomes get exercised
            if self._attacks_seen % 2 == 1 and not self._parried_this_attack:
                print(f"Demo frame {self._frame_count}: Parry")
                events.append(InputEvent.key_press(Key.SPACE))
                self._parried_this_attack = True

        return events
