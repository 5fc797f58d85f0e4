"""
Main game orchestration class.

This module owns the game loop: it reads the clock, collects input from the
renderer, runs one encounter tick (state machine first, then the outcome
evaluator), delivers queued events to the display and log managers, and
renders the frame.
"""

import time
from typing import Optional, TypeVar

from ..core.encounter_config import EncounterConfig, get_encounter_config
from ..core.engine.durations import TelegraphDurationProvider
from ..core.engine.game_state import EncounterContext, Outcome
from ..core.events.event_manager import EventManager
from ..core.events.events import DebugMessage, GameEnded, GameStarted, LogMessage
from ..core.input_system import KeyConfigLoader
from ..core.renderer import Renderer
from .input_handler import InputHandler
from .managers.log_manager import LogManager
from .managers.outcome_manager import OutcomeManager
from .managers.phase_manager import PhaseManager
from .managers.ui_manager import UIManager
from .render_builder import RenderBuilder


TManager = TypeVar("TManager")


class Game:
    """Main game orchestrator for a single encounter."""

    def __init__(
        self,
        renderer: Renderer,
        config: Optional[EncounterConfig] = None,
        key_config: Optional[KeyConfigLoader] = None,
        duration_provider: Optional[TelegraphDurationProvider] = None,
    ):
        self.renderer = renderer
        self.config = config or get_encounter_config()
        self.key_config = key_config
        self.duration_provider = duration_provider

        self.running = False
        self.quit_requested = False
        self.fps = renderer.config.target_fps
        self.frame_time = 1.0 / self.fps

        self.event_manager = EventManager(enable_debug_logging=False)

        self._encounter: Optional[EncounterContext] = None
        self._log_manager: Optional[LogManager] = None
        self._phase_manager: Optional[PhaseManager] = None
        self._outcome_manager: Optional[OutcomeManager] = None
        self._ui_manager: Optional[UIManager] = None
        self._input_handler: Optional[InputHandler] = None
        self._render_builder: Optional[RenderBuilder] = None

    def _require_manager(self, manager: Optional[TManager], name: str) -> TManager:
        """Return the manager if initialized, otherwise raise a helpful error."""
        if manager is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return manager

    @property
    def encounter(self) -> EncounterContext:
        return self._require_manager(self._encounter, "Encounter")

    @property
    def log_manager(self) -> LogManager:
        return self._require_manager(self._log_manager, "LogManager")

    @property
    def phase_manager(self) -> PhaseManager:
        return self._require_manager(self._phase_manager, "PhaseManager")

    @property
    def outcome_manager(self) -> OutcomeManager:
        return self._require_manager(self._outcome_manager, "OutcomeManager")

    @property
    def ui_manager(self) -> UIManager:
        return self._require_manager(self._ui_manager, "UIManager")

    @property
    def input_handler(self) -> InputHandler:
        return self._require_manager(self._input_handler, "InputHandler")

    @property
    def render_builder(self) -> RenderBuilder:
        return self._require_manager(self._render_builder, "RenderBuilder")

    def initialize(self) -> None:
        """Start the renderer, create the encounter and all managers."""
        self.renderer.start()

        self._log_manager = LogManager(event_manager=self.event_manager)
        self.event_manager.set_debug_callback(self.log_manager.debug)

        validation = self.config.validate()
        for warning in validation['warnings']:
            self.log_manager.warning(warning)
        if not validation['valid']:
            raise ValueError("Invalid encounter config: " + "; ".join(validation['errors']))

        self._encounter = EncounterContext.new(
            player_health=self.config.player_health,
            enemy_health=self.config.enemy_health,
        )

        self._initialize_managers()
        self._validate_key_config()

        self.event_manager.publish(
            GameStarted(
                tick=0,
                player_health=self.config.player_health,
                enemy_health=self.config.enemy_health,
            ),
            source="Game",
        )
        self._emit_log("A ghost appears! Press attack to strike.")
        self.event_manager.publish(
            DebugMessage(tick=0, message=f"Encounter config: {self.config}", source="Game"),
            source="Game",
        )

        self.ui_manager.refresh_health(self.encounter)
        self.event_manager.process_events()

        self.running = True

    def _initialize_managers(self) -> None:
        self._phase_manager = PhaseManager(
            event_manager=self.event_manager,
            config=self.config,
            duration_provider=self.duration_provider,
        )
        self._outcome_manager = OutcomeManager(
            event_manager=self.event_manager,
            phase_manager=self.phase_manager,
        )
        self._ui_manager = UIManager(event_manager=self.event_manager)
        self._input_handler = InputHandler(
            encounter=self.encounter,
            event_manager=self.event_manager,
            key_config=self.key_config,
        )
        self._render_builder = RenderBuilder(
            ui_manager=self.ui_manager,
            log_manager=self.log_manager,
            key_hints=self.input_handler.get_key_hints(),
        )

    def _validate_key_config(self) -> None:
        """Refuse to start with bindings that make the encounter unplayable."""
        validation = self.input_handler.key_config.validate_config()
        for warning in validation['warnings']:
            self.log_manager.warning(f"Key config: {warning}")
        if not validation['valid']:
            raise ValueError("Invalid key config: " + "; ".join(validation['errors']))

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(
                tick=self._encounter.tick_count if self._encounter else 0,
                message=message,
                category=category,
                level=level,
                source="Game",
            ),
            source="Game",
        )

    def run(self) -> None:
        """Main game loop."""
        try:
            self.initialize()
            last_frame = time.monotonic()

            while self.running:
                current_time = time.monotonic()
                delta_time = current_time - last_frame

                if delta_time >= self.frame_time:
                    self.update(delta_time)
                    self.render()
                    last_frame = current_time
                else:
                    time.sleep(0.001)
        finally:
            self.cleanup()

    def update(self, delta: float) -> None:
        """Run one tick with the renderer's pending input."""
        events = self.renderer.get_input_events()
        tick_input = self.input_handler.collect(events)

        if tick_input.quit:
            self.quit_requested = True
            self.running = False
            return

        encounter = self.encounter

        if encounter.is_over:
            # Any key on the result screen ends the game
            if tick_input.any_key:
                self.running = False
            self.event_manager.process_events()
            return

        self.phase_manager.tick(encounter, tick_input, delta)
        self.outcome_manager.evaluate(encounter)

        self.ui_manager.update(delta)
        self.ui_manager.refresh_health(encounter)

        self.event_manager.process_events()

    def render(self) -> None:
        """Render the current frame."""
        context = self.render_builder.build_render_context(self.encounter)
        self.renderer.clear()
        self.renderer.render_frame(context)
        self.renderer.present()

    def _result(self) -> str:
        if self._encounter is None or self._encounter.outcome is None:
            return "quit"
        return "victory" if self._encounter.outcome is Outcome.VICTORY else "defeat"

    def cleanup(self) -> None:
        """Clean up resources."""
        self.event_manager.publish(
            GameEnded(
                tick=self._encounter.tick_count if self._encounter else 0,
                result=self._result(),
                reason="quit" if self.quit_requested else "finished",
            ),
            source="Game",
        )
        self.event_manager.process_events()
        self.event_manager.shutdown()

        self.renderer.stop()
