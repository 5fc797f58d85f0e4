"""
Tests for turning raw key events into per-tick actions.
"""

import pytest

from parry_duel.core.engine.game_state import EncounterState
from parry_duel.core.events.events import EventType
from parry_duel.core.input import InputEvent, InputType, Key, TickInput
from parry_duel.core.input_system import KeyConfigLoader
from parry_duel.game.input_handler import InputHandler
from parry_duel.game.managers.log_manager import LogManager


@pytest.fixture
def input_handler(encounter, event_manager):
    key_config = KeyConfigLoader()
    key_config.load_config()
    return InputHandler(encounter, event_manager, key_config=key_config)


class TestInputHandler:
    """Test InputHandler functionality."""

    def test_no_events_is_idle(self, input_handler):
        assert input_handler.collect([]) == TickInput.idle()

    def test_attack_key(self, input_handler):
        tick_input = input_handler.collect([InputEvent.key_press(Key.A)])

        assert tick_input.attack
        assert tick_input.any_key
        assert not tick_input.parry

    def test_parry_key(self, input_handler):
        tick_input = input_handler.collect([InputEvent.key_press(Key.SPACE)])

        assert tick_input.parry
        assert not tick_input.attack

    def test_unbound_key_still_counts_as_any_key(self, input_handler):
        tick_input = input_handler.collect([InputEvent.key_press(Key.X)])

        assert tick_input.any_key
        assert not tick_input.attack
        assert not tick_input.parry

    def test_key_release_ignored(self, input_handler):
        assert input_handler.collect([InputEvent(event_type=InputType.KEY_RELEASE, key=Key.A)]) == TickInput.idle()

    def test_quit_event(self, input_handler):
        assert input_handler.collect([InputEvent.quit_event()]).quit

    def test_quit_key(self, input_handler):
        assert input_handler.collect([InputEvent.key_press(Key.Q)]).quit

    def test_several_presses_in_one_tick(self, input_handler):
        tick_input = input_handler.collect([
            InputEvent.key_press(Key.A),
            InputEvent.key_press(Key.SPACE),
        ])

        assert tick_input.attack and tick_input.parry

    def test_game_over_context_drops_combat_actions(self, input_handler, encounter):
        encounter.state = EncounterState.GAME_OVER

        tick_input = input_handler.collect([InputEvent.key_press(Key.A)])

        assert not tick_input.attack
        assert tick_input.any_key

    def test_save_log_key_requests_save(self, input_handler, event_manager):
        requests = []
        event_manager.subscribe(EventType.LOG_SAVE_REQUESTED, requests.append)

        input_handler.collect([InputEvent.key_press(Key.L)])
        event_manager.process_events()

        assert len(requests) == 1

    def test_debug_key_toggles_log_debug_lines(self, input_handler, event_manager, tmp_path):
        log_manager = LogManager(event_manager, log_dir=str(tmp_path))
        assert not log_manager.is_debug_enabled()

        input_handler.collect([InputEvent.key_press(Key.D)])
        event_manager.process_events()

        assert log_manager.is_debug_enabled()
        assert log_manager.get_messages()[-1].text == "Debug messages shown"

        input_handler.collect([InputEvent.key_press(Key.D)])
        event_manager.process_events()

        assert not log_manager.is_debug_enabled()

    def test_key_hints(self, input_handler):
        hints = input_handler.get_key_hints()

        assert "A: attack" in hints
        assert "SPACE: parry" in hints
        assert "Q: quit" in hints
