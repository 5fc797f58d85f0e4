"""
Basic test fixtures for the parry duel test suite.

Provides fresh encounters, an event bus and managers wired the way the
game wires them, with telegraph durations pinned so tests are repeatable.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from parry_duel.core.encounter_config import EncounterConfig
from parry_duel.core.engine.durations import TelegraphDurationProvider
from parry_duel.core.engine.game_state import EncounterContext
from parry_duel.core.events.event_manager import EventManager
from parry_duel.game.managers.outcome_manager import OutcomeManager
from parry_duel.game.managers.phase_manager import PhaseManager


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def encounter():
    """Create a fresh encounter with the default 3 vs 5 health."""
    return EncounterContext.new(player_health=3, enemy_health=5)


@pytest.fixture
def encounter_config():
    """Default tuning: 0.4s attacks with a 0.5s parry window."""
    return EncounterConfig()


@pytest.fixture
def fixed_durations():
    """Telegraph provider whose every draw is exactly 1.0s."""
    return TelegraphDurationProvider(1.0, 1.0)


@pytest.fixture
def phase_manager(event_manager, encounter_config, fixed_durations):
    return PhaseManager(event_manager, config=encounter_config, duration_provider=fixed_durations)


@pytest.fixture
def outcome_manager(event_manager, phase_manager):
    return OutcomeManager(event_manager, phase_manager)
