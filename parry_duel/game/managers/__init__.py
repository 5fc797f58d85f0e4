"""Encounter managers.

- phase_manager.py: Turn state machine with one handler per state
- outcome_manager.py: Win/loss detection and GAME_OVER
- ui_manager.py: Display state fed by encounter events
- log_manager.py: Event-driven message log
"""

from .log_manager import LogCategory, LogLevel, LogManager
from .outcome_manager import OutcomeManager
from .phase_manager import PhaseManager, StateTransitionRule
from .ui_manager import DisplayState, UIManager

__all__ = [
    "LogCategory",
    "LogLevel",
    "LogManager",
    "OutcomeManager",
    "PhaseManager",
    "StateTransitionRule",
    "DisplayState",
    "UIManager",
]
