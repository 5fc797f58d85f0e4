"""
Input system module for turning key presses into encounter actions.

Key bindings come from a YAML file and are looked up per input context,
so the same key can mean different things during play and on the
game-over screen.
"""

from .context_manager import InputContextManager, InputContext
from .key_config_loader import KeyConfigLoader

__all__ = [
    'InputContextManager',
    'InputContext',
    'KeyConfigLoader'
]
