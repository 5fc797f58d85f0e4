"""
Configuration loader for key mappings.

This module handles loading and parsing of YAML configuration files
for customizable key bindings.
"""
import os
import yaml
from typing import Optional, Any
from pathlib import Path

from .context_manager import InputContext
from ..input import Key


# Actions the encounter cannot be played without
REQUIRED_ENCOUNTER_ACTIONS = ("attack", "parry")


class KeyConfigLoader:
    """Loads and manages key mapping configurations from YAML files."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "assets/config/key_mappings.yaml"
        self._config: dict[str, Any] = {}
        self._key_mappings: dict[InputContext, dict[Key, str]] = {}
        self._active_scheme: str = "default"

    def load_config(self) -> bool:
        """
        Load configuration from the YAML file.

        Returns:
            bool: True if config was loaded successfully
        """
        try:
            if not os.path.isabs(self.config_path):
                # Relative paths are relative to the project root
                project_root = Path(__file__).parent.parent.parent.parent
                config_file = project_root / self.config_path
            else:
                config_file = Path(self.config_path)

            if not config_file.exists():
                print(f"Warning: Key config file not found: {config_file}")
                self._load_fallback_config()
                return False

            with open(config_file, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f) or {}

            if not isinstance(raw, dict):
                print(f"Warning: Key config must be a mapping, got {type(raw).__name__}: {config_file}")
                self._load_fallback_config()
                return False
            self._config = raw

            config_section = self._section(self._config, 'config')
            self._active_scheme = str(config_section.get('active_scheme', 'default'))

            self._parse_key_mappings()

            return True

        except (OSError, yaml.YAMLError) as e:
            print(f"Error loading key config: {e}")
            self._load_fallback_config()
            return False

    def _parse_key_mappings(self) -> None:
        """Parse the key mappings from the loaded config."""
        self._key_mappings.clear()

        contexts_config = self._section(self._config, 'contexts')
        schemes_config = self._section(self._config, 'schemes')

        for context_name, context_data in contexts_config.items():
            try:
                context = InputContext(str(context_name).lower())
            except ValueError:
                print(f"Warning: Unknown context '{context_name}' in config")
                continue

            base_mappings = self._section(context_data, 'mappings')

            # Scheme overrides replace individual bindings
            final_mappings = dict(base_mappings)
            if self._active_scheme != 'default' and self._active_scheme in schemes_config:
                overrides = self._section(schemes_config[self._active_scheme], 'overrides')
                final_mappings.update(self._section(overrides, context_name))

            key_mapping = {}
            for key_str, action in final_mappings.items():
                key = self._parse_key_string(str(key_str))
                if key:
                    key_mapping[key] = str(action)

            self._key_mappings[context] = key_mapping

    @staticmethod
    def _section(data: Any, name: str) -> dict[str, Any]:
        """Return ``data[name]`` if both are mappings, otherwise an empty mapping."""
        if not isinstance(data, dict):
            return {}
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            print(f"Warning: Ignoring '{name}' in key config, expected a mapping")
            return {}
        return section

    def _parse_key_string(self, key_str: str) -> Optional[Key]:
        """
        Parse a key string into a Key enum.

        Args:
            key_str: String representation of the key ("a", "SPACE", "1")

        Returns:
            Key: The corresponding Key enum, or None if invalid
        """
        key_str = key_str.upper().strip()

        if key_str.isdigit() and len(key_str) == 1:
            return getattr(Key, f"NUM_{key_str}")

        aliases = {
            'ESC': Key.ESCAPE,
            'RETURN': Key.ENTER,
            ' ': Key.SPACE,
        }
        if key_str in aliases:
            return aliases[key_str]

        try:
            return Key[key_str]
        except KeyError:
            print(f"Warning: Unknown key '{key_str}' in config")
            return None

    def get_key_mappings(self, context: InputContext) -> dict[Key, str]:
        """
        Get key mappings for a specific context.

        Args:
            context: The input context

        Returns:
            Dict[Key, str]: Dictionary mapping keys to actions
        """
        return self._key_mappings.get(context, {})

    def get_action_for_key(self, key: Key, context: InputContext) -> Optional[str]:
        """
        Get the action associated with a key in a specific context.

        Args:
            key: The key to check
            context: The input context

        Returns:
            str: The action name, or None if not mapped
        """
        return self._key_mappings.get(context, {}).get(key)

    def _load_fallback_config(self) -> None:
        """Load hardcoded fallback configuration if file loading fails."""
        self._config = {}
        self._active_scheme = "default"
        self._key_mappings = {
            InputContext.ENCOUNTER: {
                Key.A: "attack",
                Key.SPACE: "parry",
                Key.Q: "quit_game",
                Key.ESCAPE: "quit_game",
                Key.L: "save_log",
                Key.D: "toggle_debug",
            },
            InputContext.GAME_OVER: {
                Key.Q: "quit_game",
                Key.ESCAPE: "quit_game",
            },
        }
        print("Loaded fallback key configuration")

    def validate_config(self) -> dict[str, Any]:
        """
        Validate the loaded configuration.

        Returns:
            Dict: Validation results including errors and warnings
        """
        errors = []
        warnings = []

        for context in InputContext:
            if context not in self._key_mappings:
                warnings.append(f"Missing context: {context.value}")

        contexts = self._section(self._config, 'contexts')
        for context_name in contexts.keys():
            try:
                InputContext(str(context_name).lower())
            except ValueError:
                warnings.append(f"Unknown context in config: {context_name}")

        encounter_actions = set(self.get_key_mappings(InputContext.ENCOUNTER).values())
        for action in REQUIRED_ENCOUNTER_ACTIONS:
            if action not in encounter_actions:
                errors.append(f"No key bound to required action: {action}")

        total_mappings = sum(len(mappings) for mappings in self._key_mappings.values())
        if total_mappings == 0:
            errors.append("No valid key mappings found")

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'warnings': warnings,
            'contexts': len(self._key_mappings),
            'total_mappings': total_mappings,
            'active_scheme': self._active_scheme
        }
