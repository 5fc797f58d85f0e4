"""Encounter tuning loader.

Starting health and the phase durations are read from a YAML file so the
difficulty can be tuned without touching the state machine. Missing keys
fall back to the defaults below. A missing, unreadable or invalid file falls
back entirely, so a bad file never stops the game from starting.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml


INTEGER_FIELDS = ("player_health", "enemy_health")
DURATION_FIELDS = ("telegraph_min", "telegraph_max", "attack_duration", "parry_window")


def _coerce(value: Any, kind: type) -> Any:
    """Convert YAML scalars such as '3' or 1 to ``kind``; leave anything else for validate()."""
    if value is None or isinstance(value, bool):
        return value
    try:
        converted = kind(value)
    except (TypeError, ValueError, OverflowError):
        return value
    if kind is int and float(value) != converted:
        # 2.5 is not a health value
        return value
    return converted


@dataclass(frozen=True)
class EncounterConfig:
    """Tunable numbers for one encounter.

    ``telegraph_min``/``telegraph_max`` bound the randomized wind-up before
    each enemy attack. ``attack_duration`` is how long the attack takes to
    land once telegraphed, and ``parry_window`` is how long after the attack
    starts a parry is still accepted. The two are independent settings.
    """

    player_health: int = 3
    enemy_health: int = 5
    telegraph_min: float = 0.5
    telegraph_max: float = 1.5
    attack_duration: float = 0.4
    parry_window: float = 0.5
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EncounterConfig":
        """Build a config from a mapping, ignoring unknown keys.

        Numeric strings are converted; values that cannot be converted are
        kept as-is and reported by :meth:`validate`.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Encounter config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key in DURATION_FIELDS:
                value = _coerce(value, float)
            else:
                value = _coerce(value, int)
            values[key] = value
        return cls(**values)

    def _type_errors(self) -> list[str]:
        errors = []
        for name in INTEGER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")
        for name in DURATION_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be a number of seconds, got {value!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            errors.append(f"seed must be an integer or empty, got {self.seed!r}")
        return errors

    def validate(self) -> dict[str, Any]:
        """Check the values for combinations that break the encounter.

        Returns:
            Dict with 'valid', 'errors' and 'warnings'
        """
        errors = self._type_errors()
        warnings = []
        if errors:
            # Range checks would compare mismatched types
            return {'valid': False, 'errors': errors, 'warnings': warnings}

        if self.player_health <= 0:
            errors.append(f"player_health must be positive, got {self.player_health}")
        if self.enemy_health <= 0:
            errors.append(f"enemy_health must be positive, got {self.enemy_health}")
        if self.telegraph_min < 0:
            errors.append(f"telegraph_min must be non-negative, got {self.telegraph_min}")
        if self.telegraph_min > self.telegraph_max:
            errors.append(
                f"telegraph_min ({self.telegraph_min}) is greater than telegraph_max ({self.telegraph_max})"
            )
        if self.attack_duration <= 0:
            errors.append(f"attack_duration must be positive, got {self.attack_duration}")
        if self.parry_window <= 0:
            errors.append(f"parry_window must be positive, got {self.parry_window}")
        elif self.parry_window > self.attack_duration:
            warnings.append(
                f"parry_window ({self.parry_window}) outlasts attack_duration "
                f"({self.attack_duration}); the attack lands first, so the "
                f"effective window is {self.attack_duration}"
            )

        return {'valid': len(errors) == 0, 'errors': errors, 'warnings': warnings}


class EncounterConfigLoader:
    """Loader for encounter configuration files with caching and fallbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._find_default_config_path()
        self._cached_config: Optional[EncounterConfig] = None

    def _find_default_config_path(self) -> str:
        """Find assets/config/encounter.yaml by walking up from this file."""
        current_dir = Path(__file__).parent
        for _ in range(5):  # Limit search depth
            config_path = current_dir / "assets" / "config" / "encounter.yaml"
            if config_path.exists():
                return str(config_path)
            current_dir = current_dir.parent

        return "assets/config/encounter.yaml"

    def load_config(self, force_reload: bool = False) -> EncounterConfig:
        """Load the encounter configuration, using the cache if available."""
        if self._cached_config is not None and not force_reload:
            return self._cached_config

        config_file = Path(self.config_path)
        if not config_file.exists():
            print(f"Warning: Encounter config file not found: {config_file}")
            self._cached_config = EncounterConfig()
            return self._cached_config

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            print(f"Error loading encounter config: {e}")
            self._cached_config = EncounterConfig()
            return self._cached_config

        section = raw.get("encounter", raw) if isinstance(raw, dict) else raw
        if not isinstance(section, dict):
            print(f"Warning: Encounter config must be a mapping, got {type(section).__name__}: {config_file}")
            self._cached_config = EncounterConfig()
            return self._cached_config

        config = EncounterConfig.from_dict(section)
        validation = config.validate()
        if not validation['valid']:
            print(f"Error in encounter config {config_file}: " + "; ".join(validation['errors']))
            config = EncounterConfig()

        self._cached_config = config
        return self._cached_config


_default_loader = EncounterConfigLoader()


def get_encounter_config(force_reload: bool = False) -> EncounterConfig:
    """Get the default encounter configuration."""
    return _default_loader.load_config(force_reload)
