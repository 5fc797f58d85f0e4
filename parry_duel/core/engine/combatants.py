"""Combatant records for the two sides of an encounter.

The cast of an encounter is fixed: one player and one enemy. Each combatant
is a plain record with a mutable health value and an immutable maximum
that is only used to show a health ratio.
"""

from enum import Enum
from typing import Optional


class CombatantRole(Enum):
    """Which side of the encounter a combatant fights for."""

    PLAYER = "player"
    ENEMY = "enemy"


class Combatant:
    """A single fighter with health and max health.

    Health is not clamped. It may drop to zero or below, and the outcome
    evaluator decides what that means.
    """

    def __init__(self, role: CombatantRole, name: str, max_health: int, health: Optional[int] = None):
        self.role = role
        self.name = name
        self._max_health = int(max_health)
        self.health = self._max_health if health is None else int(health)

    @classmethod
    def player(cls, max_health: int, name: str = "Hero") -> "Combatant":
        return cls(CombatantRole.PLAYER, name, max_health)

    @classmethod
    def enemy(cls, max_health: int, name: str = "Ghost") -> "Combatant":
        return cls(CombatantRole.ENEMY, name, max_health)

    @property
    def max_health(self) -> int:
        return self._max_health

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    @property
    def health_ratio(self) -> float:
        """Current health as a fraction of max health, floored at 0.0."""
        return max(self.health, 0) / max(self._max_health, 1)

    def take_hit(self, amount: int = 1) -> int:
        """Subtract ``amount`` from health and return the new value."""
        self.health -= amount
        return self.health

    def health_text(self) -> str:
        return f"HP: {self.health} / {self._max_health}"

    def __repr__(self) -> str:
        return f"Combatant({self.role.name}, {self.name!r}, {self.health}/{self._max_health})"
