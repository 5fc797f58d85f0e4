from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_name(cls, name: str) -> "Color":
        colors = {
            "red": cls(255, 0, 0),
            "green": cls(0, 255, 0),
            "blue": cls(0, 0, 255),
            "white": cls(255, 255, 255),
            "black": cls(0, 0, 0),
            "yellow": cls(255, 255, 0),
            "cyan": cls(0, 255, 255),
            "gray": cls(128, 128, 128),
        }
        return colors.get(name, cls(255, 255, 255))


@dataclass
class CombatantRenderData:
    """Everything a renderer needs to draw one combatant.

    ``side`` is "left" or "right"; renderers decide what that means on
    their surface.
    """
    name: str
    art: list[str]
    hp_current: int
    hp_max: int
    side: str = "left"
    color: Color = field(default_factory=lambda: Color.from_name("white"))

    @property
    def hp_text(self) -> str:
        return f"HP: {self.hp_current} / {self.hp_max}"

    @property
    def hp_percent(self) -> float:
        """Calculate HP as a percentage (0.0 to 1.0)."""
        return max(self.hp_current, 0) / max(self.hp_max, 1)


@dataclass
class MessageRenderData:
    """A centred line of text: the combat notice or the game-over result."""
    text: str
    color: Color = field(default_factory=lambda: Color.from_name("yellow"))
    emphasis: bool = False


@dataclass
class RenderContext:
    combatants: list[CombatantRenderData] = field(default_factory=list)
    combat_message: Optional[MessageRenderData] = None
    outcome_message: Optional[MessageRenderData] = None
    banner: Optional[str] = None

    state_name: str = ""
    state_label: str = ""
    phase_progress: Optional[float] = None
    key_hints: list[str] = field(default_factory=list)
    log_lines: list[str] = field(default_factory=list)
