from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Any


class InputType(Enum):
    KEY_PRESS = auto()
    KEY_RELEASE = auto()
    QUIT = auto()


class Key(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    SPACE = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()

    A = auto()
    B = auto()
    C = auto()
    D = auto()
    E = auto()
    F = auto()
    G = auto()
    H = auto()
    I = auto()  # noqa: E741
    J = auto()
    K = auto()
    L = auto()
    M = auto()
    N = auto()
    O = auto()  # noqa: E741
    P = auto()
    Q = auto()
    R = auto()
    S = auto()
    T = auto()
    U = auto()
    V = auto()
    W = auto()
    X = auto()
    Y = auto()
    Z = auto()

    NUM_0 = auto()
    NUM_1 = auto()
    NUM_2 = auto()
    NUM_3 = auto()
    NUM_4 = auto()
    NUM_5 = auto()
    NUM_6 = auto()
    NUM_7 = auto()
    NUM_8 = auto()
    NUM_9 = auto()

    UNKNOWN = auto()


@dataclass
class InputEvent:
    event_type: InputType
    key: Optional[Key] = None
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    raw_data: Optional[Any] = None

    @classmethod
    def quit_event(cls) -> "InputEvent":
        return cls(event_type=InputType.QUIT)

    @classmethod
    def key_press(cls, key: Key, shift: bool = False, ctrl: bool = False, alt: bool = False) -> "InputEvent":
        return cls(
            event_type=InputType.KEY_PRESS,
            key=key,
            shift=shift,
            ctrl=ctrl,
            alt=alt
        )

    def is_key_press(self) -> bool:
        return self.event_type == InputType.KEY_PRESS


@dataclass(frozen=True)
class TickInput:
    """Edge-triggered actions observed during one tick.

    Each flag is true only on the tick the bound key was pressed, never
    while it is held.
    """
    attack: bool = False
    parry: bool = False
    any_key: bool = False
    quit: bool = False

    @classmethod
    def idle(cls) -> "TickInput":
        return cls()
