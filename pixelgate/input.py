"""Keyboard keys and mouse buttons."""

from __future__ import annotations

from enum import IntEnum, auto
from typing import Optional


class KeyCode(IntEnum):
    """Keyboard keys and mouse buttons, numbered from zero."""

    def _generate_next_value_(name, start, count, last_values):
        return count

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
    NUM0 = auto()
    NUM1 = auto()
    NUM2 = auto()
    NUM3 = auto()
    NUM4 = auto()
    NUM5 = auto()
    NUM6 = auto()
    NUM7 = auto()
    NUM8 = auto()
    NUM9 = auto()
    RIGHT = auto()
    LEFT = auto()
    DOWN = auto()
    UP = auto()
    RETURN = auto()
    SPACE = auto()
    BACKSPACE = auto()
    DELETE = auto()
    MOUSE_LEFT = auto()
    MOUSE_RIGHT = auto()
    MOUSE_MIDDLE = auto()

    @classmethod
    def from_code(cls, code: int) -> Optional[KeyCode]:
        """The key with the given numeric code, or None if there is none."""
        try:
            return cls(code)
        except ValueError:
            return None