from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import numpy as np


class Key(Enum):
    W = "w"
    A = "a"
    S = "s"
    D = "d"
    Q = "q"
    E = "e"
    SPACE = "space"
    LSHIFT = "lshift"
    LCTRL = "lctrl"


class MouseButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


@dataclass(frozen=True, eq=False)
class FrameInput:
    """Everything the controllers read for one frame.

    cursor_delta and wheel_delta are already summed over the frame's events;
    keys and buttons hold what is currently down.
    """
    cursor_delta: np.ndarray = field(default_factory=lambda: np.zeros(2))
    wheel_delta: float = 0.0
    keys: frozenset = frozenset()
    buttons: frozenset = frozenset()
    dt: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "cursor_delta", np.asarray(self.cursor_delta, dtype=np.float64).reshape(2))
        object.__setattr__(self, "wheel_delta", float(self.wheel_delta))
        object.__setattr__(self, "keys", frozenset(self.keys))
        object.__setattr__(self, "buttons", frozenset(self.buttons))
        object.__setattr__(self, "dt", float(self.dt))

    @classmethod
    def empty(cls, dt: float = 0.0) -> FrameInput:
        return cls(dt=dt)

    @classmethod
    def from_motion(
        cls,
        motions: Iterable[tuple[float, float]] = (),
        wheels: Iterable[float] = (),
        *,
        keys: Iterable[Key] = (),
        buttons: Iterable[MouseButton] = (),
        dt: float = 0.0,
    ) -> FrameInput:
        """Build a frame from the raw per-event deltas the backend received."""
        cursor = np.zeros(2)
        for dx, dy in motions:
            cursor += (float(dx), float(dy))
        return cls(cursor, sum(float(w) for w in wheels), frozenset(keys), frozenset(buttons), dt)

    def pressed(self, key: Key) -> bool:
        return key in self.keys

    def held(self, button: MouseButton) -> bool:
        return button in self.buttons

    def any_button(self) -> bool:
        return bool(self.buttons)
