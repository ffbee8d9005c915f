from __future__ import annotations

import math

import numpy as np

from smoothcam.config import PITCH_EPSILON, RADIUS_EPSILON
from smoothcam.util.math import look_at, lerp, try_normalize, UP


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


class LookAngles:
    """Yaw/pitch representation of a look direction.

    Coordinate conventions:
    - +Y is up.
    - yaw == 0 looks down +Z; positive yaw turns toward +X (yaw = atan2(x, z)).
    - positive pitch looks up (pitch = asin(y)).

    Pitch is clamped away from +-pi/2 after every mutation, so yaw stays
    well defined and unit_vector() never degenerates into the up axis.
    Yaw accumulates without wrapping.
    """

    __slots__ = ("_yaw", "_pitch")

    def __init__(self, yaw: float = 0.0, pitch: float = 0.0) -> None:
        self._yaw = float(yaw)
        self._pitch = 0.0
        self.set_pitch(pitch)

    def __repr__(self) -> str:
        return f"LookAngles(yaw={self._yaw:.4f}, pitch={self._pitch:.4f})"

    @classmethod
    def from_vector(cls, direction: np.ndarray) -> LookAngles:
        angles = cls()
        angles.set_direction(direction)
        return angles

    def set_direction(self, direction: np.ndarray) -> None:
        d = try_normalize(np.asarray(direction, dtype=np.float64), eps=0.0)
        if d is None:
            raise ValueError(f"cannot derive look angles from degenerate direction {direction!r}")
        self._yaw = math.atan2(float(d[0]), float(d[2]))
        self.set_pitch(math.asin(_clamp(float(d[1]), -1.0, 1.0)))

    def get_yaw(self) -> float:
        return self._yaw

    def get_pitch(self) -> float:
        return self._pitch

    def set_yaw(self, yaw: float) -> None:
        self._yaw = float(yaw)

    def set_pitch(self, pitch: float) -> None:
        limit = math.pi / 2.0 - PITCH_EPSILON
        self._pitch = _clamp(float(pitch), -limit, limit)

    def add_yaw(self, delta: float) -> None:
        self._yaw += float(delta)

    def add_pitch(self, delta: float) -> None:
        self.set_pitch(self._pitch + float(delta))

    def clamp_pitch(self) -> None:
        """Re-apply the singularity guard (no-op when pitch is already in range)."""
        self.set_pitch(self._pitch)

    def is_looking_vertical(self) -> bool:
        return abs(abs(float(np.dot(self.unit_vector(), UP))) - 1.0) < 1e-9

    def unit_vector(self) -> np.ndarray:
        cp = math.cos(self._pitch)
        return np.array([
            math.sin(self._yaw) * cp,
            math.sin(self._pitch),
            math.cos(self._yaw) * cp,
        ])


class LookTransform:
    """Camera pose as an eye point looking at a target point."""

    __slots__ = ("eye", "target")

    def __init__(self, eye, target) -> None:
        self.eye = np.array(eye, dtype=np.float64)
        self.target = np.array(target, dtype=np.float64)

    def __repr__(self) -> str:
        e, t = self.eye, self.target
        return f"LookTransform(eye=({e[0]:.3f}, {e[1]:.3f}, {e[2]:.3f}), target=({t[0]:.3f}, {t[1]:.3f}, {t[2]:.3f}))"

    def copy(self) -> LookTransform:
        return LookTransform(self.eye.copy(), self.target.copy())

    def radius(self) -> float:
        return float(np.linalg.norm(self.target - self.eye))

    def look_direction(self) -> np.ndarray | None:
        """Unit vector from eye to target, or None when eye and target coincide."""
        return try_normalize(self.target - self.eye, eps=RADIUS_EPSILON)

    def view_matrix(self, up: np.ndarray = UP) -> np.ndarray:
        return look_at(self.eye, self.target, up)


class Smoother:
    """Exponential smoothing of a LookTransform, applied once per frame.

    weight is the share of the previous smoothed pose kept each frame:
    0 tracks the raw pose exactly, values close to 1 lag heavily.
    Eye and target are blended as points; angles are never interpolated.
    """

    def __init__(self, weight: float) -> None:
        self._weight = self._validate(weight)
        self._previous: LookTransform | None = None

    @staticmethod
    def _validate(weight: float) -> float:
        w = float(weight)
        if not (0.0 <= w < 1.0):
            raise ValueError(f"smoothing weight must be in [0, 1), got {weight!r}")
        return w

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, value: float) -> None:
        self._weight = self._validate(value)

    @property
    def previous(self) -> LookTransform | None:
        return None if self._previous is None else self._previous.copy()

    def reset(self) -> None:
        """Forget the smoothed pose; the next smooth() call reseeds from raw."""
        self._previous = None

    def smooth(self, raw: LookTransform) -> LookTransform:
        if self._previous is None:
            self._previous = raw.copy()
            return raw.copy()

        lead = 1.0 - self._weight
        prev = self._previous
        prev.eye = lerp(prev.eye, raw.eye, lead)
        prev.target = lerp(prev.target, raw.target, lead)
        return prev.copy()
