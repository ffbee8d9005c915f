from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

import numpy as np

from smoothcam.config import (
    DEFAULT_FPS_ROTATE_SENSITIVITY,
    DEFAULT_FPS_TRANSLATE_SENSITIVITY,
    DEFAULT_FPS_SMOOTHING,
)
from smoothcam.controllers.common import as_vec2, require_non_negative, require_smoothing_weight
from smoothcam.input import FrameInput, Key
from smoothcam.rig.look import LookAngles, LookTransform
from smoothcam.util.math import yaw_basis


@dataclass(frozen=True, eq=False)
class FpsSettings:
    rotate_sensitivity: np.ndarray = field(default_factory=lambda: as_vec2(DEFAULT_FPS_ROTATE_SENSITIVITY))
    translate_sensitivity: float = DEFAULT_FPS_TRANSLATE_SENSITIVITY
    smoothing_weight: float = DEFAULT_FPS_SMOOTHING

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotate_sensitivity", as_vec2(self.rotate_sensitivity))
        require_non_negative("rotate_sensitivity", self.rotate_sensitivity)
        require_non_negative("translate_sensitivity", self.translate_sensitivity)
        require_smoothing_weight(self.smoothing_weight)


@dataclass(frozen=True, eq=False)
class Rotate:
    delta: np.ndarray  # (yaw, pitch) radians


@dataclass(frozen=True, eq=False)
class TranslateEye:
    delta: np.ndarray  # local (x, y, z), +z forward, +x left


ControlEvent = Union[Rotate, TranslateEye]

# Held key -> local translation axis. Order is the emission order.
KEY_AXES = (
    (Key.W, np.array([0.0, 0.0, 1.0])),
    (Key.A, np.array([1.0, 0.0, 0.0])),
    (Key.S, np.array([0.0, 0.0, -1.0])),
    (Key.D, np.array([-1.0, 0.0, 0.0])),
    (Key.LSHIFT, np.array([0.0, -1.0, 0.0])),
    (Key.SPACE, np.array([0.0, 1.0, 0.0])),
)


class FpsCameraController:
    """Your typical first-person camera: mouse looks, WASD/Space/Shift fly."""

    def __init__(self, settings: FpsSettings | None = None, *, enabled: bool = True) -> None:
        self.settings = settings if settings is not None else FpsSettings()
        self.enabled = bool(enabled)

    @property
    def smoothing_weight(self) -> float:
        return self.settings.smoothing_weight

    def input_map(self, frame: FrameInput) -> list[ControlEvent]:
        return default_input_map(self, frame)

    def control(self, events: Iterable[ControlEvent], transform: LookTransform) -> bool:
        return control_system(events, transform)


def default_input_map(controller: FpsCameraController, frame: FrameInput) -> list[ControlEvent]:
    s = controller.settings
    # Rotate goes out every frame, even for a zero delta.
    events: list[ControlEvent] = [Rotate(s.rotate_sensitivity * frame.cursor_delta)]
    for key, axis in KEY_AXES:
        if frame.pressed(key):
            events.append(TranslateEye(s.translate_sensitivity * axis))
    return events


def control_system(events: Iterable[ControlEvent], transform: LookTransform) -> bool:
    """Apply this frame's events to transform in place.

    Returns False (and leaves transform untouched) when the transform has no
    usable look direction.
    """
    look_vector = transform.look_direction()
    if look_vector is None:
        return False
    radius = transform.radius()
    look_angles = LookAngles.from_vector(look_vector)

    # Basis comes from the pre-frame yaw; Rotate events below don't move it.
    rot_x, rot_y, rot_z = yaw_basis(look_angles.get_yaw())

    for event in events:
        if isinstance(event, Rotate):
            look_angles.add_yaw(-float(event.delta[0]))
            look_angles.add_pitch(-float(event.delta[1]))
        elif isinstance(event, TranslateEye):
            dx, dy, dz = (float(v) for v in event.delta)
            transform.eye = transform.eye + dx * rot_x + dy * rot_y + dz * rot_z
        else:
            raise TypeError(f"unexpected FPS control event {event!r}")

    look_angles.clamp_pitch()
    transform.target = transform.eye + radius * look_angles.unit_vector()
    return True
