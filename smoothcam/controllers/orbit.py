from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

import numpy as np

from smoothcam.config import (
    DEFAULT_ORBIT_ROTATE_SENSITIVITY,
    DEFAULT_ORBIT_TRANSLATE_SENSITIVITY,
    DEFAULT_ORBIT_WHEEL_ZOOM_SENSITIVITY,
    DEFAULT_ORBIT_SMOOTHING,
    ORBIT_MIN_RADIUS,
    ORBIT_MAX_RADIUS,
)
from smoothcam.controllers.common import as_vec2, require_non_negative, require_smoothing_weight
from smoothcam.input import FrameInput, Key, MouseButton
from smoothcam.rig.look import LookAngles, LookTransform
from smoothcam.util.math import normalize, UP


@dataclass(frozen=True, eq=False)
class OrbitSettings:
    # Per second, per pixel; mapped events are already scaled by frame dt.
    rotate_sensitivity: np.ndarray = field(default_factory=lambda: as_vec2(DEFAULT_ORBIT_ROTATE_SENSITIVITY))
    translate_sensitivity: np.ndarray = field(default_factory=lambda: as_vec2(DEFAULT_ORBIT_TRANSLATE_SENSITIVITY))
    wheel_zoom_sensitivity: float = DEFAULT_ORBIT_WHEEL_ZOOM_SENSITIVITY
    smoothing_weight: float = DEFAULT_ORBIT_SMOOTHING
    min_radius: float = ORBIT_MIN_RADIUS
    max_radius: float = ORBIT_MAX_RADIUS

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotate_sensitivity", as_vec2(self.rotate_sensitivity))
        object.__setattr__(self, "translate_sensitivity", as_vec2(self.translate_sensitivity))
        require_non_negative("rotate_sensitivity", self.rotate_sensitivity)
        require_non_negative("translate_sensitivity", self.translate_sensitivity)
        require_non_negative("wheel_zoom_sensitivity", self.wheel_zoom_sensitivity)
        require_smoothing_weight(self.smoothing_weight)
        if not (0.0 < float(self.min_radius) <= float(self.max_radius)):
            raise ValueError(f"need 0 < min_radius <= max_radius, got {self.min_radius!r}, {self.max_radius!r}")


@dataclass(frozen=True, eq=False)
class Orbit:
    delta: np.ndarray  # (yaw, pitch) radians around the target


@dataclass(frozen=True, eq=False)
class TranslateTarget:
    delta: np.ndarray  # screen-space (right, up)


@dataclass(frozen=True)
class Zoom:
    scalar: float  # radius multiplier


ControlEvent = Union[Orbit, TranslateTarget, Zoom]


class OrbitCameraController:
    """Orbits the eye around the target.

    Ctrl+Left drag orbits, Right drag pans the target, wheel zooms.
    """

    def __init__(self, settings: OrbitSettings | None = None, *, enabled: bool = True) -> None:
        self.settings = settings if settings is not None else OrbitSettings()
        self.enabled = bool(enabled)

    @property
    def smoothing_weight(self) -> float:
        return self.settings.smoothing_weight

    def input_map(self, frame: FrameInput) -> list[ControlEvent]:
        return default_input_map(self, frame)

    def control(self, events: Iterable[ControlEvent], transform: LookTransform) -> bool:
        return control_system(events, transform, min_radius=self.settings.min_radius, max_radius=self.settings.max_radius)


def default_input_map(controller: OrbitCameraController, frame: FrameInput) -> list[ControlEvent]:
    s = controller.settings
    dt = frame.dt
    cursor = frame.cursor_delta
    events: list[ControlEvent] = []

    if frame.pressed(Key.LCTRL) and frame.held(MouseButton.LEFT):
        events.append(Orbit(dt * s.rotate_sensitivity * cursor))

    if frame.held(MouseButton.RIGHT):
        events.append(TranslateTarget(dt * s.translate_sensitivity * cursor))

    events.append(Zoom(1.0 - frame.wheel_delta * s.wheel_zoom_sensitivity))
    return events


def control_system(
    events: Iterable[ControlEvent],
    transform: LookTransform,
    *,
    min_radius: float = ORBIT_MIN_RADIUS,
    max_radius: float = ORBIT_MAX_RADIUS,
) -> bool:
    """Apply this frame's events; eye is re-derived around the (possibly moved) target."""
    look_vector = transform.look_direction()
    if look_vector is None:
        return False
    radius = transform.radius()
    # Angles of the target -> eye direction.
    look_angles = LookAngles.from_vector(-look_vector)
    radius_scalar = 1.0

    right = normalize(np.cross(look_vector, UP))
    up = np.cross(right, look_vector)

    for event in events:
        if isinstance(event, Orbit):
            look_angles.add_yaw(-float(event.delta[0]))
            look_angles.add_pitch(float(event.delta[1]))
        elif isinstance(event, TranslateTarget):
            dx, dy = float(event.delta[0]), float(event.delta[1])
            transform.target = transform.target + dx * -right + dy * up
        elif isinstance(event, Zoom):
            radius_scalar *= float(event.scalar)
        else:
            raise TypeError(f"unexpected orbit control event {event!r}")

    look_angles.clamp_pitch()
    new_radius = min(max(radius_scalar * radius, float(min_radius)), float(max_radius))
    transform.eye = transform.target + new_radius * look_angles.unit_vector()
    return True
