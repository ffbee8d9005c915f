from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

import numpy as np

from smoothcam.config import (
    DEFAULT_UNREAL_ROTATE_SENSITIVITY,
    DEFAULT_UNREAL_MOUSE_TRANSLATE_SENSITIVITY,
    DEFAULT_UNREAL_WHEEL_TRANSLATE_SENSITIVITY,
    DEFAULT_UNREAL_KEYBOARD_MOVE_SENSITIVITY,
    DEFAULT_UNREAL_KEYBOARD_MOVE_WHEEL_SENSITIVITY,
    DEFAULT_UNREAL_SMOOTHING,
    KEYBOARD_MOVE_MIN_SENSITIVITY,
)
from smoothcam.controllers.common import as_vec2, require_non_negative, require_smoothing_weight
from smoothcam.input import FrameInput, Key, MouseButton
from smoothcam.rig.look import LookAngles, LookTransform
from smoothcam.util.math import yaw_basis


@dataclass(frozen=True, eq=False)
class UnrealSettings:
    """Static configuration; the live keyboard speed lives on the controller."""

    # Radians per pixel for (yaw, pitch) when rotating with the mouse.
    rotate_sensitivity: np.ndarray = field(default_factory=lambda: as_vec2(DEFAULT_UNREAL_ROTATE_SENSITIVITY))
    # Units per pixel when panning with Middle or L+R.
    mouse_translate_sensitivity: np.ndarray = field(
        default_factory=lambda: as_vec2(DEFAULT_UNREAL_MOUSE_TRANSLATE_SENSITIVITY)
    )
    # Units per wheel step when no button is held.
    wheel_translate_sensitivity: float = DEFAULT_UNREAL_WHEEL_TRANSLATE_SENSITIVITY
    # Initial units per frame for W/S/A/D/Q/E while dragging.
    keyboard_move_sensitivity: float = DEFAULT_UNREAL_KEYBOARD_MOVE_SENSITIVITY
    # How much one wheel step changes the keyboard speed while dragging.
    keyboard_move_wheel_sensitivity: float = DEFAULT_UNREAL_KEYBOARD_MOVE_WHEEL_SENSITIVITY
    smoothing_weight: float = DEFAULT_UNREAL_SMOOTHING

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotate_sensitivity", as_vec2(self.rotate_sensitivity))
        object.__setattr__(self, "mouse_translate_sensitivity", as_vec2(self.mouse_translate_sensitivity))
        require_non_negative("rotate_sensitivity", self.rotate_sensitivity)
        require_non_negative("mouse_translate_sensitivity", self.mouse_translate_sensitivity)
        require_non_negative("wheel_translate_sensitivity", self.wheel_translate_sensitivity)
        require_non_negative("keyboard_move_wheel_sensitivity", self.keyboard_move_wheel_sensitivity)
        speed = float(self.keyboard_move_sensitivity)
        if not (np.isfinite(speed) and speed >= KEYBOARD_MOVE_MIN_SENSITIVITY):
            raise ValueError(
                f"keyboard_move_sensitivity must be finite and >= {KEYBOARD_MOVE_MIN_SENSITIVITY}, "
                f"got {self.keyboard_move_sensitivity!r}"
            )
        require_smoothing_weight(self.smoothing_weight)


@dataclass(frozen=True, eq=False)
class Locomotion:
    delta: np.ndarray  # x: yaw, y: distance along the view direction


@dataclass(frozen=True, eq=False)
class Rotate:
    delta: np.ndarray  # (yaw, pitch) radians


@dataclass(frozen=True, eq=False)
class TranslateEye:
    delta: np.ndarray  # x: sideways, y: world up


ControlEvent = Union[Locomotion, Rotate, TranslateEye]


class UnrealCameraController:
    """A camera driven like Unreal Engine's viewport.

    - Right drag looks around.
    - Left drag walks: horizontal motion yaws, vertical motion moves along the view.
    - Middle drag (or Left+Right) pans.
    - Wheel alone moves along the view; wheel while dragging changes the
      W/S/A/D/Q/E speed, which persists across frames.
    """

    def __init__(self, settings: UnrealSettings | None = None, *, enabled: bool = True) -> None:
        self.settings = settings if settings is not None else UnrealSettings()
        self.enabled = bool(enabled)
        self.keyboard_move_sensitivity = float(self.settings.keyboard_move_sensitivity)

    @property
    def smoothing_weight(self) -> float:
        return self.settings.smoothing_weight

    def reset_runtime(self) -> None:
        self.keyboard_move_sensitivity = float(self.settings.keyboard_move_sensitivity)

    def input_map(self, frame: FrameInput) -> list[ControlEvent]:
        return default_input_map(self, frame)

    def control(self, events: Iterable[ControlEvent], transform: LookTransform) -> bool:
        return control_system(events, transform)


def default_input_map(controller: UnrealCameraController, frame: FrameInput) -> list[ControlEvent]:
    s = controller.settings
    left = frame.held(MouseButton.LEFT)
    right = frame.held(MouseButton.RIGHT)
    middle = frame.held(MouseButton.MIDDLE)
    cursor = frame.cursor_delta
    wheel = frame.wheel_delta

    panning_dir = np.zeros(2)
    translation_dir = np.zeros(2)  # y is forward/backward
    if frame.pressed(Key.E):
        panning_dir[1] += 1.0
    if frame.pressed(Key.Q):
        panning_dir[1] -= 1.0
    if frame.pressed(Key.A):
        panning_dir[0] -= 1.0
    if frame.pressed(Key.D):
        panning_dir[0] += 1.0
    if frame.pressed(Key.W):
        translation_dir[1] += 1.0
    if frame.pressed(Key.S):
        translation_dir[1] -= 1.0

    panning = np.zeros(2)
    locomotion = np.zeros(2)
    events: list[ControlEvent] = []

    # Keyboard movement only applies while a mouse button is held.
    if frame.any_button():
        speed = controller.keyboard_move_sensitivity
        panning += speed * panning_dir
        if translation_dir[1] != 0.0:
            locomotion[1] += speed * translation_dir[1]

        speed += s.keyboard_move_wheel_sensitivity * wheel
        controller.keyboard_move_sensitivity = max(speed, KEYBOARD_MOVE_MIN_SENSITIVITY)
    elif wheel != 0.0:
        locomotion[1] += s.wheel_translate_sensitivity * wheel

    if middle or (left and right):
        panning += s.mouse_translate_sensitivity * cursor

    if left and not middle and not right:
        locomotion[0] = s.rotate_sensitivity[0] * cursor[0]
        locomotion[1] -= s.mouse_translate_sensitivity[1] * cursor[1]

    if right and not left and not middle:
        events.append(Rotate(s.rotate_sensitivity * cursor))

    if float(np.dot(panning, panning)) > 0.0:
        events.append(TranslateEye(panning))

    if float(np.dot(locomotion, locomotion)) > 0.0:
        events.append(Locomotion(locomotion))

    return events


def control_system(events: Iterable[ControlEvent], transform: LookTransform) -> bool:
    """Apply this frame's events to transform in place; False if it has no direction."""
    look_vector = transform.look_direction()
    if look_vector is None:
        return False
    radius = transform.radius()
    look_angles = LookAngles.from_vector(look_vector)

    for event in events:
        if isinstance(event, Locomotion):
            # Moves along the pre-frame view direction, not the rotated one.
            look_angles.add_yaw(-float(event.delta[0]))
            transform.eye = transform.eye + float(event.delta[1]) * look_vector
        elif isinstance(event, Rotate):
            look_angles.add_yaw(-float(event.delta[0]))
            look_angles.add_pitch(-float(event.delta[1]))
        elif isinstance(event, TranslateEye):
            rot_x, _, _ = yaw_basis(look_angles.get_yaw())
            dx, dy = float(event.delta[0]), float(event.delta[1])
            transform.eye = transform.eye - (dx * rot_x - np.array([0.0, dy, 0.0]))
        else:
            raise TypeError(f"unexpected Unreal control event {event!r}")

    look_angles.clamp_pitch()
    transform.target = transform.eye + radius * look_angles.unit_vector()
    return True
