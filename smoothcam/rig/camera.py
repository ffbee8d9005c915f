from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from smoothcam.input import FrameInput
from smoothcam.rig.look import LookTransform, Smoother
from smoothcam.rig.selection import select_active


class CameraRig:
    """One camera: a controller, its raw look transform and the smoother fed from it.

    input_map replaces the controller's default input mapping when given
    (a callable taking (controller, frame) and returning that controller's events).
    """

    def __init__(
        self,
        controller,
        eye,
        target,
        *,
        input_map: Callable[[object, FrameInput], list] | None = None,
        name: str | None = None,
    ) -> None:
        self.controller = controller
        self.transform = LookTransform(eye, target)
        if self.transform.look_direction() is None:
            raise ValueError(f"eye and target must differ, got eye={eye!r} target={target!r}")
        self.smoother = Smoother(controller.smoothing_weight)
        self.input_map = input_map
        self.name = name if name is not None else type(controller).__name__
        self.smoothed = self.transform.copy()
        self.events_last_frame = 0

    def __repr__(self) -> str:
        return f"CameraRig({self.name!r}, enabled={self.controller.enabled}, {self.transform!r})"

    @property
    def enabled(self) -> bool:
        return self.controller.enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self.controller.enabled = bool(value)

    def map_input(self, frame: FrameInput) -> list:
        if self.input_map is not None:
            return list(self.input_map(self.controller, frame))
        return self.controller.input_map(frame)

    def resolve(self, events: list) -> bool:
        return self.controller.control(events, self.transform)

    def smooth(self) -> LookTransform:
        self.smoothed = self.smoother.smooth(self.transform)
        return self.smoothed

    def view_matrix(self) -> np.ndarray:
        return self.smoothed.view_matrix()


def update_rigs(rigs: Sequence[CameraRig], frame: FrameInput) -> int | None:
    """Run one frame for all rigs and return the index of the one that was driven.

    Phase order: map input and resolve events for the active rig only, then
    smooth every rig. Rigs that were not driven keep smoothing toward their
    last raw transform.
    """
    active = select_active(rig.controller for rig in rigs)

    for i, rig in enumerate(rigs):
        if i == active:
            events = rig.map_input(frame)
            rig.events_last_frame = len(events)
            rig.resolve(events)
        else:
            rig.events_last_frame = 0

    for rig in rigs:
        rig.smooth()
    return active
