from __future__ import annotations

from typing import Iterable, Sequence

import pygame

from smoothcam.input import FrameInput, Key, MouseButton

KEYMAP = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_q: Key.Q,
    pygame.K_e: Key.E,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_LSHIFT: Key.LSHIFT,
    pygame.K_LCTRL: Key.LCTRL,
}

# pygame.mouse.get_pressed(3) order
BUTTONS = (MouseButton.LEFT, MouseButton.MIDDLE, MouseButton.RIGHT)


def frame_input_from_pygame(
    events: Iterable[pygame.event.Event],
    key_state: Sequence[bool],
    mouse_state: Sequence[bool],
    dt: float,
) -> FrameInput:
    """Collapse one frame of pygame events and held state into a FrameInput.

    key_state is what pygame.key.get_pressed() returns (indexable by key
    constant), mouse_state what pygame.mouse.get_pressed(3) returns.
    Wheel x and y are summed into a single delta.
    """
    motions = []
    wheels = []
    for event in events:
        if event.type == pygame.MOUSEMOTION:
            motions.append(event.rel)
        elif event.type == pygame.MOUSEWHEEL:
            wheels.append(float(event.x) + float(event.y))

    keys = [key for code, key in KEYMAP.items() if key_state[code]]
    buttons = [button for button, down in zip(BUTTONS, mouse_state) if down]
    return FrameInput.from_motion(motions, wheels, keys=keys, buttons=buttons, dt=dt)
