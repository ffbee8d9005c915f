from __future__ import annotations

from typing import Iterable


def select_active(controllers: Iterable) -> int | None:
    """Index of the first enabled controller, or None.

    Only one camera is driven per frame; any later enabled controllers are
    ignored for that frame.
    """
    for i, controller in enumerate(controllers):
        if controller.enabled:
            return i
    return None
