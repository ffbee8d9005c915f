from __future__ import annotations

import numpy as np


def as_vec2(value) -> np.ndarray:
    """Accept a scalar (same for both axes) or an (x, y) pair."""
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim == 0:
        return np.array([float(arr), float(arr)])
    return arr.reshape(2).copy()


def require_non_negative(name: str, value) -> None:
    arr = np.asarray(value, dtype=np.float64)
    if not np.all(np.isfinite(arr)) or np.any(arr < 0.0):
        raise ValueError(f"{name} must be finite and non-negative, got {value!r}")


def require_smoothing_weight(value: float) -> None:
    w = float(value)
    if not (0.0 <= w < 1.0):
        raise ValueError(f"smoothing_weight must be in [0, 1), got {value!r}")
