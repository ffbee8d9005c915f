from __future__ import annotations

import numpy as np

# Interleaved line vertices: (x, y, z, r, g, b) float32, two rows per segment.

GRID_COLOR = (0.35, 0.36, 0.40)
GRID_MAJOR_COLOR = (0.50, 0.52, 0.58)
AXIS_COLORS = ((0.90, 0.25, 0.25), (0.30, 0.85, 0.35), (0.30, 0.45, 0.95))
CUBE_COLOR = (0.85, 0.75, 0.55)

def _segments(pairs: list[tuple[tuple[float, float, float], tuple[float, float, float]]], color) -> np.ndarray:
    out = np.empty((len(pairs) * 2, 6), dtype=np.float32)
    for i, (a, b) in enumerate(pairs):
        out[2 * i, :3] = a
        out[2 * i + 1, :3] = b
    out[:, 3:] = color
    return out

def build_grid(half_extent: int, step: float = 1.0, *, major_every: int = 5) -> np.ndarray:
    """Ground grid on y=0 spanning [-half_extent*step, half_extent*step] on X and Z.

    The lines through the origin are left out; build_axes draws them.
    """
    n = int(half_extent)
    if n < 1:
        raise ValueError(f"half_extent must be >= 1, got {half_extent!r}")
    extent = n * float(step)
    minor: list = []
    major: list = []
    for i in range(-n, n + 1):
        if i == 0:
            continue
        c = i * float(step)
        bucket = major if major_every > 0 and i % major_every == 0 else minor
        bucket.append(((c, 0.0, -extent), (c, 0.0, extent)))
        bucket.append(((-extent, 0.0, c), (extent, 0.0, c)))
    parts = [p for p in (_segments(minor, GRID_COLOR), _segments(major, GRID_MAJOR_COLOR)) if len(p)]
    return np.concatenate(parts, axis=0)

def build_axes(length: float) -> np.ndarray:
    """World X/Y/Z axes from the origin, colored R/G/B."""
    length = float(length)
    ends = ((length, 0.0, 0.0), (0.0, length, 0.0), (0.0, 0.0, length))
    return np.concatenate(
        [_segments([((0.0, 0.0, 0.0), end)], color) for end, color in zip(ends, AXIS_COLORS)],
        axis=0,
    )

def build_cube(center=(0.0, 0.5, 0.0), size: float = 1.0) -> np.ndarray:
    """Wireframe cube: 12 edges."""
    h = float(size) / 2.0
    cx, cy, cz = (float(v) for v in center)
    corners = [(cx + sx * h, cy + sy * h, cz + sz * h) for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)]
    pairs = []
    for i in range(8):
        for j in range(i + 1, 8):
            # Edges join corners differing in exactly one coordinate.
            if sum(a != b for a, b in zip(corners[i], corners[j])) == 1:
                pairs.append((corners[i], corners[j]))
    return _segments(pairs, CUBE_COLOR)

def build_scene(half_extent: int, step: float = 1.0) -> np.ndarray:
    return np.concatenate([build_grid(half_extent, step), build_axes(half_extent * step), build_cube()], axis=0)
