"""Unit tests for the line scene geometry."""

import unittest

import numpy as np
import pytest

from smoothcam.render.scene import build_axes, build_cube, build_grid, build_scene


class TestSceneGeometry(unittest.TestCase):
    """Unit test class for scene builders."""

    def test_cube_has_twelve_unit_edges(self) -> None:
        """Test the wireframe cube."""
        lines = build_cube(center=(0.0, 0.5, 0.0), size=1.0)
        assert lines.shape == (24, 6)
        assert lines.dtype == np.float32
        lengths = np.linalg.norm(lines[1::2, :3] - lines[0::2, :3], axis=1)
        np.testing.assert_allclose(lengths, 1.0)
        assert lines[:, 1].min() == 0.0
        assert lines[:, 1].max() == 1.0

    def test_grid_skips_origin_lines(self) -> None:
        """Test the grid line count and extent."""
        lines = build_grid(2, 1.0)
        assert lines.shape == (16, 6)
        assert np.all(lines[:, 1] == 0.0)
        assert np.abs(lines[:, [0, 2]]).max() == 2.0

    def test_grid_major_lines_colored(self) -> None:
        """Test that every fifth line uses the major color."""
        lines = build_grid(5, 1.0)
        colors = {tuple(np.round(c, 3)) for c in lines[:, 3:]}
        assert len(colors) == 2

    def test_grid_rejects_empty(self) -> None:
        """Test that a grid needs at least one line per side."""
        with pytest.raises(ValueError):
            build_grid(0)

    def test_axes(self) -> None:
        """Test that the axes start at the origin and end on each world axis."""
        lines = build_axes(3.0)
        assert lines.shape == (6, 6)
        np.testing.assert_array_equal(lines[0::2, :3], np.zeros((3, 3)))
        np.testing.assert_array_equal(lines[1::2, :3], np.eye(3) * 3.0)

    def test_scene_concatenates(self) -> None:
        """Test the full scene layout."""
        assert build_scene(2).shape == (16 + 6 + 24, 6)
