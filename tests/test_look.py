"""Unit tests for LookAngles, LookTransform and Smoother."""

import math
import unittest

import numpy as np
import pytest

from smoothcam.config import PITCH_EPSILON
from smoothcam.rig.look import LookAngles, LookTransform, Smoother

PITCH_LIMIT = math.pi / 2 - PITCH_EPSILON


class TestLookAngles(unittest.TestCase):
    """Unit test class for LookAngles."""

    def test_round_trip(self) -> None:
        """Test that unit_vector(from_vector(d)) reproduces d away from the poles."""
        rng = np.random.default_rng(7)
        directions = [
            (0.0, 0.0, -1.0),
            (0.0, 0.0, 1.0),
            (1.0, 0.0, 0.0),
            (-1.0, 0.0, 0.0),
            (1.0, 1.0, 1.0),
            (-0.3, -0.8, 0.2),
        ] + [tuple(rng.normal(size=3)) for _ in range(50)]
        for d in directions:
            d = np.array(d) / np.linalg.norm(d)
            if abs(d[1]) >= math.sin(PITCH_LIMIT):
                continue
            np.testing.assert_allclose(LookAngles.from_vector(d).unit_vector(), d, atol=1e-12)

    def test_non_unit_direction_is_normalized(self) -> None:
        """Test that direction length does not change the angles."""
        a = LookAngles.from_vector(np.array([3.0, 4.0, -12.0]))
        b = LookAngles.from_vector(np.array([3.0, 4.0, -12.0]) / 13.0)
        assert a.get_yaw() == pytest.approx(b.get_yaw())
        assert a.get_pitch() == pytest.approx(b.get_pitch())

    def test_convention(self) -> None:
        """Test the documented yaw/pitch convention."""
        forward = LookAngles.from_vector(np.array([0.0, 0.0, 1.0]))
        assert forward.get_yaw() == 0.0
        assert forward.get_pitch() == 0.0

        right = LookAngles.from_vector(np.array([1.0, 0.0, 0.0]))
        assert right.get_yaw() == pytest.approx(math.pi / 2)

        back = LookAngles.from_vector(np.array([0.0, 0.0, -1.0]))
        assert back.get_yaw() == pytest.approx(math.pi)

        up = LookAngles.from_vector(np.array([0.0, 1.0, 1.0]))
        assert up.get_pitch() == pytest.approx(math.pi / 4)

    def test_vertical_direction_is_clamped(self) -> None:
        """Test that looking straight up or down is pulled off the pole."""
        up = LookAngles.from_vector(np.array([0.0, 1.0, 0.0]))
        down = LookAngles.from_vector(np.array([0.0, -5.0, 0.0]))
        assert up.get_pitch() == pytest.approx(PITCH_LIMIT)
        assert down.get_pitch() == pytest.approx(-PITCH_LIMIT)
        assert not up.is_looking_vertical()
        assert not down.is_looking_vertical()

    def test_zero_direction_rejected(self) -> None:
        """Test that a zero vector has no angles."""
        with pytest.raises(ValueError):
            LookAngles.from_vector(np.zeros(3))
        with pytest.raises(ValueError):
            LookAngles.from_vector(np.array([np.nan, 0.0, 1.0]))

    def test_add_pitch_always_bounded(self) -> None:
        """Test that pitch stays inside the guard after any sequence of add_pitch calls."""
        rng = np.random.default_rng(3)
        angles = LookAngles()
        for delta in rng.normal(scale=2.0, size=500):
            angles.add_pitch(float(delta))
            assert abs(angles.get_pitch()) <= PITCH_LIMIT

        angles.add_pitch(100.0)
        assert angles.get_pitch() == PITCH_LIMIT
        angles.add_pitch(-1000.0)
        assert angles.get_pitch() == -PITCH_LIMIT

    def test_add_yaw_is_additive(self) -> None:
        """Test that add_yaw accumulates without wrapping."""
        a = LookAngles()
        a.add_yaw(0.3)
        a.add_yaw(-1.7)
        b = LookAngles()
        b.add_yaw(0.3 + -1.7)
        assert a.get_yaw() == b.get_yaw()

        c = LookAngles(yaw=1.0)
        for _ in range(10):
            c.add_yaw(math.pi)
        assert c.get_yaw() == pytest.approx(1.0 + 10 * math.pi)

    def test_clamp_pitch_is_idempotent(self) -> None:
        """Test that re-running the guard does not move an in-range pitch."""
        angles = LookAngles(yaw=0.5, pitch=0.25)
        angles.clamp_pitch()
        angles.clamp_pitch()
        assert angles.get_pitch() == 0.25
        assert angles.get_yaw() == 0.5

    def test_constructor_clamps_pitch(self) -> None:
        """Test that pitch passed at construction is clamped too."""
        assert LookAngles(pitch=2.0).get_pitch() == PITCH_LIMIT


class TestLookTransform(unittest.TestCase):
    """Unit test class for LookTransform."""

    def setUp(self) -> None:
        """Set up a camera 5 units in front of the origin."""
        self.transform = LookTransform((0.0, 0.0, 5.0), (0.0, 0.0, 0.0))

    def test_radius_and_direction(self) -> None:
        """Test radius and normalized look direction."""
        assert self.transform.radius() == pytest.approx(5.0)
        np.testing.assert_allclose(self.transform.look_direction(), [0.0, 0.0, -1.0])

    def test_degenerate_direction_is_none(self) -> None:
        """Test that coincident eye and target have no direction."""
        t = LookTransform((1.0, 2.0, 3.0), (1.0, 2.0, 3.0))
        assert t.look_direction() is None
        assert t.radius() == 0.0

    def test_copy_is_independent(self) -> None:
        """Test that copies don't share arrays."""
        c = self.transform.copy()
        c.eye[0] = 42.0
        assert self.transform.eye[0] == 0.0

    def test_view_matrix_puts_target_on_minus_z(self) -> None:
        """Test that the view matrix maps the target onto the camera's -Z axis."""
        t = LookTransform((-2.0, 2.5, 5.0), (0.0, 0.5, 0.0))
        m = t.view_matrix().T  # stored column-major
        p = m @ np.array([0.0, 0.5, 0.0, 1.0])
        np.testing.assert_allclose(p[:3], [0.0, 0.0, -t.radius()], atol=1e-5)


class TestSmoother(unittest.TestCase):
    """Unit test class for Smoother."""

    def test_invalid_weight_rejected(self) -> None:
        """Test that weights outside [0, 1) are rejected at construction."""
        for weight in (-0.1, 1.0, 1.5, float("nan")):
            with pytest.raises(ValueError):
                Smoother(weight)

    def test_weight_setter_validates(self) -> None:
        """Test that changing the weight later is validated too."""
        s = Smoother(0.5)
        s.weight = 0.2
        assert s.weight == 0.2
        with pytest.raises(ValueError):
            s.weight = 1.0
        assert s.weight == 0.2

    def test_first_frame_is_unsmoothed(self) -> None:
        """Test that the first call seeds from raw and returns it."""
        s = Smoother(0.9)
        raw = LookTransform((1.0, 2.0, 3.0), (0.0, 0.0, 0.0))
        out = s.smooth(raw)
        np.testing.assert_array_equal(out.eye, raw.eye)
        np.testing.assert_array_equal(out.target, raw.target)

    def test_zero_weight_has_no_lag(self) -> None:
        """Test that weight 0 tracks raw exactly."""
        s = Smoother(0.0)
        rng = np.random.default_rng(11)
        for _ in range(20):
            raw = LookTransform(rng.normal(size=3), rng.normal(size=3))
            out = s.smooth(raw)
            np.testing.assert_array_equal(out.eye, raw.eye)
            np.testing.assert_array_equal(out.target, raw.target)

    def test_blend_uses_weight(self) -> None:
        """Test one smoothing step against the closed form."""
        s = Smoother(0.75)
        s.smooth(LookTransform((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        out = s.smooth(LookTransform((4.0, 0.0, 0.0), (4.0, 0.0, -1.0)))
        np.testing.assert_allclose(out.eye, [1.0, 0.0, 0.0])
        np.testing.assert_allclose(out.target, [1.0, 0.0, -1.0])

    def test_converges_monotonically_without_overshoot(self) -> None:
        """Test that a fixed raw pose is approached monotonically and never passed."""
        weight = 0.9
        s = Smoother(weight)
        s.smooth(LookTransform((0.0, 0.0, 10.0), (0.0, 0.0, 0.0)))
        raw = LookTransform((10.0, 0.0, 10.0), (10.0, 0.0, 0.0))

        last = float("inf")
        frames = int(math.ceil(20.0 / (1.0 - weight)))
        for _ in range(frames):
            out = s.smooth(raw)
            dist = float(np.linalg.norm(out.eye - raw.eye))
            assert dist <= last + 1e-12
            assert out.eye[0] <= raw.eye[0] + 1e-12
            assert out.target[0] <= raw.target[0] + 1e-12
            last = dist
        assert last < 1e-6

    def test_reset_reseeds(self) -> None:
        """Test that reset drops the smoothed pose."""
        s = Smoother(0.9)
        s.smooth(LookTransform((0.0, 0.0, 1.0), (0.0, 0.0, 0.0)))
        s.reset()
        assert s.previous is None
        raw = LookTransform((5.0, 0.0, 1.0), (5.0, 0.0, 0.0))
        np.testing.assert_array_equal(s.smooth(raw).eye, raw.eye)

    def test_output_does_not_alias_state(self) -> None:
        """Test that mutating a returned transform leaves the smoother alone."""
        s = Smoother(0.5)
        out = s.smooth(LookTransform((0.0, 0.0, 1.0), (0.0, 0.0, 0.0)))
        out.eye[:] = 100.0
        np.testing.assert_array_equal(s.previous.eye, [0.0, 0.0, 1.0])
