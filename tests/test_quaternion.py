"""Tests for quaternion math."""

import math

import pytest

from textarc.quaternion import Quaternion


class TestFromTo:
    def test_same_direction_is_identity(self):
        q = Quaternion.from_to((0, 0, -1), (0, 0, -1))
        assert (q.w, q.x, q.y, q.z) == pytest.approx((1.0, 0.0, 0.0, 0.0))

    def test_quarter_turn(self):
        q = Quaternion.from_to((0, 0, -1), (1, 0, 0))
        assert q.rotate((0, 0, -1)) == pytest.approx((1.0, 0.0, 0.0))
        assert q.norm == pytest.approx(1.0)

    def test_inputs_are_normalized(self):
        q = Quaternion.from_to((0, 0, -5), (3, 0, -3))
        s = 1 / math.sqrt(2)
        assert q.rotate((0, 0, -1)) == pytest.approx((s, 0.0, -s))

    def test_opposite_horizontal_direction_turns_about_y(self):
        q = Quaternion.from_to((0, 0, -1), (0, 0, 1))
        assert (q.w, q.x, q.y, q.z) == pytest.approx((0.0, 0.0, 1.0, 0.0))
        assert q.rotate((0, 0, -1)) == pytest.approx((0.0, 0.0, 1.0))

    def test_opposite_vertical_direction(self):
        q = Quaternion.from_to((0, 1, 0), (0, -1, 0))
        assert q.norm == pytest.approx(1.0)
        assert q.rotate((0, 1, 0)) == pytest.approx((0.0, -1.0, 0.0))

    def test_minimal_rotation_axis_is_perpendicular(self):
        q = Quaternion.from_to((1, 0, 0), (0, 1, 0))
        # Rotation axis is +Z, so Z is left untouched
        assert q.rotate((0, 0, 1)) == pytest.approx((0.0, 0.0, 1.0))

    def test_zero_vector_raises(self):
        with pytest.raises(ValueError, match="zero-length"):
            Quaternion.from_to((0, 0, 0), (1, 0, 0))

    def test_wrong_shape_raises(self):
        with pytest.raises(ValueError, match="3-component"):
            Quaternion.from_to((1, 0), (1, 0, 0))


class TestQuaternion:
    def test_default_is_no_rotation(self):
        assert Quaternion().rotate((1.0, 2.0, 3.0)) == pytest.approx((1.0, 2.0, 3.0))

    def test_axis_angle_matches_from_to(self):
        a = Quaternion.from_axis_angle((0, 1, 0), -0.3)
        b = Quaternion.from_to((0, 0, -1), (math.sin(0.3), 0, -math.cos(0.3)))
        assert a.as_array() == pytest.approx(b.as_array())

    def test_antiparallel_is_half_turn_about_y(self):
        q = Quaternion.from_to((0, 0, -1), (0, 0, 1))
        expected = Quaternion.from_axis_angle((0, 1, 0), math.pi)
        assert q.as_array() == pytest.approx(expected.as_array(), abs=1e-12)

    def test_normalized(self):
        q = Quaternion(2.0, 0.0, 0.0, 0.0).normalized()
        assert q == Quaternion(1.0, 0.0, 0.0, 0.0)

    def test_normalize_zero_raises(self):
        with pytest.raises(ValueError):
            Quaternion(0.0, 0.0, 0.0, 0.0).normalized()

    def test_xyzw_order(self):
        assert Quaternion(0.1, 0.2, 0.3, 0.4).as_xyzw() == [0.2, 0.3, 0.4, 0.1]
