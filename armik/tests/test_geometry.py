"""Tests for arm geometry."""

import dataclasses
import math

import pytest

from armik.geometry import ArmGeometry, GeometryConfigError


class TestArmGeometry:
    """Test derived workspace bounds and validation."""

    def test_default_dimensions(self):
        geom = ArmGeometry()
        assert (geom.base_height, geom.lower_arm_length, geom.upper_arm_length) == (4, 12, 10)

    def test_reach_bounds(self):
        geom = ArmGeometry(base_height=0, lower_arm_length=5, upper_arm_length=8)
        assert geom.max_reach == 13
        assert geom.min_reach == 3  # |5 - 8|

    def test_equal_links_reach_origin(self):
        geom = ArmGeometry(lower_arm_length=7, upper_arm_length=7)
        assert geom.min_reach == 0

    def test_is_immutable(self):
        geom = ArmGeometry()
        with pytest.raises(dataclasses.FrozenInstanceError):
            geom.lower_arm_length = 20
        with pytest.raises(dataclasses.FrozenInstanceError):
            geom.max_reach = 100

    def test_reach_not_constructor_args(self):
        with pytest.raises(TypeError):
            ArmGeometry(max_reach=5)

    @pytest.mark.parametrize("lengths", [(0, 10), (12, 0), (-1, 10), (12, -3), (0, 0)])
    def test_rejects_non_positive_links(self, lengths):
        lower, upper = lengths
        with pytest.raises(GeometryConfigError, match="positive length"):
            ArmGeometry(lower_arm_length=lower, upper_arm_length=upper)

    @pytest.mark.parametrize("bad", [math.inf, math.nan])
    def test_rejects_non_finite(self, bad):
        with pytest.raises(GeometryConfigError):
            ArmGeometry(upper_arm_length=bad)
        with pytest.raises(GeometryConfigError):
            ArmGeometry(base_height=bad)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            ArmGeometry(lower_arm_length=-5)

    def test_negative_base_height_allowed(self):
        geom = ArmGeometry(base_height=-2)
        assert geom.base_height == -2

    def test_shoulder_distance(self):
        geom = ArmGeometry()
        horizontal, vertical, planar = geom.shoulder_distance(3.0, 4.0, 4.0)
        assert horizontal == pytest.approx(5.0)
        assert vertical == 0.0
        assert planar == pytest.approx(5.0)

    def test_shoulder_distance_returns_plain_floats(self):
        geom = ArmGeometry()
        horizontal, vertical, planar = geom.shoulder_distance(6.0, 12.0, 8.0)
        assert type(horizontal) is float and type(planar) is float
        assert horizontal == 10.0
        assert planar == pytest.approx(12.806248474865697)
