import math

import pytest

from swerve_drive.geometry import (PI, TAU, Vector, degrees_to_radians, radians_to_degrees,
                                   wrap_degrees, wrap_degrees_zero_center, wrap_radians,
                                   wrap_radians_zero_center)

ANGLES = [-725.0, -360.0, -180.0, -1e-17, 0.0, 45.0, 180.0, 359.999, 360.0, 1080.5]


@pytest.mark.parametrize("v", [Vector(3, 4), Vector(-1.5, 2.25), Vector(0, 0), Vector(1e6, -1e-6)])
def test_vector_plus_negation_is_zero(v):
    assert v.add(v.scale(-1)).magnitude == pytest.approx(0.0, abs=1e-9)
    assert (v + -v).magnitude == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("d", ANGLES)
def test_wrap_degrees_range_and_idempotent(d):
    w = wrap_degrees(d)
    assert 0 <= w < 360
    assert wrap_degrees(w) == w


@pytest.mark.parametrize("d", ANGLES)
def test_wrap_degrees_zero_center_range(d):
    w = wrap_degrees_zero_center(d)
    assert -180 <= w < 180
    assert wrap_degrees_zero_center(w) == pytest.approx(w)


def test_wrap_zero_center_values():
    assert wrap_degrees_zero_center(180) == -180
    assert wrap_degrees_zero_center(190) == pytest.approx(-170)
    assert wrap_degrees_zero_center(-190) == pytest.approx(170)


def test_wrap_radians():
    assert 0 <= wrap_radians(-0.1) < TAU
    assert wrap_radians(TAU + 1) == pytest.approx(1)
    assert wrap_radians_zero_center(PI) == pytest.approx(-PI)
    assert -PI <= wrap_radians_zero_center(7.0) < PI


def test_degree_radian_conversion():
    assert degrees_to_radians(180) == pytest.approx(math.pi)
    assert radians_to_degrees(math.pi / 2) == pytest.approx(90)
    assert TAU == pytest.approx(2 * PI)


def test_magnitude_and_rotation():
    v = Vector(3, 4)
    assert v.magnitude == pytest.approx(5)
    assert Vector(0, 1).rotation_degrees == pytest.approx(90)
    assert Vector(0, -1).rotation_degrees == pytest.approx(270)
    assert Vector(-1, 0).rotation_radians == pytest.approx(math.pi)


def test_zero_vector_rotation_is_zero():
    assert Vector(0, 0).rotation_degrees == 0
    assert Vector(0, 0).rotation_radians == 0


def test_polar_construction():
    v = Vector.from_polar_degrees(90, 2)
    assert v.x == pytest.approx(0, abs=1e-12)
    assert v.y == pytest.approx(2)
    w = Vector.from_polar_radians(math.pi, 1)
    assert w.x == pytest.approx(-1)


def test_reflections():
    v = Vector(2, -3)
    assert v.reflect_across_x() == Vector(2, 3)
    assert v.reflect_across_y() == Vector(-2, -3)


def test_rotation_helpers():
    v = Vector(1, 0).rotated_by_degrees(90)
    assert v.x == pytest.approx(0, abs=1e-12)
    assert v.y == pytest.approx(1)
    w = Vector(3, 4).with_rotation_degrees(180)
    assert w.x == pytest.approx(-5)
    assert w.y == pytest.approx(0, abs=1e-12)


def test_vector_is_immutable():
    v = Vector(1, 2)
    with pytest.raises(AttributeError):
        v.x = 5
