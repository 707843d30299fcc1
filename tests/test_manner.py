import pytest

from swerve_drive.errors import ConfigurationError
from swerve_drive.geometry import Vector
from swerve_drive.kinematics import FrameOfReference
from swerve_drive.manner import (MovementManner, RobotMovement, RobotTurn, TurnManner,
                                 constant_speed, proportional_speed, speed_with_slowdown)
from swerve_drive.odometry import Position


def test_constant_speed():
    supplier = constant_speed(0.4)
    assert supplier(100) == 0.4
    assert supplier(0) == 0.4


def test_speed_with_slowdown():
    supplier = speed_with_slowdown(1.0, 0.1, 2.0)
    assert supplier(5.0) == 1.0
    assert 0.1 < supplier(1.0) < 1.0
    assert supplier(1.0) == pytest.approx(0.55)
    assert supplier(0.0) == pytest.approx(0.1)
    assert supplier(2.0) == pytest.approx(1.0)


def test_speed_with_slowdown_is_monotonic():
    supplier = speed_with_slowdown(0.8, 0.2, 10.0)
    speeds = [supplier(e / 4) for e in range(0, 80)]
    assert speeds == sorted(speeds)
    assert min(speeds) >= 0.2


@pytest.mark.parametrize("args", [(0.1, 0.5, 1.0), (1.0, -0.1, 1.0), (1.0, 0.1, 0.0)])
def test_speed_with_slowdown_validation(args):
    with pytest.raises(ConfigurationError):
        speed_with_slowdown(*args)


def test_proportional_speed():
    supplier = proportional_speed(0.8, 0.1, 10.0)
    assert supplier(10.0) == pytest.approx(0.8)
    assert supplier(5.0) == pytest.approx(0.4)
    assert supplier(0.5) == pytest.approx(0.1)
    with pytest.raises(ConfigurationError):
        proportional_speed(0.8, 0.1, 0)


def test_manner_uses_absolute_error():
    manner = TurnManner(2.0, speed_with_slowdown(0.5, 0.1, 30.0))
    assert manner.speed(-60) == 0.5
    assert manner.is_within_margin(-1.5)
    assert not manner.is_within_margin(2.5)


def test_negative_margin_rejected():
    with pytest.raises(ConfigurationError):
        MovementManner(-1.0, constant_speed(0.5))
    with pytest.raises(ConfigurationError):
        constant_speed(-0.5)


def test_none_manners():
    assert MovementManner.none().margin_of_error == 0
    assert TurnManner.none().speed(10) == 0
    assert RobotMovement.NONE.movement == Vector()


def test_field_movement_to_robot_frame():
    movement = RobotMovement(Vector(0, 5), FrameOfReference.FIELD, MovementManner.none())
    relative = movement.to_robot_relative(Position(Vector(), 90))
    assert relative.x == pytest.approx(5)
    assert relative.y == pytest.approx(0, abs=1e-9)
    assert movement.to_field_relative(Position(Vector(), 90)) == Vector(0, 5)


def test_robot_movement_to_field_frame():
    movement = RobotMovement(Vector(5, 0), FrameOfReference.ROBOT, MovementManner.none())
    field = movement.to_field_relative(Position(Vector(), 90))
    assert field.x == pytest.approx(0, abs=1e-9)
    assert field.y == pytest.approx(5)
    assert movement.to_robot_relative(Position(Vector(), 90)) == Vector(5, 0)


def test_turn_targets():
    robot_turn = RobotTurn(30, FrameOfReference.ROBOT, TurnManner.none())
    assert robot_turn.to_field_heading(Position(Vector(), 350)) == pytest.approx(20)
    field_turn = RobotTurn(-90, FrameOfReference.FIELD, TurnManner.none())
    assert field_turn.to_field_heading(Position(Vector(), 350)) == pytest.approx(270)
