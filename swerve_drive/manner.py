"""
Motion profiles ("manners") for autonomous maneuvers.

A manner pairs a completion tolerance with a speed supplier: a plain function
mapping the remaining error (inches for movements, degrees for turns) to a
non-negative speed. The autonomous commands sample the supplier every cycle
and stop once the error is inside the tolerance.
"""
from dataclasses import dataclass
from typing import Callable

from swerve_drive.errors import ConfigurationError
from swerve_drive.geometry import Vector, wrap_degrees
from swerve_drive.kinematics import FrameOfReference

SpeedSupplier = Callable[[float], float]


# -------------------- Speed suppliers --------------------

def constant_speed(speed: float) -> SpeedSupplier:
    """The same speed at every point of the maneuver."""
    if speed < 0:
        raise ConfigurationError(f"speed must be non-negative, got {speed}")

    def supplier(remaining: float) -> float:
        return speed
    return supplier


def speed_with_slowdown(max_speed: float, min_speed: float, slowdown_start: float) -> SpeedSupplier:
    """
    Full speed until the remaining error drops to `slowdown_start`, then a
    linear ramp from `max_speed` down to `min_speed` at zero error. The ramp
    never reaches zero, so the robot cannot stall short of the target.

    Args:
        max_speed (float): Speed for most of the maneuver.
        min_speed (float): Speed at zero remaining error.
        slowdown_start (float): Remaining error at which the ramp begins.
    """
    if not 0 <= min_speed <= max_speed:
        raise ConfigurationError(
            f"need 0 <= min_speed <= max_speed, got {min_speed} and {max_speed}")
    if slowdown_start <= 0:
        raise ConfigurationError(
            f"slowdown_start must be positive, got {slowdown_start}")

    def supplier(remaining: float) -> float:
        remaining = abs(remaining)
        if remaining > slowdown_start:
            return max_speed
        return min_speed + (max_speed - min_speed) * remaining / slowdown_start
    return supplier


def proportional_speed(speed_scalar: float, min_speed: float, total: float) -> SpeedSupplier:
    """Speed proportional to the fraction of `total` still remaining, floored at `min_speed`."""
    if speed_scalar < 0 or min_speed < 0:
        raise ConfigurationError("speeds must be non-negative")
    if total <= 0:
        raise ConfigurationError(f"total must be positive, got {total}")

    def supplier(remaining: float) -> float:
        return max(speed_scalar * abs(remaining) / total, min_speed)
    return supplier


# -------------------- Manners --------------------

@dataclass(frozen=True)
class Manner:
    margin_of_error: float
    speed_supplier: SpeedSupplier

    def __post_init__(self):
        if self.margin_of_error < 0:
            raise ConfigurationError(
                f"margin_of_error must be non-negative, got {self.margin_of_error}")

    def speed(self, remaining: float) -> float:
        return self.speed_supplier(abs(remaining))

    def is_within_margin(self, remaining: float) -> bool:
        return abs(remaining) <= self.margin_of_error


@dataclass(frozen=True)
class MovementManner(Manner):
    """Margin of error in inches; speed supplier maps remaining distance to drive speed."""

    @classmethod
    def none(cls) -> "MovementManner":
        return cls(0.0, constant_speed(0.0))


@dataclass(frozen=True)
class TurnManner(Manner):
    """Margin of error in degrees; speed supplier maps remaining angle to turn speed."""

    @classmethod
    def none(cls) -> "TurnManner":
        return cls(0.0, constant_speed(0.0))


# -------------------- Maneuvers --------------------

@dataclass(frozen=True)
class RobotMovement:
    """
    A strafe (no turning). `movement` is +x forward / +y left when the frame is
    ROBOT, or along the field axes when the frame is FIELD.
    """
    movement: Vector
    frame: FrameOfReference
    manner: MovementManner

    def to_robot_relative(self, position) -> Vector:
        if self.frame == FrameOfReference.ROBOT:
            return self.movement
        return self.movement.rotated_by_degrees(-position.heading)

    def to_field_relative(self, position) -> Vector:
        if self.frame == FrameOfReference.FIELD:
            return self.movement
        return self.movement.rotated_by_degrees(position.heading)


RobotMovement.NONE = RobotMovement(Vector(), FrameOfReference.ROBOT, MovementManner.none())


@dataclass(frozen=True)
class RobotTurn:
    """
    A turn of the whole body. With a ROBOT frame `direction` is a turn relative
    to the starting heading (positive = counter-clockwise); with FIELD it is
    the final field heading.
    """
    direction: float
    frame: FrameOfReference
    manner: TurnManner

    def to_field_heading(self, position) -> float:
        if self.frame == FrameOfReference.FIELD:
            return wrap_degrees(self.direction)
        return wrap_degrees(self.direction + position.heading)
