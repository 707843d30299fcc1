import logging
from dataclasses import dataclass

from swerve_drive.geometry import wrap_degrees, wrap_degrees_zero_center

logger = logging.getLogger(__name__)

# Largest steering change before the wheel flips and drives in reverse instead
REVERSAL_THRESHOLD_DEG = 90.0


@dataclass(frozen=True)
class WheelTarget:
    direction: float  # continuous (unwrapped) steering direction [deg]
    speed: float      # signed drive speed

    @property
    def bounded_direction(self) -> float:
        return wrap_degrees(self.direction)


def steering_delta(current: float, desired: float) -> float:
    """Signed change from `current` to `desired`, wrapped onto (-180, 180]."""
    delta = wrap_degrees_zero_center(desired - wrap_degrees(current))
    if delta == -180.0:
        delta = 180.0
    return delta


def optimize_steering(current: float, desired: float, speed: float):
    """
    Finds the smallest rotation that points a wheel along `desired`.

    If the wheel would have to turn more than 90 degrees it steers to the
    opposite heading and drives backwards instead. Exactly 90 degrees keeps the
    forward drive direction.

    Args:
        current (float): Continuous steering direction of the wheel [deg].
        desired (float): Desired heading of the wheel's motion [deg], any range.
        speed (float): Desired (non-negative) drive speed.

    Returns:
        Tuple[WheelTarget, int]: The new continuous target and the speed sign (+1 / -1).
    """
    if speed < 0:
        raise ValueError(f"speed must be non-negative, got {speed}")
    delta = steering_delta(current, desired)
    sign = 1
    if abs(delta) > REVERSAL_THRESHOLD_DEG:
        delta += -180.0 if delta > 0 else 180.0
        sign = -1
    return WheelTarget(current + delta, sign * speed), sign


class WheelSteering:
    """
    Per-wheel steering state. The continuous direction accumulates across
    cycles and is never wrapped, so the wheel is never asked to unwind.
    """

    def __init__(self, name: str = "", initial_direction: float = 0.0):
        self.name = name
        self.continuous_direction = float(initial_direction)
        self.speed_sign = 1
        self.speed = 0.0

    @property
    def direction(self) -> float:
        """Current steering direction on [0, 360)."""
        return wrap_degrees(self.continuous_direction)

    @property
    def target(self) -> WheelTarget:
        return WheelTarget(self.continuous_direction, self.speed)

    def update(self, desired: float, speed: float) -> WheelTarget:
        # At rest the wheel keeps its last heading
        if speed == 0:
            self.speed = 0.0
            return self.target
        target, sign = optimize_steering(
            self.continuous_direction, desired, speed)
        if sign != self.speed_sign:
            logger.debug("%s: drive direction flipped (sign %+d)",
                         self.name or "wheel", sign)
        self.continuous_direction = target.direction
        self.speed_sign = sign
        self.speed = target.speed
        return target

    def steer_to(self, desired: float) -> WheelTarget:
        """Steers toward `desired` without driving, allowing the 180 degree flip."""
        target, sign = optimize_steering(self.continuous_direction, desired, 0.0)
        self.continuous_direction = target.direction
        self.speed_sign = sign
        self.speed = 0.0
        return target

    def check_within_range(self, direction: float, margin_of_error: float) -> bool:
        return abs(steering_delta(self.continuous_direction, direction)) <= margin_of_error

    def check_within_180_range(self, direction: float, margin_of_error: float) -> bool:
        return (self.check_within_range(direction, margin_of_error) or
                self.check_within_range(direction + 180.0, margin_of_error))

    def reset(self, direction: float = 0.0):
        self.continuous_direction = float(direction)
        self.speed_sign = 1
        self.speed = 0.0
