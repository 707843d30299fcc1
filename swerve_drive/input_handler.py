"""
Joystick input shaping: a rescaling deadband followed by a response curve.

Values just above the deadband map to small outputs rather than jumping to the
deadband value, and the curve trades sensitivity between small and large
inputs. Curves map [0, 1] onto [0, 1].
"""
from typing import Callable

from swerve_drive.errors import ConfigurationError
from swerve_drive.geometry import Vector, ZERO

Curve = Callable[[float], float]


def linear_curve(x: float) -> float:
    return x


def square_curve(x: float) -> float:
    return x * x


def three_halves_curve(x: float) -> float:
    return x ** 1.5


class InputHandler:
    def __init__(self, deadband: float = 0.0, curve: Curve = linear_curve):
        if not 0 <= deadband < 1:
            raise ConfigurationError(f"deadband must be on [0, 1), got {deadband}")
        self.deadband = deadband
        self.curve = curve

    def _apply_deadband(self, value: float) -> float:
        # [deadband, 1] -> [0, 1]
        return max(value - self.deadband, 0.0) / (1 - self.deadband)

    def apply(self, value: float) -> float:
        """Shapes a single axis on [-1, 1]; the sign is preserved."""
        magnitude = min(abs(value), 1.0)
        shaped = self.curve(self._apply_deadband(magnitude))
        return -shaped if value < 0 else shaped

    def apply_vector(self, value: Vector) -> Vector:
        """Shapes a vector by its magnitude, keeping its direction."""
        magnitude = value.magnitude
        if magnitude == 0:
            return ZERO
        return value.scale(self.apply(magnitude) / magnitude)
