# geometry.py
"""
Immutable 2D vector and angle helpers shared by the kinematics, odometry and
motion profiles.

Angles are measured counter-clockwise from +X. Degree rotations are reported on
[0, 360); zero-centered wraps land on [-180, 180).
"""
import math
from dataclasses import dataclass

import numpy as np

PI = math.pi
TAU = 2 * math.pi


# -------------------- Angle wrapping --------------------

def wrap_degrees(degrees: float) -> float:
    """Wraps an angle onto [0, 360)."""
    wrapped = degrees % 360.0
    # A tiny negative input can round up to exactly 360
    if wrapped >= 360.0:
        wrapped -= 360.0
    return wrapped


def wrap_degrees_zero_center(degrees: float) -> float:
    """Wraps an angle onto [-180, 180)."""
    return wrap_degrees(degrees + 180.0) - 180.0


def wrap_radians(radians: float) -> float:
    """Wraps an angle onto [0, 2pi)."""
    wrapped = radians % TAU
    if wrapped >= TAU:
        wrapped -= TAU
    return wrapped


def wrap_radians_zero_center(radians: float) -> float:
    """Wraps an angle onto [-pi, pi)."""
    return wrap_radians(radians + PI) - PI


def degrees_to_radians(degrees: float) -> float:
    return degrees * PI / 180.0


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / PI


# -------------------- Vector --------------------

@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_polar_degrees(cls, degrees: float, magnitude: float) -> "Vector":
        return cls.from_polar_radians(degrees_to_radians(degrees), magnitude)

    @classmethod
    def from_polar_radians(cls, radians: float, magnitude: float) -> "Vector":
        return cls(magnitude * math.cos(radians), magnitude * math.sin(radians))

    @classmethod
    def from_npy(cls, arr) -> "Vector":
        if len(arr) != 2:
            raise ValueError("Array must have exactly 2 elements.")
        return cls(float(arr[0]), float(arr[1]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])

    # Arithmetic
    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def scale(self, s: float) -> "Vector":
        return Vector(self.x * s, self.y * s)

    def reflect_across_x(self) -> "Vector":
        return Vector(self.x, -self.y)

    def reflect_across_y(self) -> "Vector":
        return Vector(-self.x, self.y)

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, s):
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self):
        return self.scale(-1)

    # Polar form
    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def rotation_radians(self) -> float:
        """Counter-clockwise rotation from +X on [0, 2pi). The zero vector has rotation 0."""
        if self.x == 0 and self.y == 0:
            return 0.0
        return wrap_radians(math.atan2(self.y, self.x))

    @property
    def rotation_degrees(self) -> float:
        """Counter-clockwise rotation from +X on [0, 360). The zero vector has rotation 0."""
        if self.x == 0 and self.y == 0:
            return 0.0
        return wrap_degrees(math.degrees(math.atan2(self.y, self.x)))

    def with_rotation_degrees(self, degrees: float) -> "Vector":
        """Same magnitude, pointing at an absolute rotation."""
        return Vector.from_polar_degrees(degrees, self.magnitude)

    def rotated_by_degrees(self, degrees: float) -> "Vector":
        """Rotates counter-clockwise by a relative angle."""
        c = math.cos(degrees_to_radians(degrees))
        s = math.sin(degrees_to_radians(degrees))
        return Vector(self.x * c - self.y * s, self.x * s + self.y * c)

    def __str__(self):
        return f"X: {self.x:.2f}, Y: {self.y:.2f}, Theta: {self.rotation_degrees:.0f}"


ZERO = Vector(0.0, 0.0)
