"""Swerve drive geometric constants and drive configuration (units: inches)


Coordinate Frame (body frame):
    +X forward, +Y left. Angles in degrees, counter-clockwise positive,
    0 degrees pointing along +X.

Conventional Naming:
    WHEEL_BASE     Longitudinal distance between front and rear wheel contact points.
    TRACK_WIDTH    Lateral distance between left and right wheel contact points.

Wheel Locations Mapping:
    WHEEL_LOCATIONS[name] = (x, y) in body frame.
     x: +/- WHEEL_BASE / 2
     y: +/- TRACK_WIDTH / 2

Input Scalars:
    STRAFE_SPEED and STEER_SPEED scale user (joystick) input before it reaches
    the kinematics. DEADBAND filters joystick noise and is only applied to
    user input. MAX_OUTPUT caps every command, user or autonomous.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from swerve_drive.errors import ConfigurationError

# ---------------- Core Dimensions ----------------
WHEEL_BASE = 22.0   # Front <-> rear wheel spacing [in]
TRACK_WIDTH = 22.0  # Left <-> right wheel spacing [in]
ROBOT_BODY_LENGTH = 28.0  # Frame length [in]
ROBOT_BODY_WIDTH = 28.0   # Frame width [in]

# ---------------- Drive Limits ----------------
DEADBAND = 0.05     # Command magnitude treated as zero
MAX_OUTPUT = 1.0    # Largest wheel speed the kinematics will command
STRAFE_SPEED = 0.5  # User strafe input scalar
STEER_SPEED = 0.3   # User steering input scalar

# ---------------- Wheel Locations (Body Frame) ----------------
WHEEL_NAMES = ("front_left", "front_right", "rear_left", "rear_right")


def wheel_locations_for(wheel_base: float, track_width: float) -> Dict[str, Tuple[float, float]]:
    """Body-frame wheel contact points for a rectangular four-wheel frame."""
    return {
        "front_left":  (wheel_base / 2,  track_width / 2),
        "front_right": (wheel_base / 2, -track_width / 2),
        "rear_left":   (-wheel_base / 2,  track_width / 2),
        "rear_right":  (-wheel_base / 2, -track_width / 2),
    }


WHEEL_LOCATIONS = wheel_locations_for(WHEEL_BASE, TRACK_WIDTH)


@dataclass
class DriveConfig:
    wheel_base: float = WHEEL_BASE        # [in]
    track_width: float = TRACK_WIDTH      # [in]
    deadband: float = DEADBAND            # [0, 1)
    max_output: float = MAX_OUTPUT        # wheel speed cap
    strafe_speed: float = STRAFE_SPEED    # user input scalar
    steer_speed: float = STEER_SPEED      # user input scalar
    locations: Dict[str, Tuple[float, float]] = field(default_factory=dict)

    def __post_init__(self):
        if self.wheel_base <= 0 or self.track_width <= 0:
            raise ConfigurationError(
                f"wheel_base and track_width must be positive, got "
                f"{self.wheel_base} and {self.track_width}")
        if not 0 <= self.deadband < 1:
            raise ConfigurationError(
                f"deadband must be on [0, 1), got {self.deadband}")
        if self.max_output <= 0:
            raise ConfigurationError(
                f"max_output must be positive, got {self.max_output}")
        if self.strafe_speed <= 0 or self.steer_speed <= 0:
            raise ConfigurationError("input scalars must be positive")
        if not self.locations:
            self.locations = wheel_locations_for(
                self.wheel_base, self.track_width)

    @classmethod
    def from_wheel_locations(cls, locations: Dict[str, Tuple[float, float]], **kwargs) -> "DriveConfig":
        """Build a config from explicit body-frame wheel offsets."""
        if not locations:
            raise ConfigurationError("at least one wheel location is required")
        xs = [x for x, _ in locations.values()]
        ys = [y for _, y in locations.values()]
        wheel_base = max(xs) - min(xs) or WHEEL_BASE
        track_width = max(ys) - min(ys) or TRACK_WIDTH
        return cls(wheel_base=wheel_base, track_width=track_width,
                   locations=dict(locations), **kwargs)

    def wheel_locations(self) -> Dict[str, Tuple[float, float]]:
        return dict(self.locations)
