"""
Dead-reckoning odometry for a swerve drive.

Each update polls every wheel's cumulative encoder distance, turns the change
since the previous poll into a displacement along that wheel's steering
direction, averages the wheels into one robot-frame displacement, rotates it
into the field frame with the heading held at the start of the cycle, and
takes the new heading straight from the heading sensor.

The steering direction is the module's measured one when it reports it, so
distance driven while a wheel is still slewing is credited along the bearing
the wheel actually had. Modules without a steering sensor fall back to the
commanded continuous direction. The drive sign always comes from the steering
optimizer.

Averaging the four wheels is a plain approximation: it smooths single-wheel
noise but does not model skid or slip.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import numpy as np

from swerve_drive.errors import ConfigurationError
from swerve_drive.geometry import Vector, wrap_degrees, wrap_degrees_zero_center
from swerve_drive.hardware import (HeadingSensor, WheelActuator, read_direction, read_encoder,
                                   read_heading)
from swerve_drive.steering import WheelSteering

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """Robot location on the field (inches) and field heading (degrees, [0, 360))."""
    location: Vector = field(default_factory=Vector)
    heading: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "heading", wrap_degrees(self.heading))

    @property
    def heading_zero_centered(self) -> float:
        return wrap_degrees_zero_center(self.heading)

    def add_movement(self, movement: Vector) -> "Position":
        return Position(self.location.add(movement), self.heading)

    def with_heading(self, heading: float) -> "Position":
        return Position(self.location, heading)

    def movement_to(self, other: "Position") -> Vector:
        return other.location.subtract(self.location)

    def distance_from(self, other: "Position") -> float:
        return self.movement_to(other).magnitude


class Odometry:
    def __init__(self,
                 steering: Mapping[str, WheelSteering],
                 wheels: Mapping[str, WheelActuator],
                 heading_sensor: HeadingSensor,
                 initial_position: Optional[Position] = None):
        if not wheels:
            raise ConfigurationError("odometry needs at least one wheel")
        missing = set(wheels) - set(steering)
        if missing:
            raise ConfigurationError(f"no steering state for wheels: {sorted(missing)}")
        self.steering = steering
        self.wheels = dict(wheels)
        self.heading_sensor = heading_sensor
        self._references: Dict[str, float] = {}
        self._position = Position()
        self.reset_position(initial_position or Position())

    def _wheel_displacement(self, name: str, distance: float, direction: Optional[float] = None) -> Vector:
        delta = distance - self._references[name]
        self._references[name] = distance
        steering = self.steering[name]
        if direction is None:
            direction = steering.continuous_direction
        return Vector.from_polar_degrees(direction, abs(delta) * steering.speed_sign)

    def robot_displacement(self) -> Vector:
        """Average wheel displacement since the last poll, in the robot frame."""
        # Read every sensor before moving any reference
        readings = {name: (read_encoder(wheel, name), read_direction(wheel, name))
                    for name, wheel in self.wheels.items()}
        moves = np.array([self._wheel_displacement(name, d, direction).to_array()
                          for name, (d, direction) in readings.items()])
        return Vector.from_npy(moves.mean(axis=0))

    def update(self) -> Position:
        """
        Integrates one control cycle. Must be called once per cycle; a call
        with no new sensor data adds zero displacement.
        """
        # Read the heading first so a dropout leaves the encoder references untouched
        new_heading = read_heading(self.heading_sensor)
        movement = self.robot_displacement().rotated_by_degrees(self._position.heading)
        self._position = Position(self._position.location.add(movement), new_heading)
        logger.debug("odometry update: moved %s -> %s", movement, self._position.location)
        return self._position

    def reset_position(self, position: Position):
        """Overwrites the position, re-zeroes the heading sensor and every encoder reference."""
        self.heading_sensor.reset(position.heading)
        self._references = {name: read_encoder(wheel, name)
                            for name, wheel in self.wheels.items()}
        self._position = position
        logger.info("odometry reset to %s, heading %.1f", position.location, position.heading)

    def get_position(self) -> Position:
        return self._position
