import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

import numpy as np

from swerve_drive.drive_constants import DriveConfig
from swerve_drive.geometry import Vector, ZERO
from swerve_drive.steering import WheelSteering, WheelTarget

logger = logging.getLogger(__name__)


class FrameOfReference(Enum):
    ROBOT = "robot"  # relative to the chassis heading
    FIELD = "field"  # relative to the heading sensor's zero reference


@dataclass(frozen=True)
class RobotVelocityCommand:
    """
    Desired chassis motion for one drive cycle.
    translation: strafe vector (+x forward, +y left)
    rotation: counter-clockwise rotation rate
    """
    translation: Vector = field(default_factory=Vector)
    rotation: float = 0.0
    frame: FrameOfReference = FrameOfReference.ROBOT

    @classmethod
    def from_components(cls, vx: float, vy: float, rotation: float,
                        frame: FrameOfReference = FrameOfReference.ROBOT) -> "RobotVelocityCommand":
        return cls(Vector(vx, vy), rotation, frame)

    def to_robot_relative(self, heading: float) -> "RobotVelocityCommand":
        """Rotates a field-relative translation by the negative robot heading."""
        if self.frame == FrameOfReference.ROBOT:
            return self
        return RobotVelocityCommand(self.translation.rotated_by_degrees(-heading),
                                    self.rotation, FrameOfReference.ROBOT)


STOP = RobotVelocityCommand()


class DriveKinematics:
    """
    Resolves a RobotVelocityCommand into one WheelTarget per wheel.

    With `normalize_rotation` the rotation rate is a unitless fraction: a rate of
    1 spins the wheel farthest from the center at speed 1. Otherwise the rate is
    taken in rad/s and multiplied by each wheel's physical distance from center.
    """

    def __init__(self, config: Optional[DriveConfig] = None, normalize_rotation: bool = True):
        self.config = config or DriveConfig()
        self.wheel_locations = self.config.wheel_locations()
        self.normalize_rotation = normalize_rotation
        self.steering: Dict[str, WheelSteering] = {
            name: WheelSteering(name) for name in self.wheel_locations
        }
        self._positions = np.array(list(self.wheel_locations.values()), dtype=float)
        radii = np.linalg.norm(self._positions, axis=1)
        self._rotation_scale = 1.0 / radii.max() if normalize_rotation and radii.max() > 0 else 1.0
        self.last_wheel_vectors: Dict[str, Vector] = {
            name: ZERO for name in self.wheel_locations}

    @property
    def wheel_names(self):
        return list(self.wheel_locations.keys())

    def apply_deadband(self, command: RobotVelocityCommand) -> RobotVelocityCommand:
        deadband = self.config.deadband
        if command.translation.magnitude < deadband and abs(command.rotation) < deadband:
            return RobotVelocityCommand(ZERO, 0.0, command.frame)
        return command

    def wheel_vectors(self, command: RobotVelocityCommand, heading: float = 0.0,
                      apply_deadband: bool = False) -> Dict[str, Vector]:
        """
        Raw per-wheel target vectors in the robot frame, scaled down together
        if any wheel exceeds the max output. Does not touch steering state.

        Args:
            command (RobotVelocityCommand): Desired chassis motion.
            heading (float): Current field heading [deg], used for FIELD commands.
            apply_deadband (bool): Zero the command when it is inside the
                configured deadband. Meant for raw joystick input only;
                autonomous speeds must reach the wheels however small.

        Returns:
            Dict[str, Vector]: Target vector per wheel name.
        """
        if apply_deadband:
            command = self.apply_deadband(command)
        command = command.to_robot_relative(heading)
        t = command.translation
        w = command.rotation * self._rotation_scale

        # Rotation contribution is perpendicular to each wheel's radius: w x r
        x_i, y_i = self._positions[:, 0], self._positions[:, 1]
        raw = np.column_stack((t.x - w * y_i, t.y + w * x_i))

        # Scale every wheel by the same factor to keep speed ratios
        mags = np.linalg.norm(raw, axis=1)
        peak = float(mags.max()) if len(mags) else 0.0
        if peak > self.config.max_output:
            logger.debug("wheel speed %.3f exceeds max output, scaling all wheels", peak)
            raw *= self.config.max_output / peak

        return {name: Vector.from_npy(raw[i]) for i, name in enumerate(self.wheel_locations)}

    def compute(self, command: RobotVelocityCommand, heading: float = 0.0,
                apply_deadband: bool = False) -> Dict[str, WheelTarget]:
        """Resolves a command into continuous wheel targets, updating steering state."""
        vectors = self.wheel_vectors(command, heading, apply_deadband)
        self.last_wheel_vectors = vectors
        return {
            name: self.steering[name].update(v.rotation_degrees, v.magnitude)
            for name, v in vectors.items()
        }

    def steer_all(self, direction: float, speed: float) -> Dict[str, WheelTarget]:
        """Points every wheel along the same direction at the same speed."""
        speed = min(speed, self.config.max_output)
        self.last_wheel_vectors = {
            name: Vector.from_polar_degrees(direction, speed) for name in self.steering}
        return {name: s.update(direction, speed) for name, s in self.steering.items()}

    def steer_all_to(self, direction: float) -> Dict[str, WheelTarget]:
        """Steers every wheel to a direction without driving."""
        self.last_wheel_vectors = {name: ZERO for name in self.steering}
        return {name: s.steer_to(direction) for name, s in self.steering.items()}

    def all_within_range(self, direction: float, margin_of_error: float) -> bool:
        return all(s.check_within_180_range(direction, margin_of_error)
                   for s in self.steering.values())

    def stop(self) -> Dict[str, WheelTarget]:
        return self.compute(STOP)
