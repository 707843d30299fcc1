"""
Kinematic stand-ins for the host hardware, used by the teleop demo and tests.

Wheels integrate their commanded speed into encoder distance and the chassis
motion is recovered from the four wheel velocity vectors with a least-squares
rigid-body fit, then integrated into a true pose that drives the gyro.
"""
import math
from typing import Dict, Optional

import numpy as np

from swerve_drive.drive import SwerveDrive
from swerve_drive.drive_constants import DriveConfig
from swerve_drive.geometry import Vector, wrap_degrees
from swerve_drive.hardware import HeadingSensor, WheelActuator
from swerve_drive.odometry import Position

MAX_WHEEL_SPEED = 60.0  # Ground speed of a wheel commanded at speed 1 [in/s]


class SimulatedWheel(WheelActuator):
    def __init__(self, steer_rate: Optional[float] = None, max_speed: float = MAX_WHEEL_SPEED):
        """
        Args:
            steer_rate (float, optional): Steering slew rate [deg/s]; None steers instantly.
            max_speed (float): Ground speed at a commanded speed of 1 [in/s].
        """
        self.steer_rate = steer_rate
        self.max_speed = max_speed
        self.direction = 0.0         # measured continuous direction [deg]
        self.target_direction = 0.0  # commanded continuous direction [deg]
        self.speed = 0.0
        self._encoder = 0.0
        self._last_poll = 0.0

    def steer_and_drive(self, direction: float, speed: float):
        self.target_direction = direction
        self.speed = speed
        if self.steer_rate is None:
            self.direction = direction

    def stop(self):
        self.speed = 0.0
        self.target_direction = self.direction

    def encoder_distance(self) -> float:
        return self._encoder

    def position_difference(self) -> float:
        delta = self._encoder - self._last_poll
        self._last_poll = self._encoder
        return delta

    def measured_direction(self) -> float:
        return wrap_degrees(self.direction)

    def velocity(self) -> Vector:
        """Ground velocity of the contact point in the robot frame [in/s]."""
        return Vector.from_polar_degrees(self.direction, self.speed * self.max_speed)

    def advance(self, dt: float):
        if self.steer_rate is not None:
            error = self.target_direction - self.direction
            step = self.steer_rate * dt
            self.direction += max(-step, min(step, error))
        self._encoder += self.speed * self.max_speed * dt


class SimulatedGyro(HeadingSensor):
    def __init__(self):
        self.true_heading = 0.0  # [deg], counter-clockwise
        self._zero = 0.0
        self.dropout = False

    def current_heading(self) -> float:
        if self.dropout:
            return float("nan")
        return wrap_degrees(self.true_heading - self._zero)

    def reset(self, offset: float = 0.0):
        self._zero = self.true_heading - offset


def rigid_body_fit(locations: Dict[str, tuple], velocities: Dict[str, Vector]):
    """
    Calculates the chassis velocity (vx, vy, omega) that best explains the
    wheel contact velocities, using a least-squares fit.

    Args:
        locations (dict): wheel name -> (x, y) in the robot frame.
        velocities (dict): wheel name -> Vector ground velocity in the robot frame.

    Returns:
        Tuple[float, float, float]: vx, vy [in/s] and omega [rad/s, CCW].
    """
    n = len(locations)
    A = np.zeros((2 * n, 3))
    b = np.zeros(2 * n)
    for i, (name, (x_i, y_i)) in enumerate(locations.items()):
        v_i = velocities[name]
        # v_ix = vx - omega * y_i
        A[2 * i] = [1, 0, -y_i]
        b[2 * i] = v_i.x
        # v_iy = vy + omega * x_i
        A[2 * i + 1] = [0, 1, x_i]
        b[2 * i + 1] = v_i.y
    solution, *_ = np.linalg.lstsq(A, b, rcond=None)
    return float(solution[0]), float(solution[1]), float(solution[2])


class SwerveSimulator:
    def __init__(self, config: Optional[DriveConfig] = None, steer_rate: Optional[float] = None,
                 max_speed: float = MAX_WHEEL_SPEED, initial_position: Optional[Position] = None):
        self.config = config or DriveConfig()
        self.locations = self.config.wheel_locations()
        self.wheels = {name: SimulatedWheel(steer_rate, max_speed) for name in self.locations}
        self.gyro = SimulatedGyro()
        self.pose = initial_position or Position()
        self.gyro.true_heading = self.pose.heading
        self.time = 0.0

    def build_drive(self, **kwargs) -> SwerveDrive:
        return SwerveDrive(self.wheels, self.gyro, self.config,
                           initial_position=self.pose, **kwargs)

    def step(self, dt: float = 0.02) -> Position:
        """Advances the wheels and the true pose by one period."""
        for wheel in self.wheels.values():
            wheel.advance(dt)
        vx, vy, omega = rigid_body_fit(
            self.locations, {name: w.velocity() for name, w in self.wheels.items()})
        # Body -> world using the heading at the start of the step
        movement = Vector(vx * dt, vy * dt).rotated_by_degrees(self.pose.heading)
        heading = self.pose.heading + math.degrees(omega * dt)
        self.pose = Position(self.pose.location.add(movement), heading)
        self.gyro.true_heading += math.degrees(omega * dt)
        self.time += dt
        return self.pose
