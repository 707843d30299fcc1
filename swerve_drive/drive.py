import logging
from typing import Dict, Mapping, Optional

from swerve_drive.drive_constants import DriveConfig
from swerve_drive.errors import ConfigurationError
from swerve_drive.geometry import Vector, wrap_degrees
from swerve_drive.hardware import HeadingSensor, WheelActuator, read_heading
from swerve_drive.input_handler import InputHandler
from swerve_drive.kinematics import DriveKinematics, FrameOfReference, RobotVelocityCommand
from swerve_drive.odometry import Odometry, Position
from swerve_drive.steering import WheelTarget, steering_delta

logger = logging.getLogger(__name__)


class SwerveDrive:
    """
    Binds the kinematics and odometry to the host's wheel modules and heading
    sensor. One `drive` (or `stop`) and one `update_odometry` call per cycle.
    """

    def __init__(self,
                 wheels: Mapping[str, WheelActuator],
                 heading_sensor: HeadingSensor,
                 config: Optional[DriveConfig] = None,
                 initial_position: Optional[Position] = None,
                 normalize_rotation: bool = True):
        self.config = config or DriveConfig()
        if set(wheels) != set(self.config.wheel_locations()):
            raise ConfigurationError(
                f"wheel names {sorted(wheels)} do not match configured locations "
                f"{sorted(self.config.wheel_locations())}")
        self.wheels = dict(wheels)
        self.heading_sensor = heading_sensor
        self.kinematics = DriveKinematics(self.config, normalize_rotation)
        self.odometry = Odometry(self.kinematics.steering, self.wheels,
                                 heading_sensor, initial_position)
        self.default_input_handler = InputHandler()
        logger.info("swerve drive ready with wheels: %s", ", ".join(self.wheels))

    # -------------------- Driving --------------------

    def _actuate(self, targets: Dict[str, WheelTarget]):
        for name, target in targets.items():
            self.wheels[name].steer_and_drive(target.direction, target.speed)

    def heading(self) -> float:
        return read_heading(self.heading_sensor)

    def drive(self, command: RobotVelocityCommand, apply_deadband: bool = False) -> Dict[str, WheelTarget]:
        heading = self.heading() if command.frame == FrameOfReference.FIELD else 0.0
        targets = self.kinematics.compute(command, heading, apply_deadband)
        self._actuate(targets)
        return targets

    def user_input_drive(self, strafe_x: float, strafe_y: float, steering: float,
                         input_handler: Optional[InputHandler] = None,
                         frame: FrameOfReference = FrameOfReference.ROBOT) -> Dict[str, WheelTarget]:
        """
        Drives from joystick axes on [-1, 1]: `strafe_x` forward, `strafe_y`
        left, `steering` counter-clockwise. Inputs are shaped by the input
        handler and scaled by the configured strafe/steer speeds. The
        configured deadband only applies when the handler has none of its own,
        so the handler's rescaled small outputs still reach the wheels.
        """
        handler = input_handler or self.default_input_handler
        strafe = handler.apply_vector(Vector(strafe_x, strafe_y)).scale(self.config.strafe_speed)
        rotation = handler.apply(steering) * self.config.steer_speed
        return self.drive(RobotVelocityCommand(strafe, rotation, frame),
                          apply_deadband=handler.deadband == 0)

    def steer_and_drive_all(self, direction: float, speed: float) -> Dict[str, WheelTarget]:
        targets = self.kinematics.steer_all(direction, speed)
        self._actuate(targets)
        return targets

    def steer_all_within_range(self, direction: float, margin_of_error: float) -> bool:
        """
        Steers every wheel toward `direction` without driving. True once each
        wheel is within the margin of the direction or its opposite.
        """
        self._actuate(self.kinematics.steer_all_to(direction))
        for name, wheel in self.wheels.items():
            measured = wheel.measured_direction()
            if measured is None:
                within = self.kinematics.steering[name].check_within_180_range(
                    direction, margin_of_error)
            else:
                delta = steering_delta(measured, direction)
                within = abs(delta) <= margin_of_error or abs(delta) >= 180 - margin_of_error
            if not within:
                return False
        return True

    def stop(self):
        self.kinematics.stop()
        for wheel in self.wheels.values():
            wheel.stop()

    # -------------------- Odometry --------------------

    def update_odometry(self) -> Position:
        return self.odometry.update()

    def get_position(self) -> Position:
        return self.odometry.get_position()

    def reset_position(self, position: Position):
        self.odometry.reset_position(position)

    def telemetry(self) -> Dict[str, object]:
        """Read-only snapshot for dashboards; nothing in the core consumes it."""
        position = self.get_position()
        snapshot = {
            f"{name}/direction": wrap_degrees(s.continuous_direction)
            for name, s in self.kinematics.steering.items()
        }
        snapshot.update({
            f"{name}/speed": s.speed for name, s in self.kinematics.steering.items()
        })
        snapshot.update({
            "position/x": position.location.x,
            "position/y": position.location.y,
            "position/heading": position.heading,
        })
        return snapshot
