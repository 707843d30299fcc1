"""
Autonomous maneuvers shaped as host command lifecycles.

Each command is a small state machine (NOT_STARTED -> RUNNING -> FINISHED)
driven by an external loop: `initialize` once, `execute` once per cycle while
`is_finished` is false, then `end`. `execute` polls the odometry itself, so
the host must not also update odometry in the same cycle.

Field-relative targets are resolved against the starting position once in
`initialize`; heading drift during the maneuver is not corrected.
"""
import logging
import math
from enum import Enum
from typing import Callable, Optional

from swerve_drive.drive import SwerveDrive
from swerve_drive.errors import SensorDropoutError
from swerve_drive.geometry import Vector, ZERO, wrap_degrees_zero_center
from swerve_drive.kinematics import RobotVelocityCommand
from swerve_drive.manner import RobotMovement, RobotTurn

logger = logging.getLogger(__name__)


class CommandState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class AutonCommand:
    def __init__(self, drive: SwerveDrive):
        self.drive = drive
        self.state = CommandState.NOT_STARTED
        self.aborted = False

    def initialize(self):
        self.drive.stop()
        self.aborted = False
        self._initialize()
        self.state = CommandState.RUNNING
        logger.info("%s initialized", type(self).__name__)

    def execute(self):
        if self.state == CommandState.NOT_STARTED:
            raise RuntimeError(f"{type(self).__name__}.execute called before initialize")
        if self.state == CommandState.FINISHED:
            return
        try:
            self._execute()
        except SensorDropoutError:
            # Never extrapolate from stale data: stop and hand the error to the caller
            logger.warning("%s aborted on sensor dropout", type(self).__name__)
            self.aborted = True
            self.end(interrupted=True)
            raise

    def is_finished(self) -> bool:
        return self.state == CommandState.FINISHED or self._is_complete()

    def end(self, interrupted: bool = False):
        self.drive.stop()
        self.state = CommandState.FINISHED
        logger.info("%s ended%s", type(self).__name__, " (interrupted)" if interrupted else "")

    def _initialize(self):
        pass

    def _execute(self):
        raise NotImplementedError

    def _is_complete(self) -> bool:
        raise NotImplementedError


class AutonDrive(AutonCommand):
    """Strafes along a RobotMovement without turning."""

    def __init__(self, drive: SwerveDrive, movement: RobotMovement):
        super().__init__(drive)
        self.movement = movement
        self.manner = movement.manner
        self._start = None
        self._target = ZERO
        self._remaining = ZERO

    def _initialize(self):
        self._start = self.drive.get_position()
        self._target = self.movement.to_robot_relative(self._start)
        self._remaining = self._target
        logger.debug("drive target (robot frame at start): %s", self._target)

    def remaining(self, position) -> Vector:
        """Remaining movement, expressed in the robot frame held at the start."""
        travelled = self._start.movement_to(position).rotated_by_degrees(-self._start.heading)
        return self._target.subtract(travelled)

    @property
    def remaining_distance(self) -> float:
        return self._remaining.magnitude

    def _execute(self):
        position = self.drive.update_odometry()
        self._remaining = self.remaining(position)
        distance = self._remaining.magnitude
        if self.manner.is_within_margin(distance):
            self.drive.stop()
            return
        speed = self.manner.speed(distance)
        self.drive.drive(RobotVelocityCommand(self._remaining.scale(speed / distance)))

    def _is_complete(self) -> bool:
        return self.state == CommandState.RUNNING and self.manner.is_within_margin(self.remaining_distance)


class AutonTurn(AutonCommand):
    """Turns the body to a RobotTurn's heading in place."""

    def __init__(self, drive: SwerveDrive, turn: RobotTurn):
        super().__init__(drive)
        self.turn = turn
        self.manner = turn.manner
        self.target_heading = 0.0
        self._error = 0.0

    def _initialize(self):
        start = self.drive.get_position()
        self.target_heading = self.turn.to_field_heading(start)
        self._error = wrap_degrees_zero_center(self.target_heading - start.heading)
        logger.debug("turn target heading: %.1f", self.target_heading)

    @property
    def remaining_angle(self) -> float:
        return abs(self._error)

    def _execute(self):
        position = self.drive.update_odometry()
        self._error = wrap_degrees_zero_center(self.target_heading - position.heading)
        if self.manner.is_within_margin(self._error):
            self.drive.stop()
            return
        rotation = math.copysign(self.manner.speed(self._error), self._error)
        self.drive.drive(RobotVelocityCommand(ZERO, rotation))

    def _is_complete(self) -> bool:
        return self.state == CommandState.RUNNING and self.manner.is_within_margin(self._error)


class AutonWheelTurn(AutonCommand):
    """Points every wheel along a direction before driving off."""

    MARGIN_OF_ERROR = 8.0

    def __init__(self, drive: SwerveDrive, direction: float, margin_of_error: float = MARGIN_OF_ERROR):
        super().__init__(drive)
        self.direction = direction
        self.margin_of_error = margin_of_error
        self._aligned = False

    def _initialize(self):
        self._aligned = False

    def _execute(self):
        self._aligned = self.drive.steer_all_within_range(self.direction, self.margin_of_error)

    def _is_complete(self) -> bool:
        return self._aligned


def run_command(command: AutonCommand, tick: Optional[Callable[[], None]] = None,
                max_ticks: int = 1000) -> bool:
    """
    Minimal external driver: initialize, execute once per tick until finished
    or `max_ticks` runs out, then end. `tick` advances the hardware (or the
    simulator) between cycles. Returns whether the command completed.
    """
    command.initialize()
    ticks = 0
    while not command.is_finished() and ticks < max_ticks:
        command.execute()
        if tick is not None:
            tick()
        ticks += 1
    finished = command.is_finished()
    command.end(interrupted=not finished)
    return finished
