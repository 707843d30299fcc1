from swerve_drive.geometry import Vector, wrap_degrees, wrap_degrees_zero_center
from swerve_drive.steering import WheelSteering, WheelTarget
from swerve_drive.kinematics import DriveKinematics, FrameOfReference, RobotVelocityCommand
from swerve_drive.odometry import Odometry, Position
from swerve_drive.manner import MovementManner, TurnManner, RobotMovement, RobotTurn

__all__ = [
    "Vector", "wrap_degrees", "wrap_degrees_zero_center",
    "WheelSteering", "WheelTarget",
    "DriveKinematics", "FrameOfReference", "RobotVelocityCommand",
    "Odometry", "Position",
    "MovementManner", "TurnManner", "RobotMovement", "RobotTurn",
]
