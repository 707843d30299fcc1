import logging
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np

from swerve_drive.drive_constants import ROBOT_BODY_LENGTH, ROBOT_BODY_WIDTH
from swerve_drive.kinematics import DriveKinematics, RobotVelocityCommand
from swerve_drive.odometry import Position


def plot_wheel_targets(kinematics: DriveKinematics, command: Optional[RobotVelocityCommand] = None,
                       title: str = "", ax=None):
    """
    Draws the body outline, each wheel's steering direction (blue) and the
    wheel target vector (green) for a command. Without a command the last
    resolved wheel vectors are shown.
    """
    if command is not None:
        kinematics.compute(command)
    vectors = kinematics.last_wheel_vectors

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))
    ax.set_aspect("equal", "box")
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.set_xlabel("Body X")
    ax.set_ylabel("Body Y")
    if command is not None and not title:
        t = command.translation
        title = f"Command: vx={t.x:.2f}, vy={t.y:.2f}, w={command.rotation:.3f} ({command.frame.value})"
    ax.set_title(title)

    ax.add_patch(plt.Rectangle((-ROBOT_BODY_LENGTH/2, -ROBOT_BODY_WIDTH/2),
                               ROBOT_BODY_LENGTH, ROBOT_BODY_WIDTH,
                               fill=False, lw=1.5))

    arrow_len = 0.25 * ROBOT_BODY_LENGTH
    for name, (x, y) in kinematics.wheel_locations.items():
        ax.plot(x, y, "ko", ms=4)
        ax.text(x + 0.02*ROBOT_BODY_LENGTH, y + 0.02 * ROBOT_BODY_WIDTH, name, fontsize=8)

        # Steering direction of the module
        delta = np.radians(kinematics.steering[name].continuous_direction)
        u = np.array([np.cos(delta), np.sin(delta)])
        ax.arrow(x, y, 0.5*arrow_len*u[0], 0.5*arrow_len*u[1],
                 head_width=0.02*ROBOT_BODY_LENGTH, length_includes_head=True,
                 lw=2, color="C0")

        # Target vector, scaled so max_output fills arrow_len
        v = vectors[name]
        scale = arrow_len / kinematics.config.max_output
        if v.magnitude > 1e-9:
            ax.arrow(x, y, scale*v.x, scale*v.y,
                     head_width=0.02*ROBOT_BODY_LENGTH, color="C2",
                     length_includes_head=True, lw=1.5)

    xs = [p[0] for p in kinematics.wheel_locations.values()]
    ys = [p[1] for p in kinematics.wheel_locations.values()]
    pad = 0.6*max(ROBOT_BODY_LENGTH, ROBOT_BODY_WIDTH)
    ax.set_xlim(min(xs)-pad, max(xs)+pad)
    ax.set_ylim(min(ys)-pad, max(ys)+pad)
    return ax


def plot_trajectory(positions: Iterable[Position], title: str = "Odometry", ax=None, heading_every: int = 10):
    """Plots an odometry trace with a heading tick every `heading_every` samples."""
    positions = list(positions)
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))
    ax.set_aspect("equal", "datalim")
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.set_xlabel("Field X [in]")
    ax.set_ylabel("Field Y [in]")
    ax.set_title(title)
    if not positions:
        return ax

    xs = np.array([p.location.x for p in positions])
    ys = np.array([p.location.y for p in positions])
    ax.plot(xs, ys, "-", color="C0", lw=1.5, label="path")
    ax.plot(xs[0], ys[0], "go", label="start")
    ax.plot(xs[-1], ys[-1], "ro", label="end")
    for p in positions[::max(1, heading_every)]:
        h = np.radians(p.heading)
        ax.arrow(p.location.x, p.location.y, 3*np.cos(h), 3*np.sin(h),
                 head_width=0.8, color="0.4", length_includes_head=True)
    ax.legend(loc="upper right")
    return ax


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    kin = DriveKinematics()
    plot_wheel_targets(kin, RobotVelocityCommand.from_components(0.6, 0.2, 0.4))
    plt.show()
