"""
Keyboard teleoperation of the simulated swerve drive.

The simulator plays the role of the robot hardware: every frame the keys are
turned into joystick-style axes, the drive resolves them into wheel targets,
the simulator advances, and odometry is polled once. The robot is drawn at its
odometry position; the true simulated pose is shown as a faint outline.
"""
import argparse
import logging
from typing import Dict, Tuple

import numpy as np
import pygame as pg

from swerve_drive.drive_constants import ROBOT_BODY_LENGTH, ROBOT_BODY_WIDTH, DriveConfig
from swerve_drive.input_handler import InputHandler, square_curve
from swerve_drive.kinematics import FrameOfReference
from swerve_drive.odometry import Position
from swerve_drive.simulation import SwerveSimulator

logger = logging.getLogger(__name__)

SCREEN_WIDTH, SCREEN_HEIGHT = 1000, 1000
PIXELS_PER_INCH = 4.0
WHEEL_LENGTH = 4.0  # [in]
WHEEL_WIDTH = 2.0   # [in]
TEXT_COLOR = (0, 0, 0)
BODY_COLOR = (30, 30, 30)
FRONT_MARKER = (255, 60, 60)
WHEEL_FORWARD_COLOR = (50, 120, 255)
WHEEL_REVERSE_COLOR = (255, 140, 40)
GHOST_COLOR = (190, 190, 190)


def compute_inputs_from_keys(keys) -> Tuple[float, float, float]:
    """Joystick-style axes from held keys. W/S forward/back, A/D left/right, Q/E rotate CCW/CW."""
    strafe_x = float(keys[pg.K_w]) - float(keys[pg.K_s])
    strafe_y = float(keys[pg.K_a]) - float(keys[pg.K_d])
    steering = float(keys[pg.K_q]) - float(keys[pg.K_e])
    return strafe_x, strafe_y, steering


def field_to_screen(x: float, y: float) -> Tuple[int, int]:
    return (int(SCREEN_WIDTH // 2 + x * PIXELS_PER_INCH),
            int(SCREEN_HEIGHT // 2 - y * PIXELS_PER_INCH))


def draw_robot(screen, position: Position, locations: Dict[str, Tuple[float, float]],
               wheel_directions: Dict[str, float], wheel_speeds: Dict[str, float], ghost: bool = False):
    """
    Draw top-down robot with body and four wheels using body-frame geometry.

    - Build an off-screen surface in body frame (x forward, y left)
    - Draw each wheel rotated by its steering direction
    - Rotate by heading (CCW positive) and blit centered at position
    """
    scale = PIXELS_PER_INCH
    half_len = (ROBOT_BODY_LENGTH / 2 + WHEEL_LENGTH) * scale + 10
    half_wid = (ROBOT_BODY_WIDTH / 2 + WHEEL_LENGTH) * scale + 10
    surf_w, surf_h = int(2 * half_len), int(2 * half_wid)
    surf = pg.Surface((surf_w, surf_h), pg.SRCALPHA)
    cx, cy = surf_w // 2, surf_h // 2

    def to_surf(pt):
        bx, by = pt
        return int(cx + bx * scale), int(cy - by * scale)  # invert Y for screen

    body_rect = pg.Rect(0, 0, int(ROBOT_BODY_LENGTH * scale), int(ROBOT_BODY_WIDTH * scale))
    body_rect.center = (cx, cy)
    if ghost:
        pg.draw.rect(surf, GHOST_COLOR, body_rect, width=2, border_radius=8)
    else:
        pg.draw.rect(surf, BODY_COLOR, body_rect, width=3, border_radius=8)
        tip_b = (ROBOT_BODY_LENGTH / 2 - 1, 0)
        base1_b = (ROBOT_BODY_LENGTH / 2 - 5, 3)
        base2_b = (ROBOT_BODY_LENGTH / 2 - 5, -3)
        pg.draw.polygon(surf, FRONT_MARKER, [to_surf(tip_b), to_surf(base1_b), to_surf(base2_b)])

        for name, loc in locations.items():
            color = WHEEL_REVERSE_COLOR if wheel_speeds.get(name, 0.0) < 0 else WHEEL_FORWARD_COLOR
            base_wheel = pg.Surface((int(WHEEL_LENGTH * scale), int(WHEEL_WIDTH * scale)), pg.SRCALPHA)
            pg.draw.rect(base_wheel, color, base_wheel.get_rect(), border_radius=4)
            wheel_img = pg.transform.rotate(base_wheel, wheel_directions.get(name, 0.0))
            surf.blit(wheel_img, wheel_img.get_rect(center=to_surf(loc)).topleft)

    rotated = pg.transform.rotate(surf, position.heading)
    rect = rotated.get_rect(center=field_to_screen(position.location.x, position.location.y))
    screen.blit(rotated, rect.topleft)
    return rect


def print_controls():
    print("Controls:")
    print(" - W/S: Forward/Back")
    print(" - A/D: Strafe Left/Right")
    print(" - Q/E: Rotate CCW/CW")
    print(" - F: Toggle field-relative driving")
    print(" - R: Reset odometry to the origin")
    print(" - ESC: Quit")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Swerve drive keyboard teleop")
    parser.add_argument("--deadband", type=float, default=0.05)
    parser.add_argument("--steer-rate", type=float, default=None,
                        help="simulated steering slew rate [deg/s]; instant if omitted")
    parser.add_argument("--fps", type=int, default=50)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    sim = SwerveSimulator(DriveConfig(deadband=args.deadband), steer_rate=args.steer_rate)
    drive = sim.build_drive()
    handler = InputHandler(args.deadband, square_curve)
    frame = FrameOfReference.ROBOT

    pg.init()
    screen = pg.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    clock = pg.time.Clock()
    font = pg.font.Font(None, 26)
    print_controls()
    running = True
    while running:
        for event in pg.event.get():
            if event.type == pg.QUIT:
                running = False
            elif event.type == pg.KEYDOWN:
                if event.key == pg.K_ESCAPE:
                    running = False
                elif event.key == pg.K_f:
                    frame = (FrameOfReference.FIELD if frame == FrameOfReference.ROBOT
                             else FrameOfReference.ROBOT)
                    logger.info("driving %s-relative", frame.value)
                elif event.key == pg.K_r:
                    drive.reset_position(Position())

        dt = max(clock.tick(args.fps) / 1000.0, 1e-6)
        strafe_x, strafe_y, steering = compute_inputs_from_keys(pg.key.get_pressed())
        drive.user_input_drive(strafe_x, strafe_y, steering, handler, frame)
        sim.step(dt)
        position = drive.update_odometry()

        telemetry = drive.telemetry()
        directions = {n: telemetry[f"{n}/direction"] for n in sim.locations}
        speeds = {n: telemetry[f"{n}/speed"] for n in sim.locations}

        screen.fill((255, 255, 255))
        draw_robot(screen, sim.pose, sim.locations, directions, speeds, ghost=True)
        rect = draw_robot(screen, position, sim.locations, directions, speeds)
        lines = [
            f"frame: {frame.value}",
            f"odometry: x={position.location.x:+.1f} in  y={position.location.y:+.1f} in  "
            f"heading={position.heading:.1f}°",
            "  ".join(f"{n}: {directions[n]:5.1f}° {speeds[n]:+.2f}" for n in sim.locations),
        ]
        for i, line in enumerate(lines):
            screen.blit(font.render(line, True, TEXT_COLOR), (12, 12 + 24 * i))
        error = np.hypot(sim.pose.location.x - position.location.x,
                         sim.pose.location.y - position.location.y)
        screen.blit(font.render(f"odometry error: {error:.2f} in", True, TEXT_COLOR),
                    (rect.left, rect.bottom + 4))
        pg.display.flip()

    pg.quit()


if __name__ == "__main__":
    main()
