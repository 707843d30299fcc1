import pytest

from swerve_drive.errors import ConfigurationError, SensorDropoutError
from swerve_drive.geometry import Vector
from swerve_drive.kinematics import DriveKinematics, RobotVelocityCommand
from swerve_drive.odometry import Odometry, Position
from swerve_drive.simulation import SwerveSimulator


@pytest.fixture
def kinematics():
    return DriveKinematics()


@pytest.fixture
def odometry(kinematics, fake_wheels, fake_gyro):
    return Odometry(kinematics.steering, fake_wheels, fake_gyro)


def advance_encoders(wheels, distance):
    for wheel in wheels.values():
        wheel.encoder += distance


def test_position_heading_is_wrapped():
    assert Position(Vector(), -90).heading == pytest.approx(270)
    assert Position(Vector(), 720).heading == 0
    assert Position(Vector(), 270).heading_zero_centered == pytest.approx(-90)


def test_position_helpers():
    p = Position(Vector(1, 2), 30)
    q = p.add_movement(Vector(3, 4))
    assert q.location == Vector(4, 6)
    assert q.heading == 30
    assert p.movement_to(q) == Vector(3, 4)
    assert p.distance_from(q) == pytest.approx(5)
    assert p.with_heading(400).heading == pytest.approx(40)


def test_forward_tick_moves_along_heading(kinematics, odometry, fake_wheels):
    kinematics.compute(RobotVelocityCommand(Vector(0.5, 0)))
    advance_encoders(fake_wheels, 2.0)
    position = odometry.update()
    assert position.location.x == pytest.approx(2.0)
    assert position.location.y == pytest.approx(0, abs=1e-12)
    assert position.heading == 0


def test_forward_tick_at_a_heading(kinematics, fake_wheels, fake_gyro):
    odometry = Odometry(kinematics.steering, fake_wheels, fake_gyro,
                        initial_position=Position(Vector(1, 1), 90))
    kinematics.compute(RobotVelocityCommand(Vector(0.5, 0)))
    advance_encoders(fake_wheels, 2.0)
    position = odometry.update()
    assert position.location.x == pytest.approx(1, abs=1e-9)
    assert position.location.y == pytest.approx(3)
    assert position.heading == pytest.approx(90)


def test_reverse_drive_counts_backwards(kinematics, odometry, fake_wheels):
    kinematics.compute(RobotVelocityCommand(Vector(-0.5, 0)))
    advance_encoders(fake_wheels, -2.0)
    position = odometry.update()
    assert position.location.x == pytest.approx(-2.0)


def test_movement_uses_heading_from_start_of_tick(kinematics, odometry, fake_wheels, fake_gyro):
    kinematics.compute(RobotVelocityCommand(Vector(0.5, 0)))
    advance_encoders(fake_wheels, 2.0)
    fake_gyro.heading = 90
    position = odometry.update()
    assert position.location.x == pytest.approx(2.0)
    assert position.location.y == pytest.approx(0, abs=1e-12)
    assert position.heading == 90


def test_wheels_are_averaged(kinematics, odometry, fake_wheels):
    kinematics.compute(RobotVelocityCommand(Vector(0.5, 0)))
    fake_wheels["front_left"].encoder += 4.0
    position = odometry.update()
    assert position.location.x == pytest.approx(1.0)


def test_no_new_data_adds_no_displacement(kinematics, odometry, fake_wheels):
    kinematics.compute(RobotVelocityCommand(Vector(0.5, 0)))
    advance_encoders(fake_wheels, 2.0)
    first = odometry.update()
    second = odometry.update()
    assert second.location == first.location


def test_reset_then_get_position_is_exact(odometry, fake_wheels, fake_gyro):
    advance_encoders(fake_wheels, 7.5)
    target = Position(Vector(3.25, -4.5), 45)
    odometry.reset_position(target)
    assert odometry.get_position() == target
    assert fake_gyro.resets[-1] == 45
    # Encoder references were re-zeroed at the reset
    assert odometry.update().location == target.location


def test_get_position_does_not_poll(odometry, fake_wheels):
    advance_encoders(fake_wheels, 2.0)
    assert odometry.get_position().location == Vector()


def test_heading_dropout_raises_and_keeps_position(kinematics, odometry, fake_wheels, fake_gyro):
    kinematics.compute(RobotVelocityCommand(Vector(0.5, 0)))
    advance_encoders(fake_wheels, 2.0)
    fake_gyro.heading = float("nan")
    with pytest.raises(SensorDropoutError):
        odometry.update()
    assert odometry.get_position() == Position()
    # The missed movement is picked up once the sensor recovers
    fake_gyro.heading = 0.0
    assert odometry.update().location.x == pytest.approx(2.0)


@pytest.mark.parametrize("reading", [None, float("inf"), "garbage"])
def test_encoder_dropout_raises(odometry, fake_wheels, reading):
    fake_wheels["rear_left"].encoder = reading
    with pytest.raises(SensorDropoutError):
        odometry.update()
    assert odometry.get_position() == Position()


def test_requires_wheels(kinematics, fake_gyro):
    with pytest.raises(ConfigurationError):
        Odometry(kinematics.steering, {}, fake_gyro)


def test_requires_steering_for_every_wheel(fake_wheels, fake_gyro):
    with pytest.raises(ConfigurationError):
        Odometry({}, fake_wheels, fake_gyro)


def test_tracks_simulated_drive():
    sim = SwerveSimulator(initial_position=Position(Vector(1, 2), 90))
    drive = sim.build_drive()
    drive.drive(RobotVelocityCommand(Vector(0.5, 0)))
    sim.step(0.1)
    position = drive.update_odometry()
    assert position.location.x == pytest.approx(1, abs=1e-6)
    assert position.location.y == pytest.approx(5)
    assert position.heading == pytest.approx(90)
    assert sim.pose.location.y == pytest.approx(5)


def test_in_place_rotation_does_not_translate():
    sim = SwerveSimulator()
    drive = sim.build_drive()
    for _ in range(10):
        drive.drive(RobotVelocityCommand(Vector(), 0.5))
        sim.step(0.02)
        position = drive.update_odometry()
    assert position.location.magnitude == pytest.approx(0, abs=1e-6)
    assert position.heading > 0
    assert position.heading == pytest.approx(sim.pose.heading)


def test_measured_steering_sets_the_bearing(kinematics, odometry, fake_wheels):
    kinematics.compute(RobotVelocityCommand(Vector(0.5, 0)))
    for wheel in fake_wheels.values():
        wheel.measured = 30.0
    advance_encoders(fake_wheels, 2.0)
    expected = Vector.from_polar_degrees(30, 2.0)
    position = odometry.update()
    assert position.location.x == pytest.approx(expected.x)
    assert position.location.y == pytest.approx(expected.y)


def test_steering_sensor_dropout_raises(kinematics, odometry, fake_wheels):
    fake_wheels["front_right"].measured = float("nan")
    advance_encoders(fake_wheels, 2.0)
    with pytest.raises(SensorDropoutError):
        odometry.update()
    assert odometry.get_position() == Position()


def test_distance_driven_while_slewing_follows_the_wheel():
    sim = SwerveSimulator(steer_rate=90.0)
    drive = sim.build_drive()
    drive.drive(RobotVelocityCommand(Vector(0, 0.5)))
    sim.step(0.02)
    position = drive.update_odometry()
    # The wheels have only turned a few degrees toward +y
    assert position.location.x > 0.5
    assert position.location.x == pytest.approx(sim.pose.location.x)
    assert position.location.y == pytest.approx(sim.pose.location.y)
