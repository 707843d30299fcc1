import matplotlib

matplotlib.use("Agg")

import pytest

from swerve_drive.hardware import HeadingSensor, WheelActuator
from swerve_drive.simulation import SwerveSimulator


class FakeWheel(WheelActuator):
    """Wheel whose encoder reading is set directly by the test."""

    def __init__(self):
        self.encoder = 0.0
        self.commands = []
        self.stopped = False
        self.measured = None
        self._last = 0.0

    def steer_and_drive(self, direction, speed):
        self.commands.append((direction, speed))
        self.stopped = False

    def encoder_distance(self):
        return self.encoder

    def position_difference(self):
        delta = self.encoder - self._last
        self._last = self.encoder
        return delta

    def stop(self):
        self.stopped = True

    def measured_direction(self):
        return self.measured


class FakeGyro(HeadingSensor):
    def __init__(self, heading=0.0):
        self.heading = heading
        self.resets = []

    def current_heading(self):
        return self.heading

    def reset(self, offset=0.0):
        self.resets.append(offset)
        self.heading = offset


@pytest.fixture
def sim():
    return SwerveSimulator()


@pytest.fixture
def drive(sim):
    return sim.build_drive()


@pytest.fixture
def fake_wheels():
    return {name: FakeWheel() for name in ("front_left", "front_right", "rear_left", "rear_right")}


@pytest.fixture
def fake_gyro():
    return FakeGyro()
