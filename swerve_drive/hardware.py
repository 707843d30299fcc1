"""
Contracts for the host-provided sensors and actuators.

The core never talks to motor controllers or gyros directly: the host wraps
its hardware in these classes and every reading passes through
`read_heading` / `read_encoder` so that dropouts stop the caller instead of
being integrated.
"""
import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

from swerve_drive.errors import SensorDropoutError

logger = logging.getLogger(__name__)


class HeadingSensor(ABC):
    """Field heading source (gyro), degrees counter-clockwise."""

    @abstractmethod
    def current_heading(self) -> float:
        ...

    @abstractmethod
    def reset(self, offset: float = 0.0):
        """Re-zeroes the sensor so that it now reads `offset`."""
        ...


class WheelActuator(ABC):
    """A single steerable, driven wheel module."""

    @abstractmethod
    def steer_and_drive(self, direction: float, speed: float):
        """Steers to a continuous direction [deg] and drives at a signed speed."""
        ...

    @abstractmethod
    def encoder_distance(self) -> float:
        """Cumulative drive distance, negative while driving in reverse."""
        ...

    @abstractmethod
    def position_difference(self) -> float:
        """Drive distance since the previous call."""
        ...

    @abstractmethod
    def stop(self):
        """Cuts drive and steering power immediately."""
        ...

    def measured_direction(self) -> Optional[float]:
        """Steering sensor reading [deg], or None when the module has no sensor to report."""
        return None


def _check_reading(source: str, value) -> float:
    if value is None:
        logger.warning("%s returned no reading", source)
        raise SensorDropoutError(source, value) from None
    try:
        value = float(value)
    except (TypeError, ValueError):
        logger.warning("%s returned a non-numeric reading: %r", source, value)
        raise SensorDropoutError(source, value) from None
    if not math.isfinite(value):
        logger.warning("%s returned a non-finite reading: %r", source, value)
        raise SensorDropoutError(source, value) from None
    return value


def read_heading(sensor: HeadingSensor) -> float:
    return _check_reading("heading sensor", sensor.current_heading())


def read_encoder(wheel: WheelActuator, name: str = "wheel") -> float:
    return _check_reading(f"{name} encoder", wheel.encoder_distance())


def read_direction(wheel: WheelActuator, name: str = "wheel") -> Optional[float]:
    """Measured steering direction, or None for a module without a steering sensor."""
    measured = wheel.measured_direction()
    if measured is None:
        return None
    return _check_reading(f"{name} steering sensor", measured)
