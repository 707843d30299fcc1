class SwerveError(Exception):
    """Base class for every error raised by the swerve drive core."""


class ConfigurationError(SwerveError, ValueError):
    """Invalid construction argument (negative margin, no wheels, ...)."""


class SensorDropoutError(SwerveError, RuntimeError):
    """A heading or encoder reading was missing or not a finite number."""

    def __init__(self, source: str, value):
        super().__init__(f"{source} returned an unusable reading: {value!r}")
        self.source = source
        self.value = value
