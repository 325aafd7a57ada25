"""
Static controller configuration.

Everything here is built once at start-up and never mutated; invalid values
raise ConfigurationError immediately so a bad launch file fails before the
first control tick.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral, Real


# =============================================================================
# DEFAULTS
# =============================================================================
DEFAULT_PROBE_COUNT = 13
DEFAULT_PROBE_LENGTH = 1.0
DEFAULT_PROBE_REACH = 4.0
DEFAULT_PROBE_LIFT = 0.05   # keeps probes off the ground plane
DEFAULT_WHEEL_SPEED = 10.0
DEFAULT_CONTROL_RATE = 50.0  # Hz, matches a 0.02 s physics step


class ConfigurationError(ValueError):
    """Raised when the controller is constructed with unusable settings."""


def _require_positive(name, value):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be finite and > 0, got {value!r}")


class DriveMode(Enum):
    HUMAN = 'human'
    AUTONOMOUS = 'autonomous'

    @classmethod
    def parse(cls, value) -> 'DriveMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ', '.join(m.value for m in cls)
            raise ConfigurationError(f"Unknown drive mode '{value}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class ProbeSpec:
    """Shape of the probe fan: count, forward length, lateral reach, lift."""
    count: int = DEFAULT_PROBE_COUNT
    length: float = DEFAULT_PROBE_LENGTH
    reach: float = DEFAULT_PROBE_REACH
    lift: float = DEFAULT_PROBE_LIFT

    def __post_init__(self):
        if isinstance(self.count, bool) or not isinstance(self.count, Integral) or self.count < 1:
            raise ConfigurationError(f"probe count must be an integer >= 1, got {self.count!r}")
        _require_positive('probe length', self.length)
        _require_positive('probe reach', self.reach)
        if isinstance(self.lift, bool) or not isinstance(self.lift, Real) \
                or not math.isfinite(self.lift) or self.lift < 0:
            raise ConfigurationError(f"probe lift must be finite and >= 0, got {self.lift!r}")


@dataclass(frozen=True)
class SpeedConfig:
    wheel_speed_user: float = DEFAULT_WHEEL_SPEED
    wheel_speed_auto: float = DEFAULT_WHEEL_SPEED

    def __post_init__(self):
        _require_positive('wheel_speed_user', self.wheel_speed_user)
        _require_positive('wheel_speed_auto', self.wheel_speed_auto)


@dataclass(frozen=True)
class ControllerConfig:
    mode: DriveMode = DriveMode.AUTONOMOUS
    probe: ProbeSpec = field(default_factory=ProbeSpec)
    speeds: SpeedConfig = field(default_factory=SpeedConfig)
    control_rate: float = DEFAULT_CONTROL_RATE

    def __post_init__(self):
        # frozen, so normalise through object.__setattr__
        object.__setattr__(self, 'mode', DriveMode.parse(self.mode))
        if not isinstance(self.probe, ProbeSpec):
            raise ConfigurationError('probe must be a ProbeSpec')
        if not isinstance(self.speeds, SpeedConfig):
            raise ConfigurationError('speeds must be a SpeedConfig')
        _require_positive('control_rate', self.control_rate)

    @property
    def period(self) -> float:
        """Fixed control step in seconds."""
        return 1.0 / self.control_rate
