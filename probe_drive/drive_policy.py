"""
Wheel torque policy for both drive modes.

Both functions are pure: same inputs, same DriveCommand. Negative torque on
both wheels drives the vehicle forward.
"""

import logging
from dataclasses import dataclass

# =============================================================================
# POLICY CONSTANTS
# =============================================================================
STOP_DISTANCE = 0.9   # both sides closer than this -> pivot in place
STEER_GAIN = 3.0      # correction gain on the wheel nearest the obstacle

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriveCommand:
    left_torque: float
    right_torque: float

    @classmethod
    def stop(cls) -> 'DriveCommand':
        return cls(0.0, 0.0)


def autonomous_command(nearest_left: float,
                       nearest_right: float,
                       wheel_speed_auto: float,
                       probe_length: float,
                       logger=None) -> DriveCommand:
    """
    Straight ahead, steer away from the closer side, or pivot when boxed in.

    The boxed-in check runs last and overrides whatever steering was chosen.
    """
    # drive straight
    left = -wheel_speed_auto
    right = -wheel_speed_auto

    if nearest_left <= probe_length or nearest_right <= probe_length:
        if nearest_left < nearest_right:
            left -= (probe_length - nearest_left) * wheel_speed_auto * STEER_GAIN
            right = 0.0
        else:
            # ties land here
            right -= (probe_length - nearest_right) * wheel_speed_auto * STEER_GAIN
            left = 0.0

    if nearest_left < STOP_DISTANCE and nearest_right < STOP_DISTANCE:
        (logger or _logger).debug(f"Boxed in - MinLeft: {nearest_left} MinRight: {nearest_right}")
        left = wheel_speed_auto
        right = -wheel_speed_auto

    return DriveCommand(left, right)


def human_command(vertical: float, horizontal: float, wheel_speed_user: float) -> DriveCommand:
    """Tank-style mix: vertical is throttle, positive horizontal turns right."""
    left = -vertical * wheel_speed_user
    right = -vertical * wheel_speed_user

    if horizontal > 0:
        left -= horizontal * wheel_speed_user
    if horizontal < 0:
        right += horizontal * wheel_speed_user

    return DriveCommand(left, right)
