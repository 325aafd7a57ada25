"""
Per-tick drive controller.

DriveController owns no loop: the host calls tick() once per fixed control
step. Each tick runs exactly one decision path (human axes or probe fan),
hands the resulting command to the actuator and returns it.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple

from .config import ConfigurationError, ControllerConfig, DriveMode
from .drive_policy import DriveCommand, autonomous_command, human_command
from .geometry import Pose
from .probe_field import ProbeField, ProbeResult
from .scene import ProbeHit


class WorldQuery(Protocol):
    def pose(self) -> Pose: ...

    def cast_probe(self, origin, direction, max_length: float) -> Optional[ProbeHit]: ...


class HumanInput(Protocol):
    def axes(self) -> Tuple[float, float]: ...


class Actuator(Protocol):
    def set_torque(self, left: float, right: float) -> None: ...


@dataclass(frozen=True)
class TickInputs:
    """Human axes supplied directly by the host for one tick."""
    vertical: float = 0.0
    horizontal: float = 0.0


def _clamp_axis(value) -> float:
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(-1.0, min(1.0, value))


class DriveController:
    def __init__(self,
                 config: ControllerConfig,
                 world: Optional[WorldQuery] = None,
                 human_input: Optional[HumanInput] = None,
                 actuator: Optional[Actuator] = None,
                 is_ground: Optional[Callable[[object], bool]] = None,
                 logger=None):
        self.config = config
        self.world = world
        self.human_input = human_input
        self.actuator = actuator
        self.logger = logger or logging.getLogger(__name__)

        self.probe_field = None
        self.is_ground = None
        if config.mode is DriveMode.AUTONOMOUS:
            if world is None:
                raise ConfigurationError('autonomous mode needs a world query backend')
            if is_ground is None:
                is_ground = getattr(world, 'is_ground', None)
            if not callable(is_ground):
                raise ConfigurationError('autonomous mode needs an is_ground predicate')
            self.is_ground = is_ground
            self.probe_field = ProbeField(world, config.probe)

        # Diagnostics only; never read back by the policy.
        self.last_dt = None
        self.last_probe: Optional[ProbeResult] = None

    @property
    def mode(self) -> DriveMode:
        return self.config.mode

    def tick(self, dt: float, inputs: Optional[TickInputs] = None) -> DriveCommand:
        if not (dt > 0 and math.isfinite(dt)):
            raise ValueError(f"dt must be finite and > 0, got {dt!r}")
        self.last_dt = dt

        if self.config.mode is DriveMode.HUMAN:
            command = self._human_step(inputs)
        else:
            command = self._autonomous_step()

        if self.actuator is not None:
            self.actuator.set_torque(command.left_torque, command.right_torque)
        return command

    def _human_step(self, inputs: Optional[TickInputs]) -> DriveCommand:
        if inputs is not None:
            vertical, horizontal = inputs.vertical, inputs.horizontal
        elif self.human_input is not None:
            vertical, horizontal = self.human_input.axes()
        else:
            raise RuntimeError('human mode tick without inputs or a human input source')
        return human_command(
            _clamp_axis(vertical),
            _clamp_axis(horizontal),
            self.config.speeds.wheel_speed_user,
        )

    def _autonomous_step(self) -> DriveCommand:
        pose = self.world.pose()
        probe = self.probe_field.scan(pose, self.is_ground)
        self.last_probe = probe
        return autonomous_command(
            probe.nearest_left,
            probe.nearest_right,
            self.config.speeds.wheel_speed_auto,
            self.config.probe.length,
            logger=self.logger,
        )
