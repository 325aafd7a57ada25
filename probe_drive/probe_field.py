"""
Probe fan: casts N finite probes ahead of the vehicle and reduces them to
the nearest obstacle on each side.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterator

import numpy as np

from .config import ProbeSpec
from .geometry import Pose


@dataclass(frozen=True)
class ProbeResult:
    """Nearest qualifying hit per half-fan; inf means nothing within range."""
    nearest_left: float = math.inf
    nearest_right: float = math.inf
    probe_count: int = 0


def fan_offsets(reach: float, count: int) -> Iterator[float]:
    """
    Lateral offsets from -reach/2 to +reach/2 in steps of reach/count.

    The offset is accumulated, so rounding decides whether the last probe at
    +reach/2 is cast: the fan holds count or count + 1 probes.
    """
    step = reach / count
    half = reach / 2.0
    d = -half
    while d <= half:
        yield d
        d += step


class ProbeField:
    """Casts the fan against a world backend exposing cast_probe()."""

    def __init__(self, world, spec: ProbeSpec):
        self.world = world
        self.spec = spec

    def scan(self, pose: Pose, is_ground: Callable[[object], bool]) -> ProbeResult:
        length = self.spec.length
        lift = pose.up * self.spec.lift
        nearest_left = math.inf
        nearest_right = math.inf
        count = 0

        for d in fan_offsets(self.spec.reach, self.spec.count):
            count += 1
            # The offset skews the direction as well as shifting the origin.
            side = pose.right * d
            origin = pose.position + lift + side
            direction = -pose.forward * length + side
            hit = self.world.cast_probe(origin, direction, float(np.linalg.norm(direction)))

            if hit is None:
                continue
            distance, tag = hit
            if is_ground(tag) or distance >= length:
                continue
            if d > 0:
                nearest_left = min(nearest_left, distance)
            elif d < 0:
                nearest_right = min(nearest_right, distance)
            # d == 0 belongs to neither side

        return ProbeResult(nearest_left, nearest_right, count)
