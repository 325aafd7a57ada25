"""
Static box scene used as the world-query backend.

Obstacles are axis-aligned boxes; the drivable ground is the plane
z = ground_height. cast_probe() answers "what is the nearest surface along
this finite segment", which is all the probe fan needs from the world.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np

_PARALLEL_EPS = 1e-12

DEFAULT_GROUND_TAG = 'floor'
OBSTACLE_TAG = 'obstacle'


class ProbeHit(NamedTuple):
    """Nearest surface struck by a probe: (distance, tag)."""
    distance: float
    tag: str


@dataclass(frozen=True)
class BoxObstacle:
    min_corner: tuple
    max_corner: tuple
    tag: str = OBSTACLE_TAG

    def __post_init__(self):
        lo = np.minimum(self.min_corner, self.max_corner).astype(float)
        hi = np.maximum(self.min_corner, self.max_corner).astype(float)
        object.__setattr__(self, 'min_corner', tuple(lo.tolist()))
        object.__setattr__(self, 'max_corner', tuple(hi.tolist()))

    def intersect(self, origin, unit) -> Optional[float]:
        """Slab test. Returns entry distance along unit, 0 if origin is inside."""
        t_near = -math.inf
        t_far = math.inf
        for axis in range(3):
            lo = self.min_corner[axis]
            hi = self.max_corner[axis]
            o = origin[axis]
            u = unit[axis]
            if abs(u) < _PARALLEL_EPS:
                if o < lo or o > hi:
                    return None
                continue
            t1 = (lo - o) / u
            t2 = (hi - o) / u
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None
        if t_far < 0.0:
            return None
        return max(t_near, 0.0)


class Scene:
    """Boxes on a ground plane."""

    def __init__(self,
                 boxes: Optional[List[BoxObstacle]] = None,
                 ground_height: float = 0.0,
                 ground_tag: str = DEFAULT_GROUND_TAG):
        self.boxes = list(boxes or [])
        self.ground_height = float(ground_height)
        self.ground_tag = ground_tag

    def is_ground(self, tag) -> bool:
        return tag == self.ground_tag

    def cast_probe(self, origin, direction, max_length) -> Optional[ProbeHit]:
        origin = np.asarray(origin, dtype=float)
        direction = np.asarray(direction, dtype=float)
        length = float(np.linalg.norm(direction))
        if length == 0.0 or max_length <= 0.0:
            return None
        unit = direction / length

        best = None
        if abs(unit[2]) >= _PARALLEL_EPS:
            t = (self.ground_height - origin[2]) / unit[2]
            if 0.0 <= t <= max_length:
                best = ProbeHit(float(t), self.ground_tag)

        for box in self.boxes:
            t = box.intersect(origin, unit)
            if t is None or t > max_length:
                continue
            if best is None or t < best.distance:
                best = ProbeHit(float(t), box.tag)
        return best


def parse_box_spec(spec: str, logger=None) -> List[BoxObstacle]:
    """
    Parse "x0,y0,z0,x1,y1,z1[,tag];..." into boxes.

    Corners may be given in any order. Malformed entries are skipped and
    reported through logger.
    """
    logger = logger or logging.getLogger(__name__)
    boxes = []
    if not spec:
        return boxes
    skipped = 0
    for i, part in enumerate(spec.split(';')):
        part = part.strip()
        if not part:
            continue
        vals = [v.strip() for v in part.split(',')]
        if len(vals) not in (6, 7):
            skipped += 1
            continue
        try:
            coords = [float(v) for v in vals[:6]]
        except ValueError as e:
            logger.warning(f"Invalid box #{i}: '{part}' - {e}")
            skipped += 1
            continue
        if not all(math.isfinite(c) for c in coords):
            skipped += 1
            continue
        tag = vals[6] if len(vals) == 7 and vals[6] else OBSTACLE_TAG
        boxes.append(BoxObstacle(tuple(coords[:3]), tuple(coords[3:]), tag))
    if skipped > 0:
        logger.warning(f"Skipped {skipped} invalid box entries")
    return boxes
