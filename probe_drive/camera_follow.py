"""
Orbit follow camera.

Presentation only: it sees the vehicle position and the pointer, nothing
from the controller. Pointer coordinates are viewport-normalised (0..1);
a full sweep across the viewport turns the camera by 180 degrees.
"""

from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation

DEGREES_PER_VIEWPORT = 180.0


@dataclass(frozen=True)
class CameraPose:
    position: np.ndarray
    orientation: Rotation

    @property
    def quaternion(self):
        """(x, y, z, w)"""
        return self.orientation.as_quat()


class OrbitCamera:
    def __init__(self, distance: float = 2.0, orientation: Rotation = None):
        self.distance = float(distance)
        self.orientation = orientation if orientation is not None else Rotation.identity()
        self._previous_pointer = np.zeros(2)

    def update(self, target_position, pointer) -> CameraPose:
        pointer = np.asarray(pointer, dtype=float)[:2]
        delta = self._previous_pointer - pointer

        yaw = delta[0] * DEGREES_PER_VIEWPORT
        pitch = delta[1] * DEGREES_PER_VIEWPORT

        # pitch about the camera's own lateral axis, yaw about world up
        self.orientation = self.orientation * Rotation.from_euler('y', pitch, degrees=True)
        self.orientation = Rotation.from_euler('z', yaw, degrees=True) * self.orientation

        forward = self.orientation.apply([1.0, 0.0, 0.0])
        position = np.asarray(target_position, dtype=float).reshape(3) - forward * self.distance

        self._previous_pointer = pointer
        return CameraPose(position, self.orientation)
