"""
Vehicle pose snapshot used by the probe fan.

The body frame follows the ROS convention (+x forward, +y left, +z up).
The vehicle model drives nose-first along -forward when both wheels get
negative torque, so a probe offset along +right lands on the vehicle's
left-hand side while it travels.
"""

from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation


@dataclass(frozen=True, eq=False)
class Pose:
    """Position plus forward/right/up basis vectors (world frame)."""
    position: np.ndarray
    forward: np.ndarray
    right: np.ndarray
    up: np.ndarray

    @classmethod
    def from_rotation(cls, position, rotation: Rotation) -> 'Pose':
        basis = rotation.as_matrix()
        return cls(
            position=np.asarray(position, dtype=float).reshape(3),
            forward=basis[:, 0].copy(),
            right=-basis[:, 1],
            up=basis[:, 2].copy(),
        )

    @classmethod
    def from_position_quaternion(cls, position, quaternion) -> 'Pose':
        """quaternion is (x, y, z, w), scalar last like geometry_msgs."""
        return cls.from_rotation(position, Rotation.from_quat(quaternion))

    @classmethod
    def from_yaw(cls, x: float, y: float, yaw: float, z: float = 0.0) -> 'Pose':
        return cls.from_rotation((x, y, z), Rotation.from_euler('z', yaw))

    @classmethod
    def from_ros_pose(cls, pose) -> 'Pose':
        """Build from a geometry_msgs/Pose."""
        p = pose.position
        q = pose.orientation
        return cls.from_position_quaternion((p.x, p.y, p.z), (q.x, q.y, q.z, q.w))
