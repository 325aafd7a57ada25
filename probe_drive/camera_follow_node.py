#!/usr/bin/env python3
"""
Camera follow node: orbit camera around the vehicle, driven by a pointer.

Runs on its own timer, independent of the drive controller's tick.
"""

import rclpy
from rclpy.node import Node

from geometry_msgs.msg import Point, PoseStamped

from .camera_follow import OrbitCamera


class CameraFollowNode(Node):
    def __init__(self):
        super().__init__('camera_follow')

        self.declare_parameter('camera_distance', 2.0)
        self.declare_parameter('update_rate', 60.0)
        self.declare_parameter('frame_id', 'world')
        self.declare_parameter('pose_topic', '/vehicle/pose')
        self.declare_parameter('pointer_topic', '/vehicle/camera/pointer')
        self.declare_parameter('camera_topic', '/vehicle/camera/pose')

        self.frame_id = str(self.get_parameter('frame_id').value)
        rate = float(self.get_parameter('update_rate').value)

        self.camera = OrbitCamera(distance=float(self.get_parameter('camera_distance').value))
        self.target = None
        self.pointer = (0.0, 0.0)

        self.create_subscription(PoseStamped, self.get_parameter('pose_topic').value, self.pose_callback, 10)
        self.create_subscription(Point, self.get_parameter('pointer_topic').value, self.pointer_callback, 10)
        self.camera_pub = self.create_publisher(PoseStamped, self.get_parameter('camera_topic').value, 10)

        self.create_timer(1.0 / max(rate, 1e-3), self.update_camera)
        self.get_logger().info(f'Camera follow at {rate:.0f} Hz, distance {self.camera.distance:.1f}m')

    def pose_callback(self, msg: PoseStamped):
        p = msg.pose.position
        self.target = (p.x, p.y, p.z)

    def pointer_callback(self, msg: Point):
        self.pointer = (msg.x, msg.y)

    def update_camera(self):
        if self.target is None:
            return
        cam = self.camera.update(self.target, self.pointer)
        qx, qy, qz, qw = (float(v) for v in cam.quaternion)

        msg = PoseStamped()
        msg.header.stamp = self.get_clock().now().to_msg()
        msg.header.frame_id = self.frame_id
        msg.pose.position.x = float(cam.position[0])
        msg.pose.position.y = float(cam.position[1])
        msg.pose.position.z = float(cam.position[2])
        msg.pose.orientation.x = qx
        msg.pose.orientation.y = qy
        msg.pose.orientation.z = qz
        msg.pose.orientation.w = qw
        self.camera_pub.publish(msg)


def main(args=None):
    rclpy.init(args=args)
    node = CameraFollowNode()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == '__main__':
    main()
