#!/usr/bin/env python3
"""
Drive Controller Node - fixed-rate host for DriveController.

Subscriptions:
  - /vehicle/pose                  geometry_msgs/PoseStamped
  - /vehicle/joy                   sensor_msgs/Joy (human mode)

Publications:
  - /vehicle/wheels/left/torque    std_msgs/Float64
  - /vehicle/wheels/right/torque   std_msgs/Float64

The ROS timer is the fixed-step scheduler: every period the node runs one
controller tick and publishes the resulting wheel torques. Obstacles come
from a static box scene given in the 'scene_boxes' parameter.
"""

import sys

import rclpy
from rclpy.logging import get_logger
from rclpy.node import Node

from geometry_msgs.msg import PoseStamped
from sensor_msgs.msg import Joy
from std_msgs.msg import Float64

from .config import ConfigurationError, ControllerConfig, DriveMode, ProbeSpec, SpeedConfig
from .drive_controller import DriveController
from .geometry import Pose
from .scene import Scene, parse_box_spec


class DriveControllerNode(Node):
    def __init__(self):
        super().__init__('drive_controller')

        # ---------------- Parameters ----------------
        self.declare_parameter('mode', 'autonomous')
        self.declare_parameter('control_rate', 50.0)

        # Probe fan
        self.declare_parameter('probe_count', 13)
        self.declare_parameter('probe_length', 1.0)
        self.declare_parameter('probe_reach', 4.0)
        self.declare_parameter('probe_lift', 0.05)

        # Wheel speed multipliers
        self.declare_parameter('wheel_speed_user', 10.0)
        self.declare_parameter('wheel_speed_auto', 10.0)

        # Scene: "x0,y0,z0,x1,y1,z1[,tag];..."
        self.declare_parameter('scene_boxes', '')
        self.declare_parameter('ground_height', 0.0)
        self.declare_parameter('ground_tag', 'floor')

        # Joy axis mapping
        self.declare_parameter('axis_vertical', 1)
        self.declare_parameter('axis_horizontal', 0)
        self.declare_parameter('horizontal_sign', 1.0)

        self.declare_parameter('pose_timeout', 1.0)

        self.declare_parameter('pose_topic', '/vehicle/pose')
        self.declare_parameter('joy_topic', '/vehicle/joy')
        self.declare_parameter('left_torque_topic', '/vehicle/wheels/left/torque')
        self.declare_parameter('right_torque_topic', '/vehicle/wheels/right/torque')

        self.config = ControllerConfig(
            mode=DriveMode.parse(self.get_parameter('mode').value),
            probe=ProbeSpec(
                count=int(self.get_parameter('probe_count').value),
                length=float(self.get_parameter('probe_length').value),
                reach=float(self.get_parameter('probe_reach').value),
                lift=float(self.get_parameter('probe_lift').value),
            ),
            speeds=SpeedConfig(
                wheel_speed_user=float(self.get_parameter('wheel_speed_user').value),
                wheel_speed_auto=float(self.get_parameter('wheel_speed_auto').value),
            ),
            control_rate=float(self.get_parameter('control_rate').value),
        )

        self.axis_vertical = int(self.get_parameter('axis_vertical').value)
        self.axis_horizontal = int(self.get_parameter('axis_horizontal').value)
        self.horizontal_sign = float(self.get_parameter('horizontal_sign').value)
        self.pose_timeout = float(self.get_parameter('pose_timeout').value)

        self.scene = Scene(
            parse_box_spec(str(self.get_parameter('scene_boxes').value), logger=self.get_logger()),
            ground_height=float(self.get_parameter('ground_height').value),
            ground_tag=str(self.get_parameter('ground_tag').value),
        )

        # --- STATE (latest messages only) ---
        self.latest_pose = None
        self.latest_pose_time = None
        self.latest_axes = (0.0, 0.0)

        self.controller = DriveController(
            self.config,
            world=self,
            human_input=self,
            actuator=self,
            is_ground=self.scene.is_ground,
            logger=self.get_logger(),
        )

        # --- SUBSCRIBERS ---
        pose_topic = self.get_parameter('pose_topic').value
        joy_topic = self.get_parameter('joy_topic').value
        if self.config.mode is DriveMode.AUTONOMOUS:
            self.create_subscription(PoseStamped, pose_topic, self.pose_callback, 10)
        else:
            self.create_subscription(Joy, joy_topic, self.joy_callback, 10)

        # --- PUBLISHERS ---
        self.pub_left = self.create_publisher(Float64, self.get_parameter('left_torque_topic').value, 10)
        self.pub_right = self.create_publisher(Float64, self.get_parameter('right_torque_topic').value, 10)

        self.create_timer(self.config.period, self.control_loop)

        probe = self.config.probe
        self.get_logger().info(
            f"Drive controller started: mode={self.config.mode.value} "
            f"rate={self.config.control_rate:.0f}Hz | probes N={probe.count} L={probe.length} "
            f"R={probe.reach} | boxes={len(self.scene.boxes)}"
        )

    # ---------------- Backend interfaces ----------------

    def pose(self) -> Pose:
        return self.latest_pose

    def cast_probe(self, origin, direction, max_length):
        return self.scene.cast_probe(origin, direction, max_length)

    def axes(self):
        return self.latest_axes

    def set_torque(self, left, right):
        if rclpy.ok():
            self.pub_left.publish(Float64(data=float(left)))
            self.pub_right.publish(Float64(data=float(right)))

    def stop_vehicle(self):
        self.set_torque(0.0, 0.0)

    # ---------------- Callbacks ----------------

    def pose_callback(self, msg: PoseStamped):
        self.latest_pose = Pose.from_ros_pose(msg.pose)
        self.latest_pose_time = self.get_clock().now()

    def joy_callback(self, msg: Joy):
        axes = list(msg.axes)
        vertical = axes[self.axis_vertical] if 0 <= self.axis_vertical < len(axes) else 0.0
        horizontal = axes[self.axis_horizontal] if 0 <= self.axis_horizontal < len(axes) else 0.0
        self.latest_axes = (float(vertical), float(horizontal) * self.horizontal_sign)

    def control_loop(self):
        if self.config.mode is DriveMode.AUTONOMOUS:
            if self.latest_pose is None:
                self.get_logger().warn('Waiting for vehicle pose...', throttle_duration_sec=2.0)
                return
            age = (self.get_clock().now() - self.latest_pose_time).nanoseconds / 1e9
            if age > self.pose_timeout:
                self.get_logger().error(
                    f"Pose is {age:.2f}s old (timeout {self.pose_timeout:.2f}s), holding wheels",
                    throttle_duration_sec=1.0,
                )
                self.stop_vehicle()
                return

        command = self.controller.tick(self.config.period)

        probe = self.controller.last_probe
        if probe is not None:
            self.get_logger().debug(
                f"L:{probe.nearest_left:.2f}m R:{probe.nearest_right:.2f}m ({probe.probe_count} probes) | "
                f"torque L:{command.left_torque:+.1f} R:{command.right_torque:+.1f}",
                throttle_duration_sec=1.0,
            )


def main(args=None):
    rclpy.init(args=args)
    try:
        node = DriveControllerNode()
    except ConfigurationError as e:
        get_logger('drive_controller').fatal(f"Invalid configuration: {e}")
        rclpy.shutdown()
        return 1

    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.stop_vehicle()
        node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()
    return 0


if __name__ == '__main__':
    sys.exit(main())
