#!/usr/bin/env python3
"""
Keyboard Teleop - human input source for the drive controller.

Publishes sensor_msgs/Joy with two normalised axes:
    axes[axis_vertical]   : throttle, +1 forward, -1 reverse
    axes[axis_horizontal] : turn, +1 right, -1 left

Controls:
    W/↑ : Throttle up
    S/↓ : Throttle down / reverse
    A/← : Turn left (returns to center when released)
    D/→ : Turn right (returns to center when released)
    Q   : Hard left
    E   : Hard right
    Space : All stop (zero both axes)
    R   : Center steering
    H   : Show help
    Ctrl+C : Quit

Throttle persists between keypresses; steering decays back to center.
"""

import select
import sys
import termios
import time
import tty

import rclpy
from rclpy.node import Node
from sensor_msgs.msg import Joy


class KeyboardTeleop(Node):
    def __init__(self):
        super().__init__('keyboard_teleop')

        self.declare_parameter('joy_topic', '/vehicle/joy')
        self.declare_parameter('axis_vertical', 1)
        self.declare_parameter('axis_horizontal', 0)
        self.declare_parameter('publish_rate', 30.0)

        self.axis_vertical = int(self.get_parameter('axis_vertical').value)
        self.axis_horizontal = int(self.get_parameter('axis_horizontal').value)
        rate = float(self.get_parameter('publish_rate').value)

        self.joy_pub = self.create_publisher(Joy, self.get_parameter('joy_topic').value, 10)

        # Throttle (persists, ramps toward target)
        self.vertical = 0.0
        self.target_vertical = 0.0
        self.vertical_step = 0.1
        self.vertical_ramp_rate = 0.05

        # Steering (returns to center)
        self.horizontal = 0.0
        self.horizontal_step = 0.15
        self.horizontal_decay = 0.05
        self.last_turn_key_time = 0.0
        self.turn_key_timeout = 0.15

        self.old_settings = termios.tcgetattr(sys.stdin)

        self.create_timer(1.0 / max(rate, 1e-3), self.update_axes)

        self.get_logger().info(f'Keyboard teleop publishing Joy at {rate:.0f} Hz')
        self.print_instructions()

    def print_instructions(self):
        print("\n" + "=" * 50)
        print("Keyboard Teleop")
        print("=" * 50)
        print("  W/↑ S/↓  : throttle up / down")
        print("  A/← D/→  : turn left / right")
        print("  Q / E    : hard left / hard right")
        print("  R        : center steering")
        print("  SPACE    : all stop")
        print("  H        : help, Ctrl+C : quit")
        print("=" * 50 + "\n")

    def get_key_nonblocking(self):
        tty.setraw(sys.stdin.fileno())
        rlist, _, _ = select.select([sys.stdin], [], [], 0.02)
        key = ''
        if rlist:
            key = sys.stdin.read(1)
            # arrow keys arrive as escape sequences
            if key == '\x1b':
                key += sys.stdin.read(2)
        termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self.old_settings)
        return key

    def update_axes(self):
        now = time.time()

        if abs(self.vertical - self.target_vertical) > 0.01:
            if self.vertical < self.target_vertical:
                self.vertical = min(self.target_vertical, self.vertical + self.vertical_ramp_rate)
            else:
                self.vertical = max(self.target_vertical, self.vertical - self.vertical_ramp_rate)
        else:
            self.vertical = self.target_vertical

        if now - self.last_turn_key_time > self.turn_key_timeout and abs(self.horizontal) > 0.01:
            if self.horizontal > 0:
                self.horizontal = max(0.0, self.horizontal - self.horizontal_decay)
            else:
                self.horizontal = min(0.0, self.horizontal + self.horizontal_decay)

        self.publish_axes(self.vertical, self.horizontal)

        print(f"\rThrottle [{self.make_bar(self.vertical, 10)}] {self.vertical * 100:+4.0f}% | "
              f"Turn [{self.make_bar(self.horizontal, 10)}] {self.horizontal * 100:+4.0f}%   ",
              end='', flush=True)

    def publish_axes(self, vertical, horizontal):
        axes = [0.0] * (max(self.axis_vertical, self.axis_horizontal) + 1)
        axes[self.axis_vertical] = float(vertical)
        axes[self.axis_horizontal] = float(horizontal)
        msg = Joy()
        msg.header.stamp = self.get_clock().now().to_msg()
        msg.axes = axes
        self.joy_pub.publish(msg)

    def make_bar(self, value, width):
        half = width // 2
        filled = int(abs(value) * half)
        if value >= 0:
            return ' ' * half + '|' + '#' * filled + ' ' * (half - filled)
        return ' ' * (half - filled) + '#' * filled + '|' + ' ' * half

    def handle_key(self, key):
        lower = key.lower()
        if lower == 'w' or key == '\x1b[A':
            self.target_vertical = min(1.0, self.target_vertical + self.vertical_step)
        elif lower == 's' or key == '\x1b[B':
            self.target_vertical = max(-1.0, self.target_vertical - self.vertical_step)
        elif key == ' ':
            self.target_vertical = 0.0
            self.vertical = 0.0
            self.horizontal = 0.0
            print("\nALL STOP")
        elif lower == 'a' or key == '\x1b[D':
            self.horizontal = max(-1.0, self.horizontal - self.horizontal_step)
            self.last_turn_key_time = time.time()
        elif lower == 'd' or key == '\x1b[C':
            self.horizontal = min(1.0, self.horizontal + self.horizontal_step)
            self.last_turn_key_time = time.time()
        elif lower == 'q':
            self.horizontal = -1.0
            self.last_turn_key_time = time.time()
        elif lower == 'e':
            self.horizontal = 1.0
            self.last_turn_key_time = time.time()
        elif lower == 'r':
            self.horizontal = 0.0
        elif lower == 'h':
            self.print_instructions()

    def run(self):
        try:
            while rclpy.ok():
                key = self.get_key_nonblocking()
                if key == '\x03':
                    break
                if key:
                    self.handle_key(key)
                rclpy.spin_once(self, timeout_sec=0.01)
        finally:
            self.vertical = 0.0
            self.target_vertical = 0.0
            self.horizontal = 0.0
            if rclpy.ok():
                self.publish_axes(0.0, 0.0)
            termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self.old_settings)
            print("\n\nTeleop stopped. Axes zeroed.")


def main(args=None):
    rclpy.init(args=args)
    node = KeyboardTeleop()
    try:
        node.run()
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == '__main__':
    main()
