#!/usr/bin/env python3
"""
Launch the drive controller (autonomous or human mode) and the follow camera.

Human mode needs a Joy source; run the keyboard teleop in its own terminal:
    ros2 run probe_drive keyboard_teleop
"""

import os

from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    params_file = os.path.join(
        get_package_share_directory('probe_drive'),
        'config',
        'drive_controller.yaml',
    )

    mode = LaunchConfiguration('mode')
    use_sim_time = LaunchConfiguration('use_sim_time')

    return LaunchDescription([
        DeclareLaunchArgument('mode', default_value='autonomous'),
        DeclareLaunchArgument('use_sim_time', default_value='true'),
        Node(
            package='probe_drive',
            executable='drive_controller',
            name='drive_controller',
            output='screen',
            parameters=[params_file, {
                'mode': mode,
                'use_sim_time': use_sim_time,
            }],
        ),
        Node(
            package='probe_drive',
            executable='camera_follow',
            name='camera_follow',
            output='screen',
            parameters=[{
                'use_sim_time': use_sim_time,
                'camera_distance': 2.0,     # pull-back distance from the vehicle (m)
                'update_rate': 60.0,        # faster than the control tick
            }],
        ),
    ])
