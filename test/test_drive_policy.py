import math

import pytest

from probe_drive.drive_policy import (
    STOP_DISTANCE,
    DriveCommand,
    autonomous_command,
    human_command,
)

INF = math.inf
WS = 10.0
L = 1.0


def test_no_obstacle_drives_straight():
    assert autonomous_command(INF, INF, WS, L) == DriveCommand(-WS, -WS)


def test_obstacles_beyond_probe_length_drive_straight():
    assert autonomous_command(1.5, 2.0, WS, L) == DriveCommand(-WS, -WS)


def test_left_closer_speeds_up_left_wheel_and_zeroes_right():
    cmd = autonomous_command(0.95, INF, WS, L)
    assert cmd.left_torque == pytest.approx(-WS - 0.05 * WS * 3)
    assert cmd.right_torque == 0.0


def test_right_closer_speeds_up_right_wheel_and_zeroes_left():
    cmd = autonomous_command(INF, 0.95, WS, L)
    assert cmd.right_torque == pytest.approx(-WS - 0.05 * WS * 3)
    assert cmd.left_torque == 0.0


def test_obstacle_exactly_at_probe_length_enters_steer_away():
    cmd = autonomous_command(L, INF, WS, L)
    assert cmd == DriveCommand(-WS, 0.0)


def test_tie_resolves_to_right_branch():
    length = 2.0
    half = 0.5 * length  # below length, not below the stop distance
    cmd = autonomous_command(half, half, WS, length)
    assert cmd.left_torque == 0.0
    assert cmd.right_torque == pytest.approx(-WS - 0.5 * length * WS * 3)


@pytest.mark.parametrize('left, right', [(0.5, 0.8), (0.8, 0.5), (0.1, 0.1), (0.0, 0.89)])
def test_boxed_in_pivots_regardless_of_nearer_side(left, right):
    assert autonomous_command(left, right, WS, L) == DriveCommand(WS, -WS)


def test_boxed_in_threshold_is_strict():
    cmd = autonomous_command(STOP_DISTANCE, 0.1, WS, L)
    assert cmd.left_torque == 0.0
    assert cmd.right_torque == pytest.approx(-WS - 0.9 * WS * 3)


def test_boxed_in_needs_both_sides():
    cmd = autonomous_command(0.2, INF, WS, L)
    assert cmd.right_torque == 0.0
    assert cmd.left_torque < -WS


def test_stop_distance_does_not_scale_with_wheel_speed():
    assert autonomous_command(0.5, 0.5, 3.0, L) == DriveCommand(3.0, -3.0)
    assert autonomous_command(0.5, 0.5, 3.0, 10.0) == DriveCommand(3.0, -3.0)


def test_policy_is_pure():
    first = autonomous_command(0.7, 0.95, WS, L)
    second = autonomous_command(0.7, 0.95, WS, L)
    assert first == second


def test_boxed_in_logs_distances():
    class Recorder:
        def __init__(self):
            self.messages = []

        def debug(self, msg):
            self.messages.append(msg)

    log = Recorder()
    autonomous_command(0.5, 0.6, WS, L, logger=log)
    assert len(log.messages) == 1
    assert '0.5' in log.messages[0] and '0.6' in log.messages[0]


def test_human_full_throttle():
    assert human_command(1.0, 0.0, WS) == DriveCommand(-WS, -WS)


def test_human_turn_right_in_place():
    cmd = human_command(0.0, 0.5, WS)
    assert cmd.left_torque == pytest.approx(-0.5 * WS)
    assert cmd.right_torque == 0.0


def test_human_turn_left_in_place():
    cmd = human_command(0.0, -0.5, WS)
    assert cmd.left_torque == 0.0
    assert cmd.right_torque == pytest.approx(-0.5 * WS)


def test_human_throttle_and_turn_mix():
    cmd = human_command(1.0, 1.0, WS)
    assert cmd == DriveCommand(-2 * WS, -WS)


def test_human_reverse():
    assert human_command(-1.0, 0.0, WS) == DriveCommand(WS, WS)


def test_stop_command():
    assert DriveCommand.stop() == DriveCommand(0.0, 0.0)
