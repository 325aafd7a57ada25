import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from probe_drive.config import ProbeSpec
from probe_drive.geometry import Pose
from probe_drive.probe_field import ProbeField, ProbeResult, fan_offsets
from probe_drive.scene import BoxObstacle, Scene

# N = R gives an exact step of 1.0: offsets -2, -1, 0, 1, 2
SPEC = ProbeSpec(count=4, length=1.0, reach=4.0, lift=0.05)

# Struck by the d = +1 probe at 0.4 * sqrt(2) from its origin
LEFT_BOX = BoxObstacle((-0.5, -1.7, 0.0), (-0.4, -1.3, 1.0))
RIGHT_BOX = BoxObstacle((-0.5, 1.3, 0.0), (-0.4, 1.7, 1.0))


def scan(boxes, pose=None, spec=SPEC, is_ground=None):
    scene = Scene(boxes)
    field = ProbeField(scene, spec)
    return field.scan(pose or Pose.from_yaw(0.0, 0.0, 0.0), is_ground or scene.is_ground)


def test_fan_offsets_exact_step():
    assert list(fan_offsets(4.0, 4)) == [-2.0, -1.0, 0.0, 1.0, 2.0]


def test_fan_offsets_count_tolerates_accumulation():
    offsets = list(fan_offsets(4.0, 13))
    assert len(offsets) in (13, 14)
    assert offsets[0] == -2.0
    assert all(-2.0 <= d <= 2.0 for d in offsets)


def test_single_probe_spec_casts_both_edges():
    assert list(fan_offsets(1.0, 1)) == [-0.5, 0.5]


def test_empty_scene_reports_nothing():
    result = scan([], pose=Pose.from_yaw(3.0, 4.0, 1.2))
    assert result.nearest_left == math.inf
    assert result.nearest_right == math.inf
    assert result.probe_count == 5


def test_left_obstacle_only_sets_left():
    result = scan([LEFT_BOX])
    assert result.nearest_left == pytest.approx(0.4 * math.sqrt(2))
    assert result.nearest_right == math.inf


def test_right_obstacle_only_sets_right():
    result = scan([RIGHT_BOX])
    assert result.nearest_right == pytest.approx(0.4 * math.sqrt(2))
    assert result.nearest_left == math.inf


def test_sides_follow_the_vehicle_heading():
    # Rotate vehicle and scene together by 90 degrees about z.
    rot = Rotation.from_euler('z', math.pi / 2)
    corners = [rot.apply(LEFT_BOX.min_corner), rot.apply(LEFT_BOX.max_corner)]
    box = BoxObstacle(tuple(corners[0]), tuple(corners[1]))
    result = scan([box], pose=Pose.from_yaw(0.0, 0.0, math.pi / 2))
    assert result.nearest_left == pytest.approx(0.4 * math.sqrt(2))
    assert result.nearest_right == math.inf


def test_center_probe_is_ignored():
    box = BoxObstacle((-0.3, -0.05, 0.0), (-0.2, 0.05, 1.0))
    scene = Scene([box])
    # the center probe really does hit it
    hit = scene.cast_probe((0.0, 0.0, 0.05), (-1.0, 0.0, 0.0), 1.0)
    assert hit.distance == pytest.approx(0.2)

    result = scan([box])
    assert result == ProbeResult(math.inf, math.inf, 5)


def test_hits_at_or_beyond_probe_length_are_ignored():
    # inside the d = +1 probe's range (sqrt 2) but farther than L
    box = BoxObstacle((-0.9, -2.0, 0.0), (-0.8, -1.0, 1.0))
    result = scan([box])
    assert result.nearest_left == math.inf
    assert result.nearest_right == math.inf


def test_ground_tagged_surfaces_are_ignored():
    floor_box = BoxObstacle(LEFT_BOX.min_corner, LEFT_BOX.max_corner, tag='floor')
    result = scan([floor_box])
    assert result.nearest_left == math.inf


def test_pitched_vehicle_ignores_ground_plane():
    pose = Pose.from_rotation((0.0, 0.0, 0.0), Rotation.from_euler('y', -0.5))
    result = scan([], pose=pose)
    assert result.nearest_left == math.inf
    assert result.nearest_right == math.inf

    # same probes, no ground filtering: the plane counts as an obstacle
    unfiltered = scan([], pose=pose, is_ground=lambda tag: False)
    assert unfiltered.nearest_left < SPEC.length
    assert unfiltered.nearest_right < SPEC.length


def test_nearest_hit_wins_per_side():
    # struck by the d = +2 probe at 0.3 * sqrt(5), still inside L
    far = BoxObstacle((-0.4, -2.9, 0.0), (-0.3, -2.5, 1.0))
    assert scan([far]).nearest_left == pytest.approx(0.3 * math.sqrt(5))

    result = scan([far, LEFT_BOX])
    assert result.nearest_left == pytest.approx(0.4 * math.sqrt(2))
    assert result.nearest_right == math.inf


class RecordingWorld:
    def __init__(self):
        self.calls = []

    def cast_probe(self, origin, direction, max_length):
        self.calls.append((np.array(origin), np.array(direction), max_length))
        return None


def test_probe_geometry_is_translate_plus_skew():
    world = RecordingWorld()
    ProbeField(world, SPEC).scan(Pose.from_yaw(0.0, 0.0, 0.0), lambda tag: False)

    assert len(world.calls) == 5
    for d, (origin, direction, max_length) in zip([-2.0, -1.0, 0.0, 1.0, 2.0], world.calls):
        # right is -y for a vehicle at yaw 0
        np.testing.assert_allclose(origin, [0.0, -d, 0.05], atol=1e-12)
        np.testing.assert_allclose(direction, [-1.0, -d, 0.0], atol=1e-12)
        assert max_length == pytest.approx(math.sqrt(1.0 + d * d))


class TupleWorld:
    """World backend answering with plain (distance, tag) pairs."""

    def cast_probe(self, origin, direction, max_length):
        return (0.5, 'rock')


def test_plain_tuple_hits_are_accepted():
    field = ProbeField(TupleWorld(), SPEC)
    result = field.scan(Pose.from_yaw(0.0, 0.0, 0.0), lambda tag: tag == 'floor')
    assert result.nearest_left == pytest.approx(0.5)
    assert result.nearest_right == pytest.approx(0.5)
