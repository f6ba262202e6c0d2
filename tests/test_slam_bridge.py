import math

import pytest

from robonav.geometry import quaternion_from_yaw
from robonav.slam_bridge import SlamBridge
from robonav.transform import Transform


@pytest.fixture
def bridge(tmp_path):
    b = SlamBridge((0.0, 0.0, 0.0), tmp_path / "pose.csv", tmp_path / "vgm.csv")
    yield b
    b.close()


def test_identity_start_passes_odometry_through(bridge):
    tf = bridge.on_odom(Transform(1.5, -2.0, 0.4), 0.3, 123, 456)
    assert (tf.frame_id, tf.child_frame_id) == ("odom", "slam_base_link")
    assert tf.stamp_ns == 123
    assert (tf.x, tf.y, tf.z) == pytest.approx((1.5, -2.0, 0.3))
    assert tf.rotation == quaternion_from_yaw(0.4)


def test_start_pose_rotates_and_offsets_odometry(tmp_path):
    with SlamBridge((2.0, 3.0, 0.7), tmp_path / "p.csv", tmp_path / "v.csv") as b:
        tf = b.on_odom(Transform(3.0, 4.0, 0.1), 0.0, 0, 0)
    assert math.hypot(tf.x - 2.0, tf.y - 3.0) == pytest.approx(math.hypot(3.0, 4.0))
    assert b.odom.theta == pytest.approx(0.1 + 0.7)


def test_invalid_start_pos(tmp_path):
    with pytest.raises(ValueError):
        SlamBridge((1.0, 2.0), tmp_path / "p.csv", tmp_path / "v.csv")


def test_ekf_before_odometry_writes_nothing(tmp_path, bridge):
    assert bridge.on_ekf_odom(Transform(1.0, 1.0, 0.0), Transform(), 10) is None
    bridge.close()
    assert (tmp_path / "pose.csv").read_text() == ""


def test_ekf_without_map_transform_is_skipped(bridge):
    bridge.on_odom(Transform(), 0.0, 1, 1)
    assert bridge.on_ekf_odom(Transform(1.0, 1.0, 0.0), None, 10) is None


def test_ekf_row_layout(tmp_path, bridge):
    bridge.on_odom(Transform(1.0, 2.0, 0.5), 0.0, 5_000_000_000, 1_000)
    row = bridge.on_ekf_odom(Transform(1.25, 2.5, 0.25), Transform(0.5, 0.75, -0.5), 2_000_001_000)
    fields = row.split(",")
    assert fields[-1] == ""
    values = fields[:-1]
    assert len(values) == 11
    assert all(len(v.split(".")[1]) == 10 for v in values)
    assert values[0] == "7.0000000000"
    assert values[1] == "2.0000000000"
    assert [float(v) for v in values[2:]] == pytest.approx([1.25, 2.5, 0.25, 0.5, 0.75, -0.5, 1.0, 2.0, 0.5])
    bridge.close()
    assert (tmp_path / "pose.csv").read_text() == row + "\n"


def test_umap_log_requires_first_odometry(tmp_path, bridge):
    assert bridge.on_umap_pose(Transform(1.0, 2.0, 0.1), 3_000_000_000) is None
    bridge.on_odom(Transform(), 0.0, 1_500_000_000, 0)
    row = bridge.on_umap_pose(Transform(1.0, 2.0, 0.125), 3_000_000_000)
    values = [float(v) for v in row.rstrip(",").split(",")]
    assert values[0] == pytest.approx(3.0)
    assert values[1] == pytest.approx(1.5)
    assert values[2:] == pytest.approx([1.0, 2.0, 0.125])
    bridge.close()
    assert (tmp_path / "vgm.csv").read_text().splitlines() == [row]