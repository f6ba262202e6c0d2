"""Bridge that republishes odometry for SLAM and logs pose comparisons."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from collections.abc import Sequence

from .geometry import Quaternion, quaternion_from_yaw
from .transform import Transform

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StampedTransform:
    """Transform between two frames at a time stamp in nanoseconds."""

    stamp_ns: int
    frame_id: str
    child_frame_id: str
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotation: Quaternion = field(default_factory=Quaternion)


def _row(values: Sequence[float]) -> str:
    return "".join(f"{v:.10f}," for v in values)


class SlamBridge:
    """Places odometry at the start pose and writes CSV logs of estimated poses."""

    def __init__(
        self,
        start_pos: Sequence[float] = (0.0, 0.0, 0.0),
        pose_log_path: str | os.PathLike[str] = "pose_log.csv",
        umap_log_path: str | os.PathLike[str] = "vgm_log.csv",
    ) -> None:
        if len(start_pos) != 3:
            raise ValueError("start_pos needs exactly three values (x, y, yaw)")
        self.start_pos = tuple(float(v) for v in start_pos)
        self.first_time_rosbag: int | None = None
        self.first_time_play: int | None = None
        self.odom = Transform()
        self._pose_log = open(pose_log_path, "w", encoding="utf-8")
        try:
            self._umap_log = open(umap_log_path, "w", encoding="utf-8")
        except OSError:
            self._pose_log.close()
            raise

    def __enter__(self) -> SlamBridge:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close both log files."""
        self._pose_log.close()
        self._umap_log.close()

    def on_odom(self, pose: Transform, z: float, stamp_ns: int, now_ns: int) -> StampedTransform:
        """Return the odom to slam_base_link transform for an odometry reading."""
        if self.first_time_rosbag is None:
            self.first_time_rosbag = stamp_ns
            self.first_time_play = now_ns
        init_x, init_y, init_yaw = self.start_pos
        c, s = math.cos(init_yaw), math.sin(init_yaw)
        x = pose.x * c - pose.y * s + init_x
        y = pose.x * s + pose.y * c + init_y
        yaw = pose.theta + init_yaw
        self.odom = Transform(x, y, yaw)
        return StampedTransform(
            stamp_ns, "odom", "slam_base_link", x, y, z, quaternion_from_yaw(yaw)
        )

    def on_ekf_odom(
        self, ekf_pose: Transform, map_pose: Transform | None, now_ns: int
    ) -> str | None:
        """Log the filtered, SLAM and odometry poses; return the row written.

        ``map_pose`` is the map to slam_base_link transform, or None when it
        could not be looked up.
        """
        if map_pose is None:
            logger.error("Transform error: map to slam_base_link is not available")
            return None
        if self.first_time_rosbag is None or self.first_time_play is None:
            return None
        dt = now_ns - self.first_time_play
        row = _row(
            (
                (self.first_time_rosbag + dt) / 1e9,
                dt / 1e9,
                ekf_pose.x,
                ekf_pose.y,
                ekf_pose.theta,
                map_pose.x,
                map_pose.y,
                map_pose.theta,
                self.odom.x,
                self.odom.y,
                self.odom.theta,
            )
        )
        self._pose_log.write(row + "\n")
        self._pose_log.flush()
        return row

    def on_umap_pose(self, pose: Transform, stamp_ns: int) -> str | None:
        """Log a visual-map pose estimate; return the row written."""
        if self.first_time_rosbag is None:
            return None
        row = _row(
            (
                stamp_ns / 1e9,
                (stamp_ns - self.first_time_rosbag) / 1e9,
                pose.x,
                pose.y,
                pose.theta,
            )
        )
        self._umap_log.write(row + "\n")
        self._umap_log.flush()
        return row