"""Localisation client that corrects the pose estimate with visual-map matches."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .covariance_index import CovIndex
from .geometry import Pose, make_pose, pose_to_vector, rotate_2d
from .umap_image_sender import UmapImageSender, UmapPose, UmapResult

logger = logging.getLogger(__name__)

_COVARIANCE_SIZE = 36


class _Sender(Protocol):
    def send(
        self,
        png: bytes,
        pose: UmapPose,
        matching_distance: float,
        matching_angle_distance: float,
    ) -> UmapResult | None: ...


@dataclass(frozen=True, slots=True)
class UmapClientConfig:
    """Parameters of the visual-map localisation client."""

    period: float = 0.01
    offset_pos_x: float = 0.0
    offset_pos_y: float = 0.0
    offset_pos_yaw: float = 0.0
    server_ip: str = "192.168.11.8"
    server_port: int = 50000
    device_id: str = "TB01"
    camera_number: int = 1
    dead_time_ms: int = 1000
    resize_width: int = 320
    resize_height: int = 240
    umap_request_minimum_pixel_rate: float = 0.0
    umap_matching_distance_covariance_gain: float = 1.0
    umap_matching_distance: float = -1.0
    umap_matching_angle_distance: float = -1.0
    umap_pos_x_stddev: float = 0.01
    umap_pos_y_stddev: float = 0.01
    umap_pos_yaw_stddev: float = 0.01


@dataclass(frozen=True, slots=True)
class UmapPoseEstimate:
    """Corrected pose in the map frame with its stamp and 6x6 covariance."""

    x: float
    y: float
    yaw: float
    stamp: float
    covariance: tuple[float, ...]
    frame_id: str = "map"

    @property
    def pose(self) -> Pose:
        return make_pose(self.x, self.y, self.yaw)


def _as_planar(pose: Pose | Sequence[float] | np.ndarray) -> np.ndarray:
    if isinstance(pose, Pose):
        return pose_to_vector(pose)
    vec = np.asarray(pose, dtype=float)
    if vec.shape != (3,):
        raise ValueError("a planar pose needs exactly three components (x, y, yaw)")
    return vec.copy()


class UmapClient:
    """Sends the latest edge image with the current pose and corrects the result.

    ``sender`` defaults to a :class:`UmapImageSender` built from the config.
    ``on_timeout`` is called with the time whenever the server gives no answer.
    """

    def __init__(
        self,
        config: UmapClientConfig | None = None,
        sender: _Sender | None = None,
        on_timeout: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config if config is not None else UmapClientConfig()
        if sender is None:
            image_sender = UmapImageSender(
                self.config.server_ip,
                self.config.server_port,
                self.config.device_id,
                self.config.camera_number,
            )
            image_sender.dead_time_ms = self.config.dead_time_ms
            sender = image_sender
        self.sender = sender
        self.on_timeout = on_timeout
        self.current_pos = np.zeros(3)
        self.xy_covariance_norm = 0.0
        self.theta_covariance_norm = 0.0
        self._png: bytes | None = None
        self._edge_pixel_count = 0
        self.picture_pos = np.zeros(3)
        self.picture_time: float | None = None

    def on_odometry(self, pose, covariance: Sequence[float]) -> None:
        """Record the current localisation and its covariance (row-major 6x6)."""
        cov = [float(v) for v in covariance]
        if len(cov) != _COVARIANCE_SIZE:
            raise ValueError(f"covariance needs {_COVARIANCE_SIZE} entries, got {len(cov)}")
        self.current_pos = _as_planar(pose)
        self.xy_covariance_norm = math.hypot(cov[CovIndex.X_X], cov[CovIndex.Y_Y])
        self.theta_covariance_norm = cov[CovIndex.YAW_YAW]

    def on_image(self, png: bytes, edge_pixel_count: int, now: float) -> None:
        """Keep an edge image taken at ``now`` with the pose at that moment."""
        self._png = bytes(png)
        self._edge_pixel_count = edge_pixel_count
        self.picture_pos = self.current_pos.copy()
        self.picture_time = now

    def matching_ranges(self) -> tuple[float, float]:
        """Return the position and angle search ranges for the server."""
        cfg = self.config
        gain = cfg.umap_matching_distance_covariance_gain
        distance = cfg.umap_matching_distance + gain * math.sqrt(self.xy_covariance_norm)
        angle = cfg.umap_matching_angle_distance + gain * math.sqrt(self.theta_covariance_norm)
        return distance, angle

    def correct_pose(
        self,
        result_pose: UmapPose,
        picture_pos,
        picture_time: float,
        now: float,
    ) -> UmapPoseEstimate:
        """Turn a server estimate into a base pose, compensating for late replies."""
        cfg = self.config
        picture = _as_planar(picture_pos)
        xy = np.array([result_pose.x, result_pose.y], dtype=float)
        yaw = float(result_pose.yaw)
        offset_xy = np.array([cfg.offset_pos_x, cfg.offset_pos_y])
        gain = 1.0 + cfg.umap_matching_distance_covariance_gain * math.hypot(
            self.xy_covariance_norm, self.theta_covariance_norm
        )
        if now - picture_time > cfg.period:
            diff = self.current_pos - picture
            xy = xy + rotate_2d(diff[:2], yaw - picture[2])
            yaw += float(diff[2])
            yaw -= cfg.offset_pos_yaw
            xy = xy - rotate_2d(offset_xy, yaw)
            stamp = now
            gain *= 2
        else:
            yaw -= cfg.offset_pos_yaw
            xy = xy - rotate_2d(offset_xy, yaw)
            stamp = picture_time
        covariance = [0.0] * _COVARIANCE_SIZE
        covariance[CovIndex.X_X] = cfg.umap_pos_x_stddev * gain
        covariance[CovIndex.Y_Y] = cfg.umap_pos_y_stddev * gain
        covariance[CovIndex.YAW_YAW] = cfg.umap_pos_yaw_stddev * gain
        return UmapPoseEstimate(float(xy[0]), float(xy[1]), yaw, stamp, tuple(covariance))

    def step(self, now: float) -> UmapPoseEstimate | None:
        """Query the server with the latest image; return the corrected pose if any."""
        if self._png is None or self.picture_time is None:
            return None
        picture_pos = self.picture_pos.copy()
        picture_time = self.picture_time
        cfg = self.config
        area = cfg.resize_width * cfg.resize_height
        if cfg.umap_request_minimum_pixel_rate * area > self._edge_pixel_count:
            logger.warning("umap request minimum pixel rate is not satisfied")
            return None
        distance, angle = self.matching_ranges()
        query = UmapPose(
            float(picture_pos[0]), float(picture_pos[1]), 0.0, 0.0, 0.0, float(picture_pos[2])
        )
        result = self.sender.send(self._png, query, distance, angle)
        if result is None:
            if self.on_timeout is not None:
                self.on_timeout(now)
            return None
        return self.correct_pose(result.pose, picture_pos, picture_time, now)