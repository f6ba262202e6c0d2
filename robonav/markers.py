"""Visualisation markers for the estimated robot position."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .geometry import Pose, Quaternion

CYLINDER = 3
ADD = 0


@dataclass(frozen=True, slots=True)
class Marker:
    """A display marker in a named frame."""

    frame_id: str = ""
    stamp: Any = None
    ns: str = ""
    id: int = 0
    type: int = CYLINDER
    action: int = ADD
    pose: Pose = field(default_factory=Pose)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


def position_marker(pose: Pose, stamp: Any) -> Marker:
    """Return a red cylinder in the map frame at the planar position of ``pose``."""
    return Marker(
        frame_id="map",
        stamp=stamp,
        ns="my_namespace",
        id=0,
        type=CYLINDER,
        action=ADD,
        pose=Pose(pose.x, pose.y, 0.0, Quaternion(0.0, 0.0, 0.0, 1.0)),
        scale=(2.0, 2.0, 2.0),
        color=(1.0, 0.0, 0.0, 1.0),
    )