"""Client that sends edge images to a visual-map localisation server."""

from __future__ import annotations

import logging
import socket
import struct
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

logger = logging.getLogger(__name__)

_POSE_FORMAT = "<8f"
_RESULT_FORMAT = "<9f"
_SIZE_FORMAT = "<I"
RESULT_SIZE = struct.calcsize(_RESULT_FORMAT)


class LineDetectionType(Enum):
    """How the line image sent to the server was produced."""

    CANNY = "n"
    LSD = "l"
    FLD = "f"


@dataclass(frozen=True, slots=True)
class UmapPose:
    """Position and attitude sent to or received from the server."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0


@dataclass(frozen=True, slots=True)
class UmapResult:
    """Pose estimated by the server and its similarity statistics."""

    pose: UmapPose = field(default_factory=UmapPose)
    similar: float = 0.0
    similar_average: float = 0.0
    similar_variance: float = 0.0

    @classmethod
    def from_bytes(cls, data: bytes) -> UmapResult:
        """Decode the first nine little-endian float32 values of a reply."""
        if len(data) < RESULT_SIZE:
            raise ValueError(
                f"reply holds {len(data)} bytes, at least {RESULT_SIZE} are needed"
            )
        values = struct.unpack_from(_RESULT_FORMAT, data)
        return cls(UmapPose(*values[:6]), values[6], values[7], values[8])


def _set_remaining(sock: socket.socket, deadline: float) -> None:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise TimeoutError("deadline passed")
    sock.settimeout(remaining)


class UmapImageSender:
    """Sends one query image with a prior pose and waits for the estimate."""

    def __init__(self, address: str, port: int, device_id: str, camera_number: int) -> None:
        self.address = address
        self.port = port
        self.device_id = device_id
        self.camera_number = camera_number
        self.is_return = True
        self.is_calibrated = True
        self.is_resized = True
        self.is_line_detected = True
        self.line_detection_type = LineDetectionType.CANNY
        self.dead_time_ms = 1000

    def make_file_name(self, now: datetime | None = None) -> str:
        """Build the file name that encodes the request flags and the time."""
        if now is None:
            now = datetime.now()
        year = now.year
        short_year = year % ((year // 1000) * 1000)
        history = "c" if self.is_calibrated else "C"
        history += "r" if self.is_resized else "R"
        code = self.line_detection_type.value
        history += code if self.is_line_detected else code.upper()
        parts = [
            "T" if self.is_return else "F",
            "R",
            str(short_year).rjust(2, "0"),
            str(now.month).rjust(2, "0"),
            str(now.day).rjust(2, "0"),
            str(now.hour).rjust(2, "0"),
            str(now.minute).rjust(2, "0"),
            str(now.second).rjust(2, "0"),
            str(now.microsecond // 1000).rjust(4, "0"),
            str(self.camera_number).rjust(2, "0"),
            history.rjust(8, "0"),
            ".png",
        ]
        return "".join(parts)

    def build_request(
        self,
        png: bytes,
        pose: UmapPose,
        matching_distance: float,
        matching_angle_distance: float,
        now: datetime | None = None,
    ) -> bytes:
        """Return the length-prefixed request: file name, image, then pose floats."""
        floats = struct.pack(
            _POSE_FORMAT,
            pose.x,
            pose.y,
            pose.z,
            pose.roll,
            pose.pitch,
            pose.yaw,
            matching_distance,
            matching_angle_distance,
        )
        body = self.make_file_name(now).encode("ascii") + bytes(png) + floats
        return struct.pack(_SIZE_FORMAT, len(body)) + body

    def send(
        self,
        png: bytes,
        pose: UmapPose,
        matching_distance: float,
        matching_angle_distance: float,
    ) -> UmapResult | None:
        """Send a PNG image and return the estimate, or None on failure or timeout.

        The whole exchange must finish within ``dead_time_ms``.  When
        ``is_return`` is false no reply is awaited and None is returned.
        """
        request = self.build_request(png, pose, matching_distance, matching_angle_distance)
        timeout = self.dead_time_ms / 1000.0
        deadline = time.monotonic() + timeout
        chunks: list[bytes] = []
        try:
            with socket.create_connection((self.address, self.port), timeout=timeout) as sock:
                _set_remaining(sock, deadline)
                sock.sendall(request)
                if not self.is_return:
                    return None
                while True:
                    _set_remaining(sock, deadline)
                    chunk = sock.recv(4096)
                    if not chunk:
                        break
                    chunks.append(chunk)
        except TimeoutError:
            logger.warning("timeout")
            return None
        except OSError as exc:
            logger.warning("request failed: %s", exc)
            return None
        data = b"".join(chunks)
        try:
            return UmapResult.from_bytes(data)
        except ValueError as exc:
            logger.warning("receive failed: %s", exc)
            return None