from __future__ import annotations

import logging
from typing import Any, Optional

import cv2
import numpy as np

from ..core.constants import DEFAULT_CAMERA_HEIGHT, DEFAULT_CAMERA_WIDTH
from ..core.exceptions import CaptureUnavailable

logger = logging.getLogger(__name__)


class OpenCVCamera:
    """CameraSource backed by cv2.VideoCapture (selfie camera by default index)."""

    def __init__(
        self,
        index: int = 0,
        *,
        width: int = DEFAULT_CAMERA_WIDTH,
        height: int = DEFAULT_CAMERA_HEIGHT,
        jpeg_quality: int = 90,
    ):
        self._index = int(index)
        self._width = int(width)
        self._height = int(height)
        self._jpeg_quality = int(jpeg_quality)
        self._cap: Optional[Any] = None

    def open(self) -> None:
        if self.is_ready():
            return

        cap = cv2.VideoCapture(self._index)
        if not cap.isOpened():
            cap.release()
            raise CaptureUnavailable(f"Camera {self._index} cannot be opened")

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._height)
        self._cap = cap
        logger.info(f"Camera {self._index} opened ({self._width}x{self._height})")

    def is_ready(self) -> bool:
        return self._cap is not None and bool(self._cap.isOpened())

    def grab_jpeg(self) -> bytes:
        if not self.is_ready():
            raise CaptureUnavailable("Camera stream is not ready")

        ok, frame = self._cap.read()
        if not ok or frame is None:
            raise CaptureUnavailable("Failed to capture image")
        # Webcams deliver all-black frames while the sensor warms up.
        if not np.any(np.asarray(frame, dtype=np.uint8)):
            raise CaptureUnavailable("Camera returned a blank frame")

        ok, buffer = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), self._jpeg_quality])
        if not ok:
            raise CaptureUnavailable("Failed to encode image")
        return buffer.tobytes()

    def close(self) -> None:
        if self._cap is None:
            return
        self._cap.release()
        self._cap = None
        logger.info(f"Camera {self._index} released")
