from __future__ import annotations

import logging

from ..core.exceptions import CaptureUnavailable
from .camera import CameraSource
from .model import CapturedPhoto

logger = logging.getLogger(__name__)


class CaptureService:
    """Use case: take one still image from the attached camera stream."""

    def __init__(self, camera: CameraSource):
        self._camera = camera
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> bool:
        """Acquire the camera stream. Returns whether the stream is ready."""
        self._attached = True
        try:
            self._camera.open()
        except CaptureUnavailable as e:
            logger.warning(f"Camera not available: {e}")
            return False
        return self._camera.is_ready()

    def detach(self) -> None:
        if not self._attached:
            return
        self._attached = False
        self._camera.close()

    def capture_still(self) -> CapturedPhoto:
        if not self._attached:
            raise CaptureUnavailable("Camera is not attached")
        if not self._camera.is_ready():
            # The device may have been missing at attach time.
            try:
                self._camera.open()
            except CaptureUnavailable as e:
                raise CaptureUnavailable(f"Camera stream is not ready: {e}") from e
            if not self._camera.is_ready():
                raise CaptureUnavailable("Camera stream is not ready")
        return CapturedPhoto(data=self._camera.grab_jpeg())
