from __future__ import annotations

from typing import Protocol


class CameraSource(Protocol):
    """A camera stream that can hand out single JPEG frames."""

    def open(self) -> None:
        """Acquire the device. Raises CaptureUnavailable when it cannot be opened."""

        raise NotImplementedError

    def is_ready(self) -> bool:
        raise NotImplementedError

    def grab_jpeg(self) -> bytes:
        """Read one frame. Raises CaptureUnavailable when no frame is available."""

        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError
