from __future__ import annotations

from typing import Protocol

from ..capture.model import CapturedPhoto


class ImageUploader(Protocol):
    def upload(self, photo: CapturedPhoto) -> str:
        """Store the photo on the image host and return its durable URL."""

        raise NotImplementedError
