from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import PHOTO_CONTENT_TYPE


@dataclass(frozen=True)
class CapturedPhoto:
    """One still image, alive for a single action only."""

    data: bytes
    content_type: str = PHOTO_CONTENT_TYPE

    def __repr__(self) -> str:
        return f"CapturedPhoto(content_type={self.content_type!r}, size={len(self.data)})"
