from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EventKind
from .model import AttendanceRecord


class AttendanceApi(Protocol):
    def login(self, email: str, password: str) -> str:
        """Return the bearer token issued for the employee."""

        raise NotImplementedError

    def fetch_history(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def record_event(self, kind: EventKind, photo_url: Optional[str] = None) -> None:
        raise NotImplementedError
