from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    """Whether a valid credential is held."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class MessageLevel(str, Enum):
    """Kind of the non-error message shown to the employee."""

    SUCCESS = "success"
    INFO = "info"


class EventKind(str, Enum):
    """Attendance events recorded on the backend.

    The value is the endpoint path segment.
    """

    CHECK_IN = "checkin"
    CHECK_OUT = "checkout"
    BREAK_IN = "breakin"
    BREAK_OUT = "breakout"

    @property
    def photo_required(self) -> bool:
        return self in (EventKind.CHECK_IN, EventKind.CHECK_OUT)

    @property
    def label(self) -> str:
        return {
            EventKind.CHECK_IN: "Check-in",
            EventKind.CHECK_OUT: "Check-out",
            EventKind.BREAK_IN: "Break in",
            EventKind.BREAK_OUT: "Break out",
        }[self]
