from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import MessageLevel, SessionState
from ..core.exceptions import DomainError


@dataclass(frozen=True)
class ActionOutcome:
    """Terminal result of one user-triggered action."""

    ok: bool
    message: Optional[str] = None
    error_type: Optional[type[DomainError]] = None


@dataclass(frozen=True)
class PanelSnapshot:
    """What the employee panel shows at a given moment."""

    state: SessionState
    employee_email: str = ""
    message: Optional[str] = None
    message_level: Optional[MessageLevel] = None
    error: Optional[str] = None
    last_photo_url: Optional[str] = None
    busy: bool = False
    history: tuple[dict, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "employee_email": self.employee_email,
            "message": self.message,
            "message_level": self.message_level.value if self.message_level else None,
            "error": self.error,
            "last_photo_url": self.last_photo_url,
            "busy": self.busy,
            "history": list(self.history),
        }
