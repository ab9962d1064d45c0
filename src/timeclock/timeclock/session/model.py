from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """Employee identity decoded from the bearer token claims."""

    subject_id: str
    email: str
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class Credential:
    token: str
    identity: Identity

    def __repr__(self) -> str:
        # Keep the raw token out of logs and tracebacks.
        return f"Credential(identity={self.identity!r})"
