from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def parse_server_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by the backend.

    Returns None for missing or unparseable values so one bad field does not
    hide a whole record.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now(timezone.utc)
