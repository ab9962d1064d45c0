from __future__ import annotations

from typing import Optional

import requests

MESSAGE_FIELDS = ("message", "error", "msg")


def new_http_session(user_agent: str = "timeclock-client") -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json", "User-Agent": user_agent})
    return session


def extract_server_message(response: requests.Response) -> Optional[str]:
    """Best-effort human readable message from an error response body.

    The backend answers with a bare JSON string, a JSON object carrying one of
    MESSAGE_FIELDS, or plain text.
    """
    try:
        data = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return text or None

    if isinstance(data, str):
        return data.strip() or None
    if isinstance(data, dict):
        for field in MESSAGE_FIELDS:
            value = data.get(field)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None
