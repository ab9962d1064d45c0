from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..common.http import extract_server_message, new_http_session
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HTTP_TIMEOUT, MSG_INVALID_TOKEN
from ..core.enums import EventKind
from ..core.exceptions import (
    AuthFailed,
    Conflict,
    NetworkError,
    NotAuthenticated,
    Unauthorized,
    ValidationError,
)
from ..session.store import SessionStore
from .model import AttendanceRecord

logger = logging.getLogger(__name__)

UNAUTHORIZED_STATUSES = (401, 403)


class HttpAttendanceClient:
    """AttendanceApi over the employee REST endpoints."""

    def __init__(
        self,
        base_url: str,
        sessions: SessionStore,
        *,
        http: Optional[requests.Session] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        self._base_url = require_non_empty(base_url, "base_url").rstrip("/")
        self._sessions = sessions
        self._http = http or new_http_session()
        self._timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _auth_headers(self) -> dict[str, str]:
        credential = self._sessions.current_credential()
        if credential is None:
            raise NotAuthenticated(MSG_INVALID_TOKEN)
        return {"Authorization": f"Bearer {credential.token}"}

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        try:
            return self._http.request(method, self._url(path), timeout=self._timeout, **kwargs)
        except requests.Timeout as e:
            raise NetworkError("The server did not respond in time") from e
        except requests.ConnectionError as e:
            raise NetworkError("Cannot connect to the server") from e
        except requests.RequestException as e:
            raise NetworkError(f"Request failed: {e}") from e

    @staticmethod
    def _raise_for_server_error(response: requests.Response) -> None:
        if response.status_code >= 500:
            message = extract_server_message(response)
            raise NetworkError(f"Server error (HTTP {response.status_code})", server_message=message)

    def login(self, email: str, password: str) -> str:
        response = self._send("POST", "login", json={"email": email, "password": password})
        self._raise_for_server_error(response)

        if not response.ok:
            message = extract_server_message(response)
            logger.info(f"Login rejected for {email}: HTTP {response.status_code}")
            raise AuthFailed(message or "Login failed", server_message=message)

        try:
            token = response.json().get("token")
        except (ValueError, AttributeError) as e:
            raise NetworkError("Login returned an unreadable response") from e
        if not token:
            raise NetworkError("Login response did not include a token")
        return str(token)

    def fetch_history(self) -> tuple[AttendanceRecord, ...]:
        response = self._send("GET", "attendance", headers=self._auth_headers())
        self._raise_for_server_error(response)

        if response.status_code in UNAUTHORIZED_STATUSES:
            message = extract_server_message(response)
            raise Unauthorized(message or "Unauthorized", server_message=message)
        if not response.ok:
            message = extract_server_message(response)
            raise NetworkError(f"History request failed (HTTP {response.status_code})", server_message=message)

        try:
            payload = response.json()
        except ValueError as e:
            raise NetworkError("History response is not valid JSON") from e
        if payload is None:
            return ()
        if not isinstance(payload, list):
            raise NetworkError("History response is not a list")

        try:
            return tuple(AttendanceRecord.from_json(item) for item in payload)
        except ValidationError as e:
            raise NetworkError(f"Malformed attendance record: {e}") from e

    def record_event(self, kind: EventKind, photo_url: Optional[str] = None) -> None:
        if kind.photo_required and not photo_url:
            raise ValidationError(f"{kind.label} requires a photo")

        body: dict[str, str] = {}
        if photo_url:
            body["photoUrl"] = photo_url

        response = self._send("POST", kind.value, json=body, headers=self._auth_headers())
        self._raise_for_server_error(response)

        if response.status_code in UNAUTHORIZED_STATUSES:
            message = extract_server_message(response)
            raise Unauthorized(message or "Unauthorized", server_message=message)
        if not response.ok:
            message = extract_server_message(response)
            raise Conflict(message or f"{kind.label} rejected", server_message=message)

        logger.info(f"{kind.label} recorded")
