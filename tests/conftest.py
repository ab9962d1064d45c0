from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from jose import jwt

from src.timeclock.timeclock.attendance.model import AttendanceRecord
from src.timeclock.timeclock.capture.model import CapturedPhoto
from src.timeclock.timeclock.core.enums import EventKind
from src.timeclock.timeclock.core.exceptions import CaptureUnavailable, UploadFailed

FIXED_NOW = datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)


def make_token(*, subject_id: Optional[str] = "emp-1", email: str = "a@x.com", expires_in: Optional[timedelta] = timedelta(hours=8)) -> str:
    claims: dict = {"email": email}
    if subject_id is not None:
        claims["_id"] = subject_id
    if expires_in is not None:
        claims["exp"] = int((datetime.now(timezone.utc) + expires_in).timestamp())
    return jwt.encode(claims, "backend-secret", algorithm="HS256")


class InMemoryStorage:
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FakeAttendanceApi:
    """Scripted AttendanceApi that records every call."""

    def __init__(self, *, token: Optional[str] = None, history: Optional[list] = None):
        self.token = token or make_token()
        self.login_error: Optional[Exception] = None
        self.history_results: list = [list(history or [])]
        self.record_error: Optional[Exception] = None
        self.calls: list[tuple] = []

    @property
    def fetch_count(self) -> int:
        return sum(1 for c in self.calls if c[0] == "fetch_history")

    @property
    def recorded(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "record_event"]

    def login(self, email: str, password: str) -> str:
        self.calls.append(("login", email, password))
        if self.login_error:
            raise self.login_error
        return self.token

    def fetch_history(self):
        self.calls.append(("fetch_history",))
        # The last scripted result repeats.
        result = self.history_results[0] if len(self.history_results) == 1 else self.history_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return tuple(result)

    def record_event(self, kind: EventKind, photo_url: Optional[str] = None) -> None:
        self.calls.append(("record_event", kind, photo_url))
        if self.record_error:
            raise self.record_error


class FakeCapture:
    def __init__(self, *, photo: bytes = b"jpeg-bytes", error: Optional[Exception] = None):
        self.photo = photo
        self.error = error
        self.attached = False
        self.attach_count = 0
        self.detach_count = 0
        self.captures = 0

    def attach(self) -> bool:
        self.attached = True
        self.attach_count += 1
        return True

    def detach(self) -> None:
        self.attached = False
        self.detach_count += 1

    def capture_still(self) -> CapturedPhoto:
        self.captures += 1
        if self.error:
            raise self.error
        if not self.attached:
            raise CaptureUnavailable("Camera is not attached")
        return CapturedPhoto(data=self.photo)


class FakeUploader:
    def __init__(self, *, url: str = "https://img.test/selfie.jpg", error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.uploaded: list[CapturedPhoto] = []

    def upload(self, photo: CapturedPhoto) -> str:
        self.uploaded.append(photo)
        if self.error:
            raise self.error
        return self.url


def record(record_id: str = "r1", day: str = "2026-02-02", **kw) -> AttendanceRecord:
    return AttendanceRecord.from_json({"_id": record_id, "date": day, **kw})


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def upload_failure():
    return UploadFailed("Photo upload failed")
