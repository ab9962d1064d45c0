from __future__ import annotations

import pytest
import requests

from src.timeclock.timeclock.capture.model import CapturedPhoto
from src.timeclock.timeclock.core.exceptions import UploadFailed, ValidationError
from src.timeclock.timeclock.upload.service import UploadService


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeHttp:
    def __init__(self, response=None, error: Exception = None):
        self.response = response
        self.error = error
        self.posts: list[dict] = []

    def post(self, url, **kwargs):
        self.posts.append({"url": url, **kwargs})
        if self.error:
            raise self.error
        return self.response


def test_upload_sends_file_and_preset_and_returns_secure_url():
    http = FakeHttp(FakeResponse(200, {"secure_url": "https://img.test/a.jpg"}))
    svc = UploadService("https://images.test/upload", "projectatte", session=http, timeout=3)

    url = svc.upload(CapturedPhoto(data=b"jpeg"))

    assert url == "https://img.test/a.jpg"
    sent = http.posts[0]
    assert sent["url"] == "https://images.test/upload"
    assert sent["data"] == {"upload_preset": "projectatte"}
    name, data, content_type = sent["files"]["file"]
    assert name.endswith(".jpg")
    assert data == b"jpeg"
    assert content_type == "image/jpeg"
    assert sent["timeout"] == 3


def test_upload_network_error_becomes_upload_failed():
    error = requests.ConnectionError("offline")
    svc = UploadService("u", "p", session=FakeHttp(error=error))

    with pytest.raises(UploadFailed) as exc:
        svc.upload(CapturedPhoto(data=b"jpeg"))
    assert exc.value.cause is error


def test_upload_rejected_response_becomes_upload_failed():
    svc = UploadService("u", "p", session=FakeHttp(FakeResponse(400, {"error": {"message": "bad preset"}})))

    with pytest.raises(UploadFailed):
        svc.upload(CapturedPhoto(data=b"jpeg"))


def test_upload_without_secure_url_is_a_failure():
    svc = UploadService("u", "p", session=FakeHttp(FakeResponse(200, {"url": "http://img"})))

    with pytest.raises(UploadFailed):
        svc.upload(CapturedPhoto(data=b"jpeg"))


@pytest.mark.parametrize("url,preset", [("", "p"), ("u", "  ")])
def test_missing_configuration_is_rejected(url, preset):
    with pytest.raises(ValidationError):
        UploadService(url, preset, session=FakeHttp())
