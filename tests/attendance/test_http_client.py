from __future__ import annotations

import pytest
import requests

from conftest import InMemoryStorage, make_token
from src.timeclock.timeclock.attendance.http_client import HttpAttendanceClient
from src.timeclock.timeclock.core.enums import EventKind
from src.timeclock.timeclock.core.exceptions import (
    AuthFailed,
    Conflict,
    NetworkError,
    NotAuthenticated,
    Unauthorized,
    ValidationError,
)
from src.timeclock.timeclock.session.store import SessionStore

BASE = "http://backend.test/api/employee"


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
    def __init__(self, *responses, error: Exception = None):
        self._responses = list(responses)
        self.error = error
        self.requests: list[dict] = []

    def request(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        if self.error:
            raise self.error
        return self._responses.pop(0)


def _client(http: FakeHttp, *, logged_in: bool = True):
    store = SessionStore(InMemoryStorage())
    token = None
    if logged_in:
        token = make_token()
        store.set_credential(token)
    return HttpAttendanceClient(BASE + "/", store, http=http, timeout=5), token


def test_login_posts_credentials_and_returns_token():
    http = FakeHttp(FakeResponse(200, {"token": "T"}))
    client, _ = _client(http, logged_in=False)

    assert client.login("a@x.com", "pw") == "T"
    sent = http.requests[0]
    assert sent["method"] == "POST"
    assert sent["url"] == f"{BASE}/login"
    assert sent["json"] == {"email": "a@x.com", "password": "pw"}
    assert "headers" not in sent


def test_login_rejection_carries_server_message_verbatim():
    http = FakeHttp(FakeResponse(400, "Invalid email or password"))
    client, _ = _client(http, logged_in=False)

    with pytest.raises(AuthFailed) as exc:
        client.login("a@x.com", "bad")
    assert exc.value.server_message == "Invalid email or password"


def test_login_plain_text_error_body():
    http = FakeHttp(FakeResponse(401, None, text="Employee not found"))
    client, _ = _client(http, logged_in=False)

    with pytest.raises(AuthFailed) as exc:
        client.login("a@x.com", "pw")
    assert exc.value.server_message == "Employee not found"


def test_login_transport_error_is_network_error():
    client, _ = _client(FakeHttp(error=requests.Timeout("slow")), logged_in=False)

    with pytest.raises(NetworkError):
        client.login("a@x.com", "pw")


def test_fetch_history_sends_bearer_and_keeps_server_order():
    payload = [
        {"_id": "r2", "date": "2026-02-02T00:00:00.000Z", "checkIn": "2026-02-02T08:59:00.000Z"},
        {"_id": "r1", "date": "2026-02-01T00:00:00.000Z", "totalHours": 8.25, "status": "Present"},
    ]
    http = FakeHttp(FakeResponse(200, payload))
    client, token = _client(http)

    records = client.fetch_history()

    assert [r.record_id for r in records] == ["r2", "r1"]
    assert records[1].total_hours == 8.25
    sent = http.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == f"{BASE}/attendance"
    assert sent["headers"] == {"Authorization": f"Bearer {token}"}


def test_fetch_history_empty_list():
    client, _ = _client(FakeHttp(FakeResponse(200, [])))

    assert client.fetch_history() == ()


@pytest.mark.parametrize("status", [401, 403])
def test_fetch_history_rejected_token_is_unauthorized(status):
    client, _ = _client(FakeHttp(FakeResponse(status, {"message": "jwt expired"})))

    with pytest.raises(Unauthorized) as exc:
        client.fetch_history()
    assert exc.value.server_message == "jwt expired"


def test_fetch_history_malformed_body_is_network_error():
    client, _ = _client(FakeHttp(FakeResponse(200, {"records": []})))

    with pytest.raises(NetworkError):
        client.fetch_history()


def test_fetch_history_without_credential_makes_no_request():
    http = FakeHttp()
    client, _ = _client(http, logged_in=False)

    with pytest.raises(NotAuthenticated):
        client.fetch_history()
    assert http.requests == []


def test_record_check_in_sends_exactly_photo_url():
    http = FakeHttp(FakeResponse(200, {"message": "ok"}))
    client, token = _client(http)

    client.record_event(EventKind.CHECK_IN, "https://img.test/u.jpg")

    sent = http.requests[0]
    assert sent["url"] == f"{BASE}/checkin"
    assert sent["json"] == {"photoUrl": "https://img.test/u.jpg"}
    assert sent["headers"]["Authorization"] == f"Bearer {token}"


def test_record_break_without_photo_omits_field():
    http = FakeHttp(FakeResponse(204))
    client, _ = _client(http)

    client.record_event(EventKind.BREAK_OUT)

    assert http.requests[0]["url"] == f"{BASE}/breakout"
    assert http.requests[0]["json"] == {}


def test_record_check_out_without_photo_is_refused_locally():
    http = FakeHttp()
    client, _ = _client(http)

    with pytest.raises(ValidationError):
        client.record_event(EventKind.CHECK_OUT, None)
    assert http.requests == []


def test_record_duplicate_is_conflict():
    client, _ = _client(FakeHttp(FakeResponse(400, {"message": "Already checked in today"})))

    with pytest.raises(Conflict) as exc:
        client.record_event(EventKind.CHECK_IN, "u")
    assert exc.value.server_message == "Already checked in today"


def test_record_server_error_is_network_error():
    client, _ = _client(FakeHttp(FakeResponse(503, None, text="")))

    with pytest.raises(NetworkError):
        client.record_event(EventKind.BREAK_IN)


def test_record_unauthorized():
    client, _ = _client(FakeHttp(FakeResponse(401, "Invalid token")))

    with pytest.raises(Unauthorized):
        client.record_event(EventKind.BREAK_IN, "u")
