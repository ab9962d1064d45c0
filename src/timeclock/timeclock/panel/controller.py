from __future__ import annotations

from flask import Flask, abort, jsonify, request

from ..container import Container
from ..core.enums import EventKind
from ..core.exceptions import (
    ActionInProgress,
    AuthenticationError,
    CaptureUnavailable,
    Conflict,
    NetworkError,
    UploadFailed,
    ValidationError,
)
from ..lifecycle.model import ActionOutcome

# Most specific first.
ERROR_STATUS = (
    (ActionInProgress, 429),
    (Conflict, 409),
    (AuthenticationError, 401),
    (ValidationError, 400),
    (CaptureUnavailable, 422),
    (UploadFailed, 502),
    (NetworkError, 502),
)


def _status_for(outcome: ActionOutcome) -> int:
    if outcome.ok:
        return 200
    if outcome.error_type is not None:
        for error_type, status in ERROR_STATUS:
            if issubclass(outcome.error_type, error_type):
                return status
    return 400


def register(app: Flask, container: Container) -> None:
    lifecycle = container.lifecycle

    def respond(outcome: ActionOutcome):
        payload = {
            "ok": outcome.ok,
            "message": outcome.message,
            "panel": lifecycle.snapshot().to_dict(),
        }
        return jsonify(payload), _status_for(outcome)

    @app.route("/api/session", methods=["GET"], endpoint="session")
    def session_state():
        return jsonify(lifecycle.snapshot().to_dict())

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        return respond(lifecycle.login(data.get("email", ""), data.get("password", "")))

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        return respond(lifecycle.logout())

    @app.route("/api/<event>", methods=["POST"], endpoint="event")
    def event(event: str):
        try:
            kind = EventKind(event)
        except ValueError:
            abort(404)
        return respond(lifecycle.perform_event(kind))

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance")
    def attendance():
        return jsonify({"history": container.history.rows()})

    @app.route("/api/attendance/refresh", methods=["POST"], endpoint="attendance_refresh")
    def attendance_refresh():
        return respond(lifecycle.refresh_history())
