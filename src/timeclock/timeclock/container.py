from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.http_client import HttpAttendanceClient
from .capture.opencv_camera import OpenCVCamera
from .capture.service import CaptureService
from .common.http import new_http_session
from .history.view_model import HistoryViewModel
from .lifecycle.controller import SessionLifecycleController
from .session.storage import JsonFileStorage
from .session.store import SessionStore
from .upload.service import UploadService


@dataclass(frozen=True)
class Container:
    storage: JsonFileStorage
    session_store: SessionStore

    attendance_client: HttpAttendanceClient
    capture_service: CaptureService
    upload_service: UploadService
    history: HistoryViewModel

    lifecycle: SessionLifecycleController


def build_container(*, settings: Any) -> Container:
    timeout = float(getattr(settings, "HTTP_TIMEOUT", 15))
    http = new_http_session()

    storage = JsonFileStorage(str(getattr(settings, "SESSION_FILE")))
    session_store = SessionStore(storage)

    attendance_client = HttpAttendanceClient(
        str(getattr(settings, "API_BASE_URL")),
        session_store,
        http=http,
        timeout=timeout,
    )
    camera = OpenCVCamera(
        int(getattr(settings, "CAMERA_INDEX", 0)),
        width=int(getattr(settings, "CAMERA_WIDTH", 640)),
        height=int(getattr(settings, "CAMERA_HEIGHT", 480)),
    )
    capture_service = CaptureService(camera)
    upload_service = UploadService(
        str(getattr(settings, "UPLOAD_URL")),
        str(getattr(settings, "UPLOAD_PRESET")),
        session=http,
        timeout=timeout,
    )
    history = HistoryViewModel()

    lifecycle = SessionLifecycleController(
        session_store,
        attendance_client,
        capture_service,
        upload_service,
        history,
    )

    return Container(
        storage=storage,
        session_store=session_store,
        attendance_client=attendance_client,
        capture_service=capture_service,
        upload_service=upload_service,
        history=history,
        lifecycle=lifecycle,
    )
