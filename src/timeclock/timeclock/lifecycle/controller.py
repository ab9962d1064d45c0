from __future__ import annotations

import logging
import threading
from functools import wraps
from typing import Optional

from ..attendance.api import AttendanceApi
from ..capture.service import CaptureService
from ..core.constants import (
    MSG_BUSY,
    MSG_HISTORY_FAILED,
    MSG_LOGGED_OUT,
    MSG_LOGIN_FAILED,
    MSG_LOGIN_OK,
    MSG_MISSING_CREDENTIALS,
    MSG_NO_RECORDS,
    MSG_NOT_LOGGED_IN,
    MSG_SESSION_EXPIRED,
)
from ..core.enums import EventKind, MessageLevel, SessionState
from ..core.exceptions import (
    ActionInProgress,
    CaptureUnavailable,
    DomainError,
    InvalidCredentialsInput,
    NotAuthenticated,
    Unauthorized,
    UploadFailed,
    ValidationError,
)
from ..history.view_model import HistoryViewModel
from ..session.model import Credential
from ..session.store import SessionStore
from ..upload.uploader import ImageUploader
from .model import ActionOutcome, PanelSnapshot

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES = {
    EventKind.CHECK_IN: "Checked in successfully",
    EventKind.CHECK_OUT: "Checked out successfully",
    EventKind.BREAK_IN: "Break in recorded",
    EventKind.BREAK_OUT: "Break out recorded",
}

# Errors whose own text is already meant for the employee.
SELF_DESCRIBING_ERRORS = (CaptureUnavailable, UploadFailed, ValidationError, NotAuthenticated, ActionInProgress)


def _one_at_a_time(method):
    """Reject the call when another action of this controller is still running."""

    @wraps(method)
    def wrapper(self: "SessionLifecycleController", *args, **kwargs) -> ActionOutcome:
        if not self._lock.acquire(blocking=False):
            logger.warning(f"Rejected {method.__name__}: another action is in flight")
            return ActionOutcome(ok=False, message=MSG_BUSY, error_type=ActionInProgress)
        try:
            return method(self, *args, **kwargs)
        finally:
            self._lock.release()

    return wrapper


class SessionLifecycleController:
    """Use case: drive login, logout and attendance events for one employee panel.

    Every visible attendance fact comes from the backend: after each successful
    mutation the whole history is fetched again, and nothing is patched locally.
    """

    def __init__(
        self,
        sessions: SessionStore,
        api: AttendanceApi,
        capture: CaptureService,
        uploader: ImageUploader,
        history: Optional[HistoryViewModel] = None,
    ):
        self._sessions = sessions
        self._api = api
        self._capture = capture
        self._uploader = uploader
        self._history = history if history is not None else HistoryViewModel()
        self._lock = threading.Lock()

        self._message: Optional[str] = None
        self._message_level: Optional[MessageLevel] = None
        self._error: Optional[str] = None
        self._last_photo_url: Optional[str] = None

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> SessionState:
        return self._sessions.state

    @property
    def history(self) -> HistoryViewModel:
        return self._history

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def snapshot(self) -> PanelSnapshot:
        credential = self._sessions.current_credential()
        return PanelSnapshot(
            state=self.state,
            employee_email=credential.identity.email if credential else "",
            message=self._message,
            message_level=self._message_level,
            error=self._error,
            last_photo_url=self._last_photo_url,
            busy=self.busy,
            history=tuple(self._history.rows()),
        )

    # ------------------------------------------------------------- operations

    @_one_at_a_time
    def resume(self) -> ActionOutcome:
        """Pick up a session persisted by a previous run."""
        credential = self._sessions.load()
        if credential is None:
            return ActionOutcome(ok=True)
        self._on_credential_change(credential)
        return ActionOutcome(ok=self._error is None, message=self._error or self._message)

    @_one_at_a_time
    def login(self, email: Optional[str], password: Optional[str]) -> ActionOutcome:
        email = email.strip() if isinstance(email, str) else ""
        if not email or not isinstance(password, str) or not password:
            return self._fail(InvalidCredentialsInput(MSG_MISSING_CREDENTIALS), MSG_LOGIN_FAILED)

        try:
            token = self._api.login(email, password)
            credential = self._sessions.set_credential(token)
        except DomainError as e:
            logger.warning(f"Login failed for {email}: {e}")
            return self._fail(e, MSG_LOGIN_FAILED)
        except Exception as e:
            logger.exception(f"Unexpected error during login for {email}")
            return self._fail(e, MSG_LOGIN_FAILED)

        logger.info(f"Logged in as {credential.identity.email or credential.identity.subject_id}")
        self._set_message(MSG_LOGIN_OK, MessageLevel.SUCCESS)
        self._on_credential_change(credential)
        if self._sessions.current_credential() is None:
            # The fresh token was already refused by the history endpoint.
            self._set_message(None, None)
            return ActionOutcome(ok=False, message=self._error, error_type=Unauthorized)
        return ActionOutcome(ok=True, message=MSG_LOGIN_OK)

    def logout(self) -> ActionOutcome:
        """Always succeeds; waits for an in-flight action to settle first."""
        with self._lock:
            credential = self._sessions.current_credential()
            self._sessions.clear_credential()
            self._on_credential_change(None)
            self._error = None
            self._set_message(MSG_LOGGED_OUT, MessageLevel.INFO)
            if credential:
                logger.info(f"Logged out {credential.identity.email or credential.identity.subject_id}")
        return ActionOutcome(ok=True, message=MSG_LOGGED_OUT)

    @_one_at_a_time
    def refresh_history(self) -> ActionOutcome:
        if self._sessions.current_credential() is None:
            return self._fail(NotAuthenticated(MSG_NOT_LOGGED_IN), MSG_HISTORY_FAILED)

        self._error = None
        error = self._refresh_history()
        if error is not None:
            return ActionOutcome(ok=False, message=self._error, error_type=type(error))
        return ActionOutcome(ok=True, message=self._message)

    @_one_at_a_time
    def perform_event(self, kind: EventKind) -> ActionOutcome:
        fallback = f"{kind.label} failed"
        if self._sessions.current_credential() is None:
            return self._fail(NotAuthenticated(MSG_NOT_LOGGED_IN), fallback)

        try:
            photo_url = self._obtain_photo_url(kind)
        except (CaptureUnavailable, UploadFailed) as e:
            logger.warning(f"{kind.label} aborted before reaching the server: {e}")
            return self._fail(e, fallback)

        try:
            self._api.record_event(kind, photo_url)
        except Unauthorized:
            logger.warning(f"{kind.label} rejected: session expired")
            return self._expire_session()
        except DomainError as e:
            logger.warning(f"{kind.label} failed: {e}")
            return self._fail(e, fallback)
        except Exception as e:
            logger.exception(f"Unexpected error during {kind.label}")
            return self._fail(e, fallback)

        if photo_url:
            self._last_photo_url = photo_url
        message = SUCCESS_MESSAGES[kind]
        self._set_message(message, MessageLevel.SUCCESS)
        self._error = None
        self._refresh_history()
        return ActionOutcome(ok=True, message=message)

    def check_in(self) -> ActionOutcome:
        return self.perform_event(EventKind.CHECK_IN)

    def check_out(self) -> ActionOutcome:
        return self.perform_event(EventKind.CHECK_OUT)

    def break_in(self) -> ActionOutcome:
        return self.perform_event(EventKind.BREAK_IN)

    def break_out(self) -> ActionOutcome:
        return self.perform_event(EventKind.BREAK_OUT)

    # ---------------------------------------------------------------- helpers

    def _obtain_photo_url(self, kind: EventKind) -> Optional[str]:
        """Capture and upload a selfie.

        Check events need the photo, so failures propagate. Break events carry
        on without one.
        """
        try:
            photo = self._capture.capture_still()
        except CaptureUnavailable as e:
            if kind.photo_required:
                raise
            logger.info(f"{kind.label} continues without photo: {e}")
            return None

        try:
            return self._uploader.upload(photo)
        except UploadFailed as e:
            if kind.photo_required:
                raise
            logger.info(f"{kind.label} continues without photo: {e}")
            return None

    def _on_credential_change(self, credential: Optional[Credential]) -> None:
        self._history.clear()
        self._last_photo_url = None
        if credential is None:
            self._capture.detach()
            return
        self._capture.attach()
        self._refresh_history()

    def _refresh_history(self) -> Optional[BaseException]:
        """Replace the history with the server's. Returns the error, if any.

        A failure only sets the error text; a success message from the action
        that triggered the refresh stays visible.
        """
        try:
            records = self._api.fetch_history()
        except Unauthorized as e:
            logger.warning("History refresh rejected: session expired")
            self._expire_session(keep_message=True)
            return e
        except DomainError as e:
            logger.error(f"History refresh failed: {e}")
            self._error = self._describe(e, MSG_HISTORY_FAILED)
            return e
        except Exception as e:
            logger.exception("Unexpected error while refreshing history")
            self._error = MSG_HISTORY_FAILED
            return e

        self._history.replace(records)
        if not records:
            self._set_message(MSG_NO_RECORDS, MessageLevel.INFO)
        return None

    def _expire_session(self, *, keep_message: bool = False) -> ActionOutcome:
        self._sessions.clear_credential()
        self._on_credential_change(None)
        if not keep_message:
            self._set_message(None, None)
        self._error = MSG_SESSION_EXPIRED
        return ActionOutcome(ok=False, message=MSG_SESSION_EXPIRED, error_type=Unauthorized)

    def _fail(self, error: BaseException, fallback: str) -> ActionOutcome:
        text = self._describe(error, fallback)
        self._error = text
        self._set_message(None, None)
        error_type = type(error) if isinstance(error, DomainError) else None
        return ActionOutcome(ok=False, message=text, error_type=error_type)

    @staticmethod
    def _describe(error: BaseException, fallback: str) -> str:
        server_message = getattr(error, "server_message", None)
        if server_message:
            return server_message
        if isinstance(error, SELF_DESCRIBING_ERRORS) and str(error):
            return str(error)
        return fallback

    def _set_message(self, text: Optional[str], level: Optional[MessageLevel]) -> None:
        self._message = text
        self._message_level = level if text else None
