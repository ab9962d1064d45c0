from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import requests

from ..capture.model import CapturedPhoto
from ..common.http import extract_server_message, new_http_session
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import UploadFailed

logger = logging.getLogger(__name__)


class UploadService:
    """ImageUploader for an unsigned-preset image host (multipart `file` + `upload_preset`)."""

    def __init__(
        self,
        upload_url: str,
        upload_preset: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        self._upload_url = require_non_empty(upload_url, "upload_url")
        self._upload_preset = require_non_empty(upload_preset, "upload_preset")
        self._session = session or new_http_session()
        self._timeout = timeout

    def upload(self, photo: CapturedPhoto) -> str:
        filename = f"selfie_{datetime.now().strftime('%Y%m%d_%H%M%S')}.jpg"
        try:
            response = self._session.post(
                self._upload_url,
                files={"file": (filename, photo.data, photo.content_type)},
                data={"upload_preset": self._upload_preset},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Photo upload failed: {e}")
            raise UploadFailed("Photo upload failed", cause=e) from e

        if not response.ok:
            detail = extract_server_message(response) or f"HTTP {response.status_code}"
            logger.error(f"Photo upload rejected: {detail}")
            raise UploadFailed(f"Photo upload failed: {detail}")

        try:
            secure_url = response.json().get("secure_url")
        except (ValueError, AttributeError) as e:
            raise UploadFailed("Photo upload returned an unreadable response", cause=e) from e

        if not secure_url:
            raise UploadFailed("Photo upload returned no URL")

        logger.info(f"Photo uploaded: {secure_url}")
        return str(secure_url)
