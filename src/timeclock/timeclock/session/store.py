from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from jose import JWTError, jwt

from ..common.datetime_utils import now_utc
from ..core.constants import SESSION_KEY
from ..core.enums import SessionState
from ..core.exceptions import InvalidToken
from .model import Credential, Identity
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)


def decode_identity(token: str, *, now: Optional[datetime] = None) -> Identity:
    """Decode the identity carried by a bearer token.

    The signature is not verified; the backend checks it on every call.
    """
    if not token or not token.strip():
        raise InvalidToken("Empty token")

    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError as e:
        raise InvalidToken(f"Token cannot be decoded: {e}") from e

    subject_id = claims.get("_id") or claims.get("sub")
    if not subject_id:
        raise InvalidToken("Token has no subject id")

    expires_at = None
    exp = claims.get("exp")
    if exp is not None:
        try:
            expires_at = datetime.fromtimestamp(int(exp), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidToken("Token has an invalid expiry") from e
        if expires_at <= (now or now_utc()):
            raise InvalidToken("Token has expired")

    return Identity(subject_id=str(subject_id), email=str(claims.get("email") or ""), expires_at=expires_at)


class SessionStore:
    """Holds the current credential and persists its token in one durable slot."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = SESSION_KEY,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._storage = storage
        self._key = key
        self._clock = clock
        self._credential: Optional[Credential] = None

    @property
    def state(self) -> SessionState:
        return SessionState.AUTHENTICATED if self._credential else SessionState.ANONYMOUS

    def load(self) -> Optional[Credential]:
        """Restore the session persisted by a previous run, if still usable."""
        token = self._storage.get(self._key)
        if not token:
            self._credential = None
            return None

        try:
            identity = decode_identity(token, now=self._clock())
        except InvalidToken as e:
            logger.warning(f"Discarding stored session: {e}")
            self.clear_credential()
            return None

        self._credential = Credential(token=token, identity=identity)
        logger.info(f"Restored session for {identity.email or identity.subject_id}")
        return self._credential

    def set_credential(self, token: str) -> Credential:
        identity = decode_identity(token, now=self._clock())
        credential = Credential(token=token, identity=identity)
        self._storage.set(self._key, token)
        self._credential = credential
        return credential

    def clear_credential(self) -> None:
        """Forget the credential. The in-memory state is cleared even if the slot cannot be removed."""
        self._credential = None
        try:
            self._storage.delete(self._key)
        except OSError as e:
            logger.error(f"Could not remove stored session: {e}")

    def current_credential(self) -> Optional[Credential]:
        return self._credential
