from __future__ import annotations

import json
import logging
import time
from typing import Any

import jwt

from .errors import SessionError
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

AUTH_SESSION_KEY = "user"
LOCAL_SESSION_KEY = "WINDOW_AUTH_SESSION"


def _parse_session(raw: str | None) -> dict[str, Any] | None:
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class SessionManager:
    """Logged-in user kept in session storage, mirrored to local storage."""

    def __init__(self, session_storage: KeyValueStorage, local_storage: KeyValueStorage):
        self._session = session_storage
        self._local = local_storage

    def get_logged_in_user(self) -> dict[str, Any] | None:
        return _parse_session(self._session.get(AUTH_SESSION_KEY))

    def set_logged_in_user(self, session: dict[str, Any] | None) -> None:
        if session is None:
            self._session.remove(AUTH_SESSION_KEY)
            self._local.remove(LOCAL_SESSION_KEY)
            logger.debug("session cleared, token removed")
            return
        if not isinstance(session, dict):
            raise SessionError(f"session must be a JSON object, got {type(session).__name__}")

        raw = json.dumps(session, ensure_ascii=False)
        self._session.set(AUTH_SESSION_KEY, raw)
        self._local.set(LOCAL_SESSION_KEY, raw)
        if session.get("token"):
            logger.debug("session stored, token attached")

    def set_user_in_session(self, changes: dict[str, Any]) -> None:
        current = self.get_logged_in_user()
        if current is None:
            return
        self.set_logged_in_user({**current, **changes})

    def token(self) -> str | None:
        user = self.get_logged_in_user()
        if not user:
            return None
        token = user.get("token")
        return token if isinstance(token, str) and token else None

    def is_user_authenticated(self, now: float | None = None) -> bool:
        token = self.token()
        if not token:
            return False
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError:
            return False
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return False
        return exp > (time.time() if now is None else now)

    def restore_session(self) -> bool:
        """Copy the persisted session back unless the current one has a token."""
        if self.token():
            return False
        stored = _parse_session(self._local.get(LOCAL_SESSION_KEY))
        if stored is None:
            return False
        self.set_logged_in_user(stored)
        logger.info("restored session from local storage")
        return True
