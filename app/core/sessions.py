"""
Server-side session store.

A session maps an opaque random token (carried in an HTTP-only cookie) to
the logged-in user's id and role. Sessions are created on login, destroyed
on logout and expire after a fixed TTL.

Two backends are available: an in-process dictionary (single worker,
tests) and Redis (shared between workers).
"""

import logging
import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import redis
from pydantic import BaseModel

from app.core.config import Settings
from app.models.user import UserRole

logger = logging.getLogger(__name__)


class SessionStoreError(Exception):
    """Raised when the session backend cannot be reached or written."""


class SessionData(BaseModel):
    user_id: int
    role: UserRole
    expires_at: datetime

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at


class SessionStore:
    """Abstract base class for session stores"""

    def __init__(self, ttl_seconds: int = 86400):
        self.ttl_seconds = ttl_seconds

    def create(self, user_id: int, role: UserRole) -> str:
        """Start a session and return its token"""
        raise NotImplementedError

    def get(self, token: str) -> Optional[SessionData]:
        """Return the live session for a token, or None if unknown/expired"""
        raise NotImplementedError

    def destroy(self, token: str) -> bool:
        """End a session. Returns False if there was nothing to end"""
        raise NotImplementedError

    def _new_session(self, user_id: int, role: UserRole) -> SessionData:
        return SessionData(
            user_id=user_id,
            role=role,
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=self.ttl_seconds),
        )

    @staticmethod
    def _new_token() -> str:
        return secrets.token_urlsafe(32)


class MemorySessionStore(SessionStore):
    """In-process session store guarded by a lock"""

    def __init__(self, ttl_seconds: int = 86400):
        super().__init__(ttl_seconds)
        self._sessions: Dict[str, SessionData] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int, role: UserRole) -> str:
        token = self._new_token()
        with self._lock:
            self._purge_expired_locked()
            self._sessions[token] = self._new_session(user_id, role)
        return token

    def get(self, token: str) -> Optional[SessionData]:
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired:
                del self._sessions[token]
                return None
            return session.model_copy()

    def destroy(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        """Drop all expired sessions. Returns how many were removed."""
        with self._lock:
            return self._purge_expired_locked()

    def _purge_expired_locked(self) -> int:
        # Caller holds self._lock
        expired = [token for token, session in self._sessions.items() if session.is_expired]
        for token in expired:
            del self._sessions[token]
        return len(expired)


class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Each session is one key holding the JSON-encoded SessionData, written
    with SETEX so Redis expires it after the TTL.
    """

    KEY_PREFIX = "session:"

    def __init__(self, client: redis.Redis, ttl_seconds: int = 86400):
        super().__init__(ttl_seconds)
        self.redis_client = client

    def _key(self, token: str) -> str:
        return f"{self.KEY_PREFIX}{token}"

    def create(self, user_id: int, role: UserRole) -> str:
        token = self._new_token()
        session = self._new_session(user_id, role)
        try:
            self.redis_client.setex(self._key(token), self.ttl_seconds, session.model_dump_json())
        except redis.RedisError as e:
            logger.error(f"Redis session create error: {e}")
            raise SessionStoreError("Could not create session") from e
        return token

    def get(self, token: str) -> Optional[SessionData]:
        try:
            raw = self.redis_client.get(self._key(token))
        except redis.RedisError as e:
            logger.error(f"Redis session read error: {e}")
            raise SessionStoreError("Could not read session") from e

        if raw is None:
            return None
        session = SessionData.model_validate_json(raw)
        return None if session.is_expired else session

    def destroy(self, token: str) -> bool:
        try:
            return bool(self.redis_client.delete(self._key(token)))
        except redis.RedisError as e:
            logger.error(f"Redis session delete error: {e}")
            raise SessionStoreError("Could not destroy session") from e


def get_session_store(settings: Settings) -> SessionStore:
    """Get session store based on SESSION_BACKEND setting"""
    backend = settings.SESSION_BACKEND.lower()
    if backend == "memory":
        return MemorySessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)
    if backend == "redis":
        client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            decode_responses=True
        )
        return RedisSessionStore(client, ttl_seconds=settings.SESSION_TTL_SECONDS)
    raise ValueError(f"Unknown SESSION_BACKEND: {settings.SESSION_BACKEND}")
