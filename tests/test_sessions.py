"""
Tests for the session stores.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
import redis
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.sessions import (
    MemorySessionStore,
    RedisSessionStore,
    SessionData,
    SessionStoreError,
    get_session_store,
)
from app.models.user import UserRole
from conftest import register
from main import create_app


class TestMemorySessionStore:

    def test_create_and_get(self):
        store = MemorySessionStore(ttl_seconds=60)

        token = store.create(7, UserRole.EDITOR)
        session = store.get(token)

        assert session.user_id == 7
        assert session.role == UserRole.EDITOR

    def test_tokens_are_unique(self):
        store = MemorySessionStore()

        tokens = {store.create(1, UserRole.CREATOR) for _ in range(100)}

        assert len(tokens) == 100

    def test_unknown_token(self):
        assert MemorySessionStore().get("missing") is None

    def test_destroy(self):
        store = MemorySessionStore()
        token = store.create(1, UserRole.CREATOR)

        assert store.destroy(token) is True
        assert store.get(token) is None
        assert store.destroy(token) is False

    def test_expired_session_is_dropped(self):
        store = MemorySessionStore(ttl_seconds=0)

        token = store.create(1, UserRole.CREATOR)

        assert store.get(token) is None

    def test_purge_expired(self):
        store = MemorySessionStore(ttl_seconds=0)
        store.create(1, UserRole.CREATOR)
        store.create(2, UserRole.EDITOR)

        # The second create already dropped the first session
        assert store.purge_expired() == 1
        assert store.purge_expired() == 0

    def test_create_evicts_expired_sessions(self):
        """Abandoned expired sessions do not accumulate"""
        store = MemorySessionStore(ttl_seconds=0)

        for user_id in range(100):
            store.create(user_id, UserRole.EDITOR)

        assert len(store._sessions) <= 1

    def test_create_keeps_live_sessions(self):
        store = MemorySessionStore(ttl_seconds=3600)

        tokens = [store.create(user_id, UserRole.EDITOR) for user_id in range(5)]

        assert all(store.get(token) is not None for token in tokens)


class TestAbandonedLogins:

    def test_store_stays_bounded_across_logins(self, settings, mem_storage, editor_data):
        """Logins from clients that never come back do not pile up"""
        store = MemorySessionStore(ttl_seconds=0)
        app = create_app(settings, mem_storage, store)

        with TestClient(app) as client:
            register(client, editor_data)
            for _ in range(100):
                client.cookies.clear()
                response = client.post("/api/auth/login", json={"username": "bob", "password": "secret123"})
                assert response.status_code == 200

        assert len(store._sessions) <= 1


class TestRedisSessionStore:
    """Redis store against a mocked client"""

    def test_create_uses_setex_with_ttl(self):
        client = MagicMock()
        store = RedisSessionStore(client, ttl_seconds=120)

        token = store.create(3, UserRole.EDITOR)

        key, ttl, payload = client.setex.call_args.args
        assert key == f"session:{token}"
        assert ttl == 120
        assert SessionData.model_validate_json(payload).user_id == 3

    def test_get_decodes_session(self):
        session = SessionData(
            user_id=3,
            role=UserRole.EDITOR,
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=5),
        )
        client = MagicMock()
        client.get.return_value = session.model_dump_json()
        store = RedisSessionStore(client)

        assert store.get("abc") == session
        client.get.assert_called_once_with("session:abc")

    def test_get_missing(self):
        client = MagicMock()
        client.get.return_value = None

        assert RedisSessionStore(client).get("abc") is None

    def test_destroy(self):
        client = MagicMock()
        client.delete.return_value = 1

        assert RedisSessionStore(client).destroy("abc") is True
        client.delete.assert_called_once_with("session:abc")

    def test_connection_errors_are_wrapped(self):
        client = MagicMock()
        client.delete.side_effect = redis.ConnectionError("down")

        with pytest.raises(SessionStoreError):
            RedisSessionStore(client).destroy("abc")


class TestSessionStoreFactory:

    def test_memory(self):
        store = get_session_store(Settings(_env_file=None, SESSION_BACKEND="memory", SESSION_TTL_SECONDS=30))

        assert isinstance(store, MemorySessionStore)
        assert store.ttl_seconds == 30

    def test_redis(self):
        # redis.Redis connects lazily, so no server is needed here
        store = get_session_store(Settings(_env_file=None, SESSION_BACKEND="redis"))

        assert isinstance(store, RedisSessionStore)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_session_store(Settings(_env_file=None, SESSION_BACKEND="memcached"))
