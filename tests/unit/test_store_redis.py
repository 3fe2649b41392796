"""Unit tests for simple_session.store.redis.RedisStore.

All tests use a MagicMock in place of the real redis client so no
Redis server is required.  The ``redis`` package is also mocked at the
import level where construction paths need it.
"""
from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from fakes import Greeting
from simple_session.session.state import Session
from simple_session.store.base import (
    InvalidSessionDataError,
    InvalidStoredSessionDataError,
    SessionExistsError,
    SessionNotFoundError,
    StoreError,
)
from simple_session.store.redis import RedisStore

EXPIRATION = datetime(2025, 1, 1, 12, 30, tzinfo=timezone.utc)


def _session(data: Any = None) -> Session:
    return Session(id="sid-1", data=data, expiration=EXPIRATION, csrf_token="csrf-1")


@pytest.fixture()
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def store(client: MagicMock) -> RedisStore:
    return RedisStore(client, key_prefix="app:")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestRedisStoreConstruction:
    def test_import_error_when_redis_missing(self) -> None:
        with patch.dict(sys.modules, {"redis": None}):  # type: ignore[dict-item]
            with pytest.raises(ImportError, match="pip install redis"):
                RedisStore()

    def test_injected_client_skips_import(self, client: MagicMock) -> None:
        with patch.dict(sys.modules, {"redis": None}):  # type: ignore[dict-item]
            store = RedisStore(client)
        assert store._client is client

    def test_builds_client_from_parameters(self) -> None:
        mock_redis_module = MagicMock()
        with patch.dict(sys.modules, {"redis": mock_redis_module}):
            RedisStore(host="cache", port=6380, db=2, password="pw")
        mock_redis_module.Redis.assert_called_once_with(
            host="cache", port=6380, db=2, password="pw"
        )

    def test_builds_client_from_url(self) -> None:
        mock_redis_module = MagicMock()
        with patch.dict(sys.modules, {"redis": mock_redis_module}):
            store = RedisStore(url="redis://localhost:6379/0")
        mock_redis_module.Redis.from_url.assert_called_once_with("redis://localhost:6379/0")
        assert store._client is mock_redis_module.Redis.from_url.return_value

    def test_default_prefix(self, client: MagicMock) -> None:
        assert RedisStore(client)._key("abc") == "session:abc"

    def test_repr(self, store: RedisStore) -> None:
        assert "app:" in repr(store)


# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------


class TestRedisStoreSet:
    def test_set_uses_nx_with_ttl(self, store: RedisStore, client: MagicMock) -> None:
        client.set.return_value = True
        session = _session()
        store.set("sid-1", session, timedelta(minutes=40))
        client.set.assert_called_once_with(
            "app:sid-1", session.model_dump_json(), nx=True, px=40 * 60 * 1000
        )

    def test_set_existing_raises_exists(self, store: RedisStore, client: MagicMock) -> None:
        client.set.return_value = None
        with pytest.raises(SessionExistsError):
            store.set("sid-1", _session(), timedelta(minutes=40))

    def test_unserializable_data_raises_invalid(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        with pytest.raises(InvalidSessionDataError):
            store.set("sid-1", _session(data=object()), timedelta(minutes=40))
        client.set.assert_not_called()

    def test_backend_failure_raises_store_error(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        client.set.side_effect = ConnectionError("down")
        with pytest.raises(StoreError) as excinfo:
            store.set("sid-1", _session(), timedelta(minutes=40))
        assert not isinstance(excinfo.value, SessionExistsError)
        assert isinstance(excinfo.value.__cause__, ConnectionError)

    def test_payload_model_serialized(self, store: RedisStore, client: MagicMock) -> None:
        client.set.return_value = True
        store.set("sid-1", _session(data=Greeting(greeting="hola")), timedelta(minutes=1))
        payload = client.set.call_args.args[1]
        assert '"greeting":"hola"' in payload


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------


class TestRedisStoreGet:
    def test_get_decodes_session(self, store: RedisStore, client: MagicMock) -> None:
        session = _session(data={"greeting": "hola"})
        client.get.return_value = session.model_dump_json().encode("utf-8")
        loaded = store.get("sid-1")
        client.get.assert_called_once_with("app:sid-1")
        assert loaded == session
        assert loaded.expiration == EXPIRATION

    def test_get_decodes_typed_payload(self, client: MagicMock) -> None:
        store = RedisStore(client, model=Session[Greeting])
        client.get.return_value = _session(data=Greeting(greeting="hola")).model_dump_json()
        loaded = store.get("sid-1")
        assert isinstance(loaded.data, Greeting)
        assert loaded.data.greeting == "hola"

    def test_get_pre_session(self, store: RedisStore, client: MagicMock) -> None:
        client.get.return_value = _session().model_dump_json()
        assert store.get("sid-1").is_pre_session

    def test_get_missing_raises_not_found(self, store: RedisStore, client: MagicMock) -> None:
        client.get.return_value = None
        with pytest.raises(SessionNotFoundError):
            store.get("sid-1")

    def test_get_corrupt_raises_invalid_stored(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        client.get.return_value = b"not json"
        with pytest.raises(InvalidStoredSessionDataError):
            store.get("sid-1")

    def test_get_wrong_shape_raises_invalid_stored(
        self, client: MagicMock
    ) -> None:
        store = RedisStore(client, model=Session[Greeting])
        client.get.return_value = _session(data={"nope": 1}).model_dump_json()
        with pytest.raises(InvalidStoredSessionDataError):
            store.get("sid-1")

    def test_backend_failure_raises_store_error(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        client.get.side_effect = TimeoutError("slow")
        with pytest.raises(StoreError):
            store.get("sid-1")


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestRedisStoreDelete:
    def test_delete_existing(self, store: RedisStore, client: MagicMock) -> None:
        client.delete.return_value = 1
        store.delete("sid-1")
        client.delete.assert_called_once_with("app:sid-1")

    def test_delete_missing_raises_not_found(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        client.delete.return_value = 0
        with pytest.raises(SessionNotFoundError):
            store.delete("sid-1")

    def test_backend_failure_raises_store_error(
        self, store: RedisStore, client: MagicMock
    ) -> None:
        client.delete.side_effect = ConnectionError("down")
        with pytest.raises(StoreError):
            store.delete("sid-1")
