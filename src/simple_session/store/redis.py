"""Redis session store.

Import-guarded: ``redis`` is an optional dependency.  Instantiating
``RedisStore`` without a client and without the ``redis`` package
installed raises ``ImportError`` with an install hint.

Sessions are stored as JSON strings.  Creation uses ``SET key value NX PX
ttl`` so that concurrent creators of the same ID race on the server, not in
this process.

Classes
-------
- RedisStore  — Redis key-value session store
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from simple_session.session.state import Session
from simple_session.store.base import (
    InvalidSessionDataError,
    InvalidStoredSessionDataError,
    SessionExistsError,
    SessionNotFoundError,
    SessionStore,
    StoreError,
)

_REDIS_IMPORT_ERROR = (
    "The 'redis' package is required for RedisStore. "
    "Install it with: pip install redis"
)


class RedisStore(SessionStore):
    """Persists sessions in a Redis instance.

    Each session is stored as a JSON string under the key
    ``<key_prefix><session_id>``.

    Parameters
    ----------
    client:
        A ready ``redis.Redis`` client.  When supplied, the connection
        parameters below are ignored.
    host:
        Redis server hostname. Defaults to ``"localhost"``.
    port:
        Redis server port. Defaults to ``6379``.
    db:
        Redis logical database index. Defaults to ``0``.
    password:
        Optional authentication password.
    url:
        If supplied, overrides host/port/db/password and is used as a
        Redis connection URL (e.g. ``"redis://localhost:6379/0"``).
    key_prefix:
        String prepended to all session keys.  Defaults to ``"session:"``.
    model:
        Session model used to decode stored records, e.g.
        ``Session[UserInfo]`` to decode the data payload into ``UserInfo``.
        Defaults to ``Session``, which leaves the payload as decoded JSON.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: str | None = None,
        url: str | None = None,
        key_prefix: str = "session:",
        model: type[Session] = Session,
    ) -> None:
        if client is None:
            try:
                import redis as redis_module  # noqa: PLC0415
            except ImportError as exc:
                raise ImportError(_REDIS_IMPORT_ERROR) from exc

            if url is not None:
                client = redis_module.Redis.from_url(url)
            else:
                client = redis_module.Redis(host=host, port=port, db=db, password=password)
        self._client = client
        self._key_prefix = key_prefix
        self._model = model

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _key(self, session_id: str) -> str:
        """Return the full Redis key for ``session_id``."""
        return f"{self._key_prefix}{session_id}"

    @staticmethod
    def _backend_error(action: str, exc: Exception) -> StoreError:
        return StoreError(f"Failed to {action} session in Redis: {exc}")

    # ------------------------------------------------------------------
    # SessionStore interface
    # ------------------------------------------------------------------

    def get(self, session_id: str) -> Session:
        """Return the decoded session for ``session_id``.

        Raises
        ------
        SessionNotFoundError
            If no key exists for ``session_id``.
        InvalidStoredSessionDataError
            If the stored value does not decode into ``model``.
        StoreError
            If the Redis call fails.
        """
        try:
            raw = self._client.get(self._key(session_id))
        except Exception as exc:  # noqa: BLE001
            raise self._backend_error("read", exc) from exc
        if raw is None:
            raise SessionNotFoundError(session_id)
        try:
            return self._model.model_validate_json(raw)
        except ValidationError as exc:
            raise InvalidStoredSessionDataError(
                f"Failed to decode stored session {session_id!r}: {exc}"
            ) from exc

    def set(self, session_id: str, session: Session, ttl: timedelta) -> None:
        """Store ``session`` under ``session_id`` with ``SET NX PX``.

        Raises
        ------
        InvalidSessionDataError
            If ``session`` cannot be serialized to JSON.
        SessionExistsError
            If the key already exists.
        StoreError
            If the Redis call fails.
        """
        try:
            payload = session.model_dump_json()
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise InvalidSessionDataError(
                f"Failed to serialize session {session_id!r}: {exc}"
            ) from exc
        ttl_ms = max(1, int(ttl.total_seconds() * 1000))
        try:
            created = self._client.set(self._key(session_id), payload, nx=True, px=ttl_ms)
        except Exception as exc:  # noqa: BLE001
            raise self._backend_error("store", exc) from exc
        if not created:
            raise SessionExistsError(session_id)

    def delete(self, session_id: str) -> None:
        """Remove the key for ``session_id``.

        Raises
        ------
        SessionNotFoundError
            If no key exists for ``session_id``.
        StoreError
            If the Redis call fails.
        """
        try:
            deleted = self._client.delete(self._key(session_id))
        except Exception as exc:  # noqa: BLE001
            raise self._backend_error("delete", exc) from exc
        if deleted != 1:
            raise SessionNotFoundError(session_id)

    def __repr__(self) -> str:
        return f"RedisStore(key_prefix={self._key_prefix!r}, model={self._model.__name__})"
