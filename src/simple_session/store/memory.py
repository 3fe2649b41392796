"""In-memory session store.

Stores sessions in a plain Python dict guarded by a single lock.  All data
is lost when the process exits.  This store is primarily useful for tests
and for deployments without an external key-value service.

Classes
-------
- MemoryStore  — dict-backed store with lazy expiry-based eviction
"""
from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable

from simple_session.store.base import SessionExistsError, SessionNotFoundError, SessionStore
from simple_session.store.eviction import EvictionQueue

if TYPE_CHECKING:
    from simple_session.session.state import Session


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore(SessionStore):
    """Ephemeral, in-process session store.

    Sessions are stored by reference, not copied: the object returned by
    ``get`` is the object passed to ``set``.  Callers must not rely on this
    aliasing, since other backends return independent copies.

    Expired records are evicted on entry to every public method.  Deleting a
    record leaves its eviction entry behind; the entry is discarded when it
    expires.

    Parameters
    ----------
    clock:
        Returns the current time.  Overridden in tests to exercise eviction.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self.clock: Callable[[], datetime] = clock or _utcnow
        self._lock = threading.Lock()
        self._items: dict[str, Session] = {}
        self._evictions = EvictionQueue()

    def _evict(self, now: datetime) -> None:
        while self._evictions and self._evictions.peek().expires < now:
            self._items.pop(self._evictions.pop().key, None)

    # ------------------------------------------------------------------
    # SessionStore interface
    # ------------------------------------------------------------------

    def get(self, session_id: str) -> Session:
        """Return the session for ``session_id``.

        Raises
        ------
        SessionNotFoundError
            If ``session_id`` is absent or has expired.
        """
        with self._lock:
            self._evict(self.clock())
            try:
                return self._items[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None

    def set(self, session_id: str, session: Session, ttl: timedelta) -> None:
        """Store ``session`` under ``session_id`` until ``now + ttl``.

        Raises
        ------
        SessionExistsError
            If an unexpired session is already stored under ``session_id``.
        """
        with self._lock:
            now = self.clock()
            self._evict(now)
            if session_id in self._items:
                raise SessionExistsError(session_id)
            self._items[session_id] = session
            self._evictions.push(session_id, now + ttl)

    def delete(self, session_id: str) -> None:
        """Remove ``session_id`` from the store.

        Raises
        ------
        SessionNotFoundError
            If ``session_id`` is absent or has expired.
        """
        with self._lock:
            self._evict(self.clock())
            if session_id not in self._items:
                raise SessionNotFoundError(session_id)
            del self._items[session_id]

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            self._evict(self.clock())
            return len(self._items)

    def __repr__(self) -> str:
        return f"MemoryStore(sessions={len(self._items)})"
