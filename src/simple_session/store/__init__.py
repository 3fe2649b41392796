"""Session store subpackage.

All stores implement the ``SessionStore`` ABC.  Import only what you need;
``RedisStore`` lives in ``simple_session.store.redis`` and guards its
third-party import so the package stays installable without ``redis``.

Public surface
--------------
- SessionStore                   — abstract base class
- MemoryStore                    — in-process dict with lazy eviction
- EvictionQueue                  — expiry-ordered min-heap
- StoreError                     — base error
- SessionNotFoundError           — missing session
- SessionExistsError             — ID already taken
- InvalidSessionDataError        — session not serializable
- InvalidStoredSessionDataError  — stored record not decodable
"""
from __future__ import annotations

from simple_session.store.base import (
    InvalidSessionDataError,
    InvalidStoredSessionDataError,
    SessionExistsError,
    SessionNotFoundError,
    SessionStore,
    StoreError,
)
from simple_session.store.eviction import EvictionEntry, EvictionQueue
from simple_session.store.memory import MemoryStore

__all__ = [
    "EvictionEntry",
    "EvictionQueue",
    "InvalidSessionDataError",
    "InvalidStoredSessionDataError",
    "MemoryStore",
    "SessionExistsError",
    "SessionNotFoundError",
    "SessionStore",
    "StoreError",
]
