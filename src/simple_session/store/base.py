"""Abstract base class for session stores.

Every backend maps session IDs to ``Session`` records with a storage TTL.
``set`` is an atomic create-if-absent: when several callers race to store
the same ID exactly one succeeds and the rest observe
``SessionExistsError``.

Classes
-------
- SessionStore                   — abstract base for all backends
- StoreError                     — base class for store failures
- SessionNotFoundError           — no record for the ID
- SessionExistsError             — a record already exists for the ID
- InvalidSessionDataError        — the record cannot be serialized
- InvalidStoredSessionDataError  — the stored record cannot be decoded
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simple_session.session.state import Session


class StoreError(Exception):
    """Base class for session store failures.

    Raised directly for backend failures (e.g. connection errors) that fit
    none of the more specific subclasses.
    """


class SessionNotFoundError(StoreError, KeyError):
    """Raised when a session ID maps to no stored session."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} not found.")

    def __str__(self) -> str:
        return str(self.args[0])


class SessionExistsError(StoreError):
    """Raised when a session ID already maps to a stored session."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} already exists.")


class InvalidSessionDataError(StoreError, ValueError):
    """Raised when a session cannot be serialized for storage.

    Retrying cannot help: the payload type itself is unsupported.
    """


class InvalidStoredSessionDataError(StoreError, ValueError):
    """Raised when a stored record cannot be decoded into a session."""


class SessionStore(ABC):
    """Protocol for storing ``Session`` records keyed by session ID.

    Implementations must be safe for concurrent use from multiple threads.
    """

    @abstractmethod
    def get(self, session_id: str) -> Session:
        """Return the session stored under ``session_id``.

        Raises
        ------
        SessionNotFoundError
            If no session is stored under ``session_id``.
        InvalidStoredSessionDataError
            If the stored record cannot be decoded.
        """

    @abstractmethod
    def set(self, session_id: str, session: Session, ttl: timedelta) -> None:
        """Store ``session`` under ``session_id`` if no record exists.

        Parameters
        ----------
        session_id:
            Storage key.
        session:
            The session record.
        ttl:
            Storage lifetime, after which the backend may drop the record.

        Raises
        ------
        SessionExistsError
            If a session is already stored under ``session_id``.
        InvalidSessionDataError
            If ``session`` cannot be serialized by this backend.
        """

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove the session stored under ``session_id``.

        Raises
        ------
        SessionNotFoundError
            If no session is stored under ``session_id``.
        """
