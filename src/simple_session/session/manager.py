"""Session lifecycle management.

``SessionManager`` creates time-bounded ``Session`` records, stores them in
a ``SessionStore`` and sets the session cookie that refers to them.  Each
session carries an arbitrary data payload (e.g. user identity) and a CSRF
token.  Session IDs and CSRF tokens are authenticated with HMAC-SHA256
under separate keys derived from a single root key.

Sessions are never extended or mutated: replacing the payload means
creating a new session with a new ID.

Classes
-------
- SessionManager        — create / look up / clear sessions
- SessionCreationError  — a session could not be created
- SessionExpiredError   — a stored session is past its expiration
- CSRFTokenError        — a CSRF token is invalid for the session
"""
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Callable

from simple_session.http import CookieRequest, CookieResponse
from simple_session.retry import Backoff, InvalidPolicyError, RetryContext, RetryError
from simple_session.session.options import SessionOptions
from simple_session.session.state import Session
from simple_session.store.base import (
    InvalidSessionDataError,
    SessionExistsError,
    SessionNotFoundError,
    SessionStore,
    StoreError,
)
from simple_session.token import (
    CSRF_TOKEN_INFO,
    SESSION_TOKEN_INFO,
    Authenticator,
    TokenError,
    derive_keys,
)

logger = logging.getLogger(__name__)

# Max 4 attempts, with inter-attempt delay ~100ms, ~200ms, ~400ms (+/- 20%).
DEFAULT_CREATE_ATTEMPTS: int = 4
DEFAULT_RETRY_BASE: float = 0.1
DEFAULT_RETRY_GROWTH: float = 2.0
DEFAULT_RETRY_JITTER: float = 0.2


class SessionCreationError(RuntimeError):
    """Raised when a new session could not be stored within the retry budget."""


class SessionExpiredError(Exception):
    """Raised when a stored session is past its expiration."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} has expired.")


class CSRFTokenError(ValueError):
    """Raised when a CSRF token is inauthentic or not bound to the session."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionManager:
    """Create, look up, and clear user sessions.

    Parameters
    ----------
    store:
        Backend holding session records.
    key:
        Root key from which the session-ID and CSRF MAC keys are derived.
    options:
        Tunable behaviour; defaults to ``SessionOptions()``.
    clock:
        Returns the current time.  Overridden in tests.
    retry_policy:
        Backoff policy for session creation.  Defaults to a fresh
        ``Backoff(0.1, 2.0, 0.2)`` per manager.
    attempts:
        Attempt budget for session creation.
    """

    def __init__(
        self,
        store: SessionStore,
        key: bytes,
        options: SessionOptions | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        retry_policy: Backoff | None = None,
        attempts: int = DEFAULT_CREATE_ATTEMPTS,
    ) -> None:
        session_key, csrf_key = derive_keys(key, [SESSION_TOKEN_INFO, CSRF_TOKEN_INFO])
        self.clock: Callable[[], datetime] = clock or _utcnow
        self._store = store
        self._options = options or SessionOptions()
        self._retry_policy = retry_policy or Backoff(
            base=DEFAULT_RETRY_BASE, growth=DEFAULT_RETRY_GROWTH, jitter=DEFAULT_RETRY_JITTER
        )
        self._attempts = attempts
        self._session_auth = Authenticator(session_key)
        self._csrf_auth = Authenticator(csrf_key)

    @property
    def options(self) -> SessionOptions:
        """The options this manager was configured with."""
        return self._options

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _random_payload(self) -> bytes:
        return secrets.token_bytes(self._options.id_len)

    def _create_session_token(self) -> str:
        return self._session_auth.create(self._random_payload())

    def _create_csrf_token(self) -> str:
        return self._csrf_auth.create(self._random_payload())

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, session_id: str) -> Session:
        """Return the unexpired session stored under ``session_id``.

        Raises
        ------
        SessionNotFoundError
            If the store holds no session for ``session_id``.
        SessionExpiredError
            If the stored session is past its expiration.
        StoreError
            For any other store failure.
        """
        session = self._store.get(session_id)
        if session.is_expired(self.clock()):
            raise SessionExpiredError(session_id)
        return session

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(self, response: CookieResponse, data: Any = None) -> Session:
        """Create and store a new session, then set its cookie on ``response``.

        Parameters
        ----------
        response:
            Receives the session cookie and is passed to ``on_create``.
        data:
            Application payload.  ``None`` creates a pre-session.

        Returns
        -------
        Session
            The stored session.

        Raises
        ------
        SessionCreationError
            If the session could not be stored within the attempt budget, or
            ``data`` cannot be serialized by the store, or the retry policy or
            attempt budget is invalid.
        """
        created: list[Session] = []

        def attempt(ctx: RetryContext) -> None:
            # Token generation draws from the OS entropy pool; a failure there
            # is worth backing off and retrying.
            try:
                session_id = self._create_session_token()
                csrf_token = self._create_csrf_token()
            except OSError as exc:
                logger.error("Failed to generate session tokens: %s", exc)
                return
            session = Session(
                id=session_id,
                data=data,
                expiration=self.clock() + self._options.ttl,
                csrf_token=csrf_token,
            )
            ttl = self._options.ttl + self._options.storage_grace_period
            try:
                self._store.set(session_id, session, ttl)
            except SessionExistsError:
                logger.debug("Session ID collision, retrying")
                return
            except InvalidSessionDataError as exc:
                # The payload type cannot be stored; retrying cannot help.
                logger.error("Failed to store new session: %s", exc)
                ctx.abort()
                return
            except StoreError as exc:
                logger.error("Failed to store new session: %s", exc)
                return
            created.append(session)
            ctx.done()

        try:
            self._retry_policy.run(attempt, self._attempts)
        except (RetryError, InvalidPolicyError) as exc:
            raise SessionCreationError(f"Failed to create session: {exc}") from exc

        session = created[0]
        self._set_session_cookie(response, session.id)
        if self._options.on_create is not None:
            self._options.on_create(response, session)
        logger.debug("Created session (pre-session=%s)", session.is_pre_session)
        return session

    def clear(self, response: CookieResponse, session_id: str) -> Session:
        """Replace session ``session_id`` with a fresh pre-session.

        The new pre-session is stored and its cookie set on ``response``.
        Deleting the prior session is best effort: a missing session is
        ignored silently and other store failures are only logged.

        Raises
        ------
        SessionCreationError
            If the new pre-session could not be created.
        """
        pre_session = self.create(response, None)
        try:
            self._store.delete(session_id)
        except SessionNotFoundError:
            pass
        except StoreError as exc:
            logger.error("Failed to delete data for session %s: %s", session_id, exc)
        return pre_session

    # ------------------------------------------------------------------
    # Cookies
    # ------------------------------------------------------------------

    def _set_session_cookie(self, response: CookieResponse, session_id: str) -> None:
        expires = self.clock() + self._options.ttl + self._options.cookie_grace_period
        cookie = self._options.create_cookie(
            self._options.session_cookie_name, session_id, expires
        )
        response.set_cookie(cookie)

    def session_id_from_request(self, request: CookieRequest) -> str | None:
        """Return the authenticated session ID cookie value, if any.

        Returns None when the cookie is absent.

        Raises
        ------
        TokenError
            If the cookie is present but fails verification.
        """
        value = request.get_cookie(self._options.session_cookie_name)
        if value is None:
            return None
        self._session_auth.verify(value)
        return value

    def session_from_request(self, request: CookieRequest) -> Session | None:
        """Return the valid session referenced by ``request``, or None.

        Every failure mode (no cookie, bad cookie, unknown, expired, or
        unreadable session) yields None.
        """
        try:
            session_id = self.session_id_from_request(request)
        except TokenError as exc:
            logger.error("Failed to verify session cookie: %s", exc)
            return None
        if session_id is None:
            return None
        try:
            return self.lookup(session_id)
        except (StoreError, SessionExpiredError) as exc:
            logger.debug("Failed to look up session for SID %s: %s", session_id, exc)
            return None

    def resolve(self, request: CookieRequest, response: CookieResponse) -> Session:
        """Return the request's session, creating a pre-session if needed.

        Raises
        ------
        SessionCreationError
            If a pre-session was needed but could not be created.
        """
        session = self.session_from_request(request)
        if session is None:
            session = self.create(response, None)
        return session

    def manage(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Wrap ``handler(request, response, session)`` with session handling.

        See ``SessionMiddleware``.
        """
        from simple_session.session.middleware import SessionMiddleware  # noqa: PLC0415

        return SessionMiddleware(self).wrap(handler)

    # ------------------------------------------------------------------
    # CSRF
    # ------------------------------------------------------------------

    def verify_session_csrf_token(self, token: str, session: Session) -> None:
        """Check that ``token`` is authentic and bound to ``session``.

        Raises
        ------
        CSRFTokenError
            If ``token`` fails authentication or differs from
            ``session.csrf_token``.  The two cases are not distinguished by
            type; the former chains the underlying ``TokenError``.
        """
        try:
            self._csrf_auth.verify(token)
        except TokenError as exc:
            raise CSRFTokenError(f"Failed to validate CSRF token: {exc}") from exc
        if not secrets.compare_digest(token, session.csrf_token):
            raise CSRFTokenError("CSRF token does not match the session-bound token.")

    def __repr__(self) -> str:
        return (
            f"SessionManager(store={self._store!r}, "
            f"cookie={self._options.session_cookie_name!r}, ttl={self._options.ttl})"
        )
