"""Session-resolving request middleware.

Ensures a session exists for every request before the downstream handler
runs, defaulting to a pre-session so that CSRF protection is always
possible.  The resolved session is passed to the handler as an argument.

Classes
-------
- SessionMiddleware  — wraps ``handler(request, response, session)``
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from simple_session.http import CookieRequest, CookieResponse
from simple_session.session.manager import SessionCreationError, SessionManager
from simple_session.session.state import Session

logger = logging.getLogger(__name__)

R = TypeVar("R")

SessionHandler = Callable[[Any, Any, Session], R]

INTERNAL_ERROR_STATUS: int = 500


class SessionMiddleware:
    """Resolve the request's session and hand it to a handler.

    For each request the session cookie is read and verified, and the
    session it names is looked up.  If any step fails (no cookie, bad
    cookie, unknown or expired session) a new pre-session is created and
    its cookie set on the response.  If that creation fails the request is
    answered with a 500 and the handler is not invoked.

    It is framework-agnostic: adapters supply objects implementing
    ``CookieRequest`` and ``CookieResponse``.

    Parameters
    ----------
    manager:
        The session manager to delegate to.
    """

    def __init__(self, manager: SessionManager) -> None:
        self._manager = manager

    def handle(
        self,
        request: CookieRequest,
        response: CookieResponse,
        handler: SessionHandler[R],
    ) -> R | None:
        """Run ``handler`` with the request's session.

        Returns
        -------
        R | None
            The handler's return value, or None if no session could be
            created and an error response was sent instead.
        """
        try:
            session = self._manager.resolve(request, response)
        except SessionCreationError as exc:
            logger.error("Failed to create session: %s", exc)
            response.send_error(INTERNAL_ERROR_STATUS, "internal error")
            return None
        return handler(request, response, session)

    def wrap(self, handler: SessionHandler[R]) -> Callable[[Any, Any], R | None]:
        """Return a ``(request, response)`` callable running ``handler``."""

        @functools.wraps(handler)
        def wrapped(request: CookieRequest, response: CookieResponse) -> R | None:
            return self.handle(request, response, handler)

        return wrapped

    def __call__(self, handler: SessionHandler[R]) -> Callable[[Any, Any], R | None]:
        return self.wrap(handler)
