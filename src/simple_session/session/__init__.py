"""Session management subpackage.

Public surface
--------------
- Session               — frozen session record (generic over its payload)
- SessionOptions        — manager configuration
- SessionManager        — create / look up / clear sessions, verify CSRF
- SessionMiddleware     — resolve a session for every request
- SessionCreationError  — creation failed within the retry budget
- SessionExpiredError   — stored session is past its expiration
- CSRFTokenError        — CSRF token invalid for the session
"""
from __future__ import annotations

from simple_session.session.state import Session
from simple_session.session.options import SessionOptions
from simple_session.session.manager import (
    CSRFTokenError,
    SessionCreationError,
    SessionExpiredError,
    SessionManager,
)
from simple_session.session.middleware import SessionMiddleware

__all__ = [
    "CSRFTokenError",
    "Session",
    "SessionCreationError",
    "SessionExpiredError",
    "SessionManager",
    "SessionMiddleware",
    "SessionOptions",
]
