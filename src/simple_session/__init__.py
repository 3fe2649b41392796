"""simple-session — Authenticated, CSRF-capable user sessions for web apps.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import simple_session
>>> simple_session.__version__
'0.1.0'
"""
from __future__ import annotations

# HTTP collaborators
from simple_session.http import Cookie, CookieRequest, CookieResponse, create_strict_cookie

# Retry
from simple_session.retry import (
    Backoff,
    InvalidPolicyError,
    RetryAbortedError,
    RetryContext,
    RetryError,
    RetryExhaustedError,
)

# Tokens
from simple_session.token import (
    Authenticator,
    InvalidTokenError,
    MalformedTokenError,
    TokenError,
    UnsupportedVersionError,
    derive_keys,
)

# Session core
from simple_session.session import (
    CSRFTokenError,
    Session,
    SessionCreationError,
    SessionExpiredError,
    SessionManager,
    SessionMiddleware,
    SessionOptions,
)

# Stores
from simple_session.store import (
    EvictionQueue,
    InvalidSessionDataError,
    InvalidStoredSessionDataError,
    MemoryStore,
    SessionExistsError,
    SessionNotFoundError,
    SessionStore,
    StoreError,
)

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # HTTP
    "Cookie",
    "CookieRequest",
    "CookieResponse",
    "create_strict_cookie",
    # Retry
    "Backoff",
    "InvalidPolicyError",
    "RetryAbortedError",
    "RetryContext",
    "RetryError",
    "RetryExhaustedError",
    # Tokens
    "Authenticator",
    "InvalidTokenError",
    "MalformedTokenError",
    "TokenError",
    "UnsupportedVersionError",
    "derive_keys",
    # Session core
    "CSRFTokenError",
    "Session",
    "SessionCreationError",
    "SessionExpiredError",
    "SessionManager",
    "SessionMiddleware",
    "SessionOptions",
    # Stores
    "EvictionQueue",
    "InvalidSessionDataError",
    "InvalidStoredSessionDataError",
    "MemoryStore",
    "SessionExistsError",
    "SessionNotFoundError",
    "SessionStore",
    "StoreError",
]
