"""Session manager configuration.

Classes
-------
- SessionOptions  — tunable knobs for ``SessionManager``
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from simple_session.http import Cookie, create_strict_cookie

DEFAULT_TTL: timedelta = timedelta(minutes=30)
DEFAULT_ID_LEN: int = 16
DEFAULT_SESSION_COOKIE_NAME: str = "session"
DEFAULT_GRACE_PERIOD: timedelta = timedelta(minutes=10)


class SessionOptions(BaseModel):
    """Configuration parameters for ``SessionManager``.

    Parameters
    ----------
    ttl:
        How long any given session is valid.  Sessions are never extended.
        Default: 30 minutes.
    id_len:
        Length in bytes of the random part of session IDs and CSRF tokens.
        Default: 16.
    session_cookie_name:
        Name of the session ID cookie.  Together with ``create_cookie`` this
        can be used for a secure name prefix such as ``"__Host-"``.
        Default: ``"session"``.
    create_cookie:
        Factory ``(name, value, expires) -> Cookie`` for the session cookie,
        for granular control of attributes such as Path.
        Default: ``create_strict_cookie``.
    on_create:
        Callback ``(response, session)`` invoked after a session is created,
        e.g. to add a CSRF cookie.  Default: None.
    storage_grace_period:
        Added to ``ttl`` for the store TTL so storage never expires a record
        before the session logically expires.  Default: 10 minutes.
    cookie_grace_period:
        Added to ``ttl`` for the cookie expiry.  Default: 10 minutes.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ttl: timedelta = DEFAULT_TTL
    id_len: int = Field(default=DEFAULT_ID_LEN, ge=1)
    session_cookie_name: str = Field(default=DEFAULT_SESSION_COOKIE_NAME, min_length=1)
    create_cookie: Callable[[str, str, datetime], Cookie] = create_strict_cookie
    on_create: Optional[Callable[[Any, Any], None]] = None
    storage_grace_period: timedelta = DEFAULT_GRACE_PERIOD
    cookie_grace_period: timedelta = DEFAULT_GRACE_PERIOD

    @field_validator("ttl")
    @classmethod
    def _ttl_positive(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("ttl must be positive")
        return value

    @field_validator("storage_grace_period", "cookie_grace_period")
    @classmethod
    def _grace_non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("grace period must not be negative")
        return value
