"""Cookie transport types.

The session manager does not depend on any web framework.  It reads the
session cookie through ``CookieRequest`` and writes cookies and error
responses through ``CookieResponse``; adapters for a concrete framework
implement these two protocols.

Classes
-------
- Cookie          — a Set-Cookie directive
- CookieRequest   — protocol: read a named cookie from a request
- CookieResponse  — protocol: write a cookie or an error onto a response

Functions
---------
- create_strict_cookie  — Secure, HttpOnly, SameSite=Strict cookie factory
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Protocol


@dataclass(frozen=True)
class Cookie:
    """A cookie to be set on an outbound response.

    Parameters
    ----------
    name:
        Cookie name.
    value:
        Cookie value.
    expires:
        Absolute expiry time.  ``None`` makes a browser-session cookie.
    secure:
        Restrict the cookie to HTTPS.
    http_only:
        Hide the cookie from client-side scripts.
    same_site:
        ``"Strict"``, ``"Lax"``, ``"None"`` or ``None`` to omit.
    path:
        Optional Path attribute.
    domain:
        Optional Domain attribute.
    """

    name: str
    value: str
    expires: datetime | None = None
    secure: bool = False
    http_only: bool = False
    same_site: str | None = None
    path: str | None = None
    domain: str | None = None

    def to_header(self) -> str:
        """Render the cookie as a ``Set-Cookie`` header value."""
        parts = [f"{self.name}={self.value}"]
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.expires is not None:
            expires = self.expires.astimezone(timezone.utc)
            parts.append(f"Expires={format_datetime(expires, usegmt=True)}")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.same_site:
            parts.append(f"SameSite={self.same_site}")
        return "; ".join(parts)


def create_strict_cookie(name: str, value: str, expires: datetime) -> Cookie:
    """Return a Secure, HttpOnly, SameSite=Strict cookie with no Path or Domain.

    Consider using this as a base for a custom ``create_cookie`` factory,
    e.g. with ``dataclasses.replace(cookie, path="/")``.
    """
    return Cookie(
        name=name,
        value=value,
        expires=expires,
        secure=True,
        http_only=True,
        same_site="Strict",
    )


class CookieRequest(Protocol):
    """Inbound request capable of returning a cookie by name."""

    def get_cookie(self, name: str) -> str | None:
        """Return the value of cookie ``name``, or None if absent."""
        ...


class CookieResponse(Protocol):
    """Outbound response capable of carrying cookies and error statuses."""

    def set_cookie(self, cookie: Cookie) -> None:
        """Add a Set-Cookie directive for ``cookie``."""
        ...

    def send_error(self, status: int, message: str) -> None:
        """Reply with an error ``status`` and plain-text ``message``."""
        ...
