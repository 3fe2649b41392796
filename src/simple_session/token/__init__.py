"""Authenticated token subpackage.

Tokens are versioned by their backing codec.  ``Authenticator`` always
creates tokens in the current version and dispatches verification on the
version header a token declares, so older formats keep verifying after a
new version is added.

Public surface
--------------
- Authenticator            — create / verify tokens under one key
- derive_keys              — HKDF per-role key derivation
- TokenError               — base error
- MalformedTokenError      — structural failure
- UnsupportedVersionError  — unknown version header
- InvalidTokenError        — MAC mismatch
"""
from __future__ import annotations

from types import ModuleType

from simple_session.token import v0
from simple_session.token.errors import (
    InvalidTokenError,
    MalformedTokenError,
    TokenError,
    UnsupportedVersionError,
)
from simple_session.token.keys import CSRF_TOKEN_INFO, SESSION_TOKEN_INFO, derive_keys

_CODECS: dict[str, ModuleType] = {v0.VERSION: v0}
_CURRENT: ModuleType = v0


class Authenticator:
    """Create and verify authenticated token strings.

    Parameters
    ----------
    key:
        MAC key used for every token this instance creates or verifies.
    """

    def __init__(self, key: bytes) -> None:
        if not key:
            raise ValueError("Authenticator key must not be empty.")
        self._key = key

    def create(self, payload: bytes) -> str:
        """Return an authenticated token wrapping ``payload``."""
        return _CURRENT.create(self._key, payload)

    def verify(self, token: str) -> bytes:
        """Verify ``token`` and return its payload.

        Raises
        ------
        UnsupportedVersionError
            If the token's version header names no known codec.
        MalformedTokenError
            If the token is structurally invalid for its version.
        InvalidTokenError
            If the token fails authentication.
        """
        version, separator, _ = token.partition(v0.VERSION_SEPARATOR)
        codec = _CODECS.get(version) if separator else None
        if codec is None:
            raise UnsupportedVersionError(version if separator else None)
        return codec.verify(self._key, token)

    def __repr__(self) -> str:
        return f"Authenticator(version={_CURRENT.VERSION!r})"


__all__ = [
    "Authenticator",
    "CSRF_TOKEN_INFO",
    "InvalidTokenError",
    "MalformedTokenError",
    "SESSION_TOKEN_INFO",
    "TokenError",
    "UnsupportedVersionError",
    "derive_keys",
]
