"""Token verification errors.

Callers branch on the concrete type: a malformed token usually indicates a
garbled or foreign cookie, while an authenticity failure indicates
tampering or a key mismatch.

Classes
-------
- TokenError               — base class for all token failures
- MalformedTokenError      — token is structurally invalid
- UnsupportedVersionError  — token declares a version this build cannot read
- InvalidTokenError        — token fails its MAC check
"""
from __future__ import annotations


class TokenError(ValueError):
    """Base class for token creation and verification failures."""


class MalformedTokenError(TokenError):
    """Raised when a token string is structurally invalid."""


class UnsupportedVersionError(TokenError):
    """Raised when a token declares an unknown version header."""

    def __init__(self, version: str | None = None) -> None:
        self.version = version
        if version is None:
            super().__init__("Token carries no supported version header.")
        else:
            super().__init__(f"Unsupported token version {version!r}.")


class InvalidTokenError(TokenError):
    """Raised when a token fails authenticity (MAC) verification."""
