"""Version ``v0`` token codec.

Wire format::

    v0!<base64url payload>.<base64url HMAC-SHA256>
    [<-- message covered by the MAC -->]

Both segments use URL-safe base64 with ``=`` padding.  The MAC covers the
version header as well as the encoded payload.

Functions
---------
- create  — build a token for a payload
- verify  — check a token and return its payload
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac

from simple_session.token.errors import (
    InvalidTokenError,
    MalformedTokenError,
    UnsupportedVersionError,
)

VERSION: str = "v0"
VERSION_SEPARATOR: str = "!"

_MAC_SEPARATOR: str = "."
_MAC_ENCODED_LENGTH: int = 44  # base64 of a 32-byte digest


def _encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


def _decode(segment: str, what: str) -> bytes:
    try:
        return base64.b64decode(segment.encode("ascii"), altchars=b"-_", validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise MalformedTokenError(f"Failed to decode token {what}: {exc}") from exc


def _sign(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def _unique_index(token: str, separator: str, what: str) -> int:
    index = token.find(separator)
    if index == -1:
        raise MalformedTokenError(f"Token {what} separator {separator!r} not found.")
    if token.find(separator, index + 1) != -1:
        raise MalformedTokenError(f"Token {what} separator {separator!r} not unique.")
    return index


def create(key: bytes, payload: bytes) -> str:
    """Return an authenticated ``v0`` token wrapping ``payload``."""
    message = f"{VERSION}{VERSION_SEPARATOR}{_encode(payload)}"
    return f"{message}{_MAC_SEPARATOR}{_encode(_sign(key, message))}"


def verify(key: bytes, token: str) -> bytes:
    """Verify ``token`` under ``key`` and return the wrapped payload.

    Parameters
    ----------
    key:
        MAC key the token was created with.
    token:
        Token string previously produced by :func:`create`.

    Returns
    -------
    bytes
        The decoded payload.

    Raises
    ------
    MalformedTokenError
        If the separators, segment lengths, or base64 encoding are wrong.
    UnsupportedVersionError
        If the version header is not ``v0``.
    InvalidTokenError
        If the MAC does not match.
    """
    header_end = _unique_index(token, VERSION_SEPARATOR, "version header")
    version = token[:header_end]
    if version != VERSION:
        raise UnsupportedVersionError(version)

    mac_start = _unique_index(token, _MAC_SEPARATOR, "MAC footer")
    if len(token) - mac_start != _MAC_ENCODED_LENGTH + 1:
        raise MalformedTokenError("Token MAC footer has incorrect length.")

    mac = _decode(token[mac_start + 1 :], "MAC footer")
    expected = _sign(key, token[:mac_start])
    if not hmac.compare_digest(expected, mac):
        raise InvalidTokenError("Token MAC verification failed.")

    return _decode(token[header_end + 1 : mac_start], "payload")
