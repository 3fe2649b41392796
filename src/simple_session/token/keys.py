"""Role-specific key derivation.

A single root secret is expanded into independent per-role MAC keys with
HKDF-SHA256, so session IDs and CSRF tokens never share a key.
"""
from __future__ import annotations

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

SESSION_TOKEN_INFO: str = "session-token"
CSRF_TOKEN_INFO: str = "csrf-token"

_DERIVED_KEY_LENGTH: int = 32


def derive_key(root_key: bytes, info: str) -> bytes:
    """Derive a 32-byte key from ``root_key`` for the context ``info``."""
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=_DERIVED_KEY_LENGTH,
        salt=None,
        info=info.encode("utf-8"),
    )
    return hkdf.derive(root_key)


def derive_keys(root_key: bytes, infos: list[str]) -> list[bytes]:
    """Derive one key per entry of ``infos``, in order.

    Parameters
    ----------
    root_key:
        Input key material.  Must not be empty.
    infos:
        Context strings, one per role.

    Returns
    -------
    list[bytes]
        Derived keys aligned with ``infos``.

    Raises
    ------
    ValueError
        If ``root_key`` is empty.
    """
    if not root_key:
        raise ValueError("Root key must not be empty.")
    return [derive_key(root_key, info) for info in infos]
