"""CLI entry point for simple-session.

Invoked as::

    simple-session [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m simple_session.cli.main

Commands
--------
- version  — Show version information
- keygen   — Generate a random root key
- token    — Token command group

Token sub-commands
------------------
- token create  — Create a session or CSRF token for a hex payload
- token verify  — Verify a token and print its payload
"""
from __future__ import annotations

import base64
import binascii
import secrets
import sys

import click
from rich.console import Console
from rich.table import Table

from simple_session.token import (
    CSRF_TOKEN_INFO,
    SESSION_TOKEN_INFO,
    Authenticator,
    InvalidTokenError,
    MalformedTokenError,
    TokenError,
    UnsupportedVersionError,
    derive_keys,
)

console = Console()

_ROLE_INFOS: dict[str, str] = {"session": SESSION_TOKEN_INFO, "csrf": CSRF_TOKEN_INFO}


def _make_authenticator(root_key: str, role: str) -> Authenticator:
    """Build the authenticator for ``role`` from a base64 root key.

    Exits with status 2 if ``root_key`` is not valid base64.
    """
    try:
        key = base64.b64decode(root_key, validate=True)
    except binascii.Error:
        console.print("[red]Root key must be standard base64.[/red]")
        sys.exit(2)
    if not key:
        console.print("[red]Root key must not be empty.[/red]")
        sys.exit(2)
    (derived,) = derive_keys(key, [_ROLE_INFOS[role]])
    return Authenticator(derived)


def _classify(exc: TokenError) -> str:
    if isinstance(exc, UnsupportedVersionError):
        return "unsupported version"
    if isinstance(exc, MalformedTokenError):
        return "malformed"
    if isinstance(exc, InvalidTokenError):
        return "not authentic"
    return "invalid"


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="simple-session")
def cli() -> None:
    """Authenticated session and CSRF token tooling"""


@cli.command(name="version")
def version_command() -> None:
    """Show version information."""
    from simple_session import __version__

    console.print(f"[bold]simple-session[/bold] v{__version__}")


@cli.command(name="keygen")
@click.option("--length", default=32, show_default=True, type=click.IntRange(min=16))
def keygen_command(length: int) -> None:
    """Generate a random base64 root key of LENGTH bytes."""
    click.echo(base64.b64encode(secrets.token_bytes(length)).decode("ascii"))


# ---------------------------------------------------------------------------
# token command group
# ---------------------------------------------------------------------------

_key_option = click.option(
    "--key",
    envvar="SIMPLE_SESSION_KEY",
    required=True,
    help="Base64 root key (or set SIMPLE_SESSION_KEY).",
)
_role_option = click.option(
    "--role",
    default="session",
    show_default=True,
    type=click.Choice(sorted(_ROLE_INFOS), case_sensitive=False),
    help="Which derived key to use.",
)


@cli.group(name="token")
def token_group() -> None:
    """Create and inspect authenticated tokens."""


@token_group.command(name="create")
@_key_option
@_role_option
@click.argument("payload_hex", required=False)
def token_create(key: str, role: str, payload_hex: str | None) -> None:
    """Create a token for PAYLOAD_HEX (random 16 bytes if omitted)."""
    auth = _make_authenticator(key, role.lower())
    if payload_hex is None:
        payload = secrets.token_bytes(16)
    else:
        try:
            payload = bytes.fromhex(payload_hex)
        except ValueError:
            console.print(f"[red]Payload is not valid hex: {payload_hex!r}[/red]")
            sys.exit(2)
    click.echo(auth.create(payload))


@token_group.command(name="verify")
@_key_option
@_role_option
@click.argument("token")
def token_verify(key: str, role: str, token: str) -> None:
    """Verify TOKEN and print its payload."""
    auth = _make_authenticator(key, role.lower())
    try:
        payload = auth.verify(token)
    except TokenError as exc:
        console.print(f"[red]Token {_classify(exc)}:[/red] {exc}")
        sys.exit(1)

    table = Table(title="Token", show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Role", role.lower())
    table.add_row("Version", token.partition("!")[0])
    table.add_row("Payload (hex)", payload.hex())
    table.add_row("Payload length", str(len(payload)))
    console.print(table)


if __name__ == "__main__":
    cli()
