#!/usr/bin/env python3
"""Example: Quickstart — simple-session

Minimal working example: wrap a request handler with session management,
then replay the session cookie on a second request.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install simple-session
"""
from __future__ import annotations

import secrets

import simple_session
from simple_session import Cookie, MemoryStore, Session, SessionManager


class Request:
    def __init__(self, cookies: dict[str, str]) -> None:
        self.cookies = cookies

    def get_cookie(self, name: str) -> str | None:
        return self.cookies.get(name)


class Response:
    def __init__(self) -> None:
        self.headers: list[str] = []
        self.status = 200

    def set_cookie(self, cookie: Cookie) -> None:
        self.headers.append(f"Set-Cookie: {cookie.to_header()}")

    def send_error(self, status: int, message: str) -> None:
        self.status = status
        self.headers.append(f"X-Error: {message}")


def main() -> None:
    print(f"simple-session version: {simple_session.__version__}")

    manager = SessionManager(MemoryStore(), secrets.token_bytes(32))

    @manager.manage
    def index(request: Request, response: Response, session: Session) -> str:
        kind = "pre-session" if session.is_pre_session else "session"
        return f"hello from {kind} (csrf token {session.csrf_token[:12]}...)"

    # Step 1: First visit creates a pre-session and sets its cookie
    response = Response()
    print(index(Request({}), response))
    for header in response.headers:
        print(f"  {header}")

    # Step 2: The browser sends the cookie back
    cookie_value = response.headers[0].split(";", 1)[0].split("=", 1)[1]
    second = Response()
    print(index(Request({"session": cookie_value}), second))
    print(f"  cookies set on second visit: {len(second.headers)}")


if __name__ == "__main__":
    main()
