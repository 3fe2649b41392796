#!/usr/bin/env python3
"""Example: CSRF Protection

Shows how a form handler embeds the session-bound CSRF token and how a
submission handler checks it, including the sign-in step that replaces a
pre-session with an authenticated one.

Usage:
    python examples/03_csrf_protection.py

Requirements:
    pip install simple-session
"""
from __future__ import annotations

import secrets

from simple_session import (
    Cookie,
    CSRFTokenError,
    MemoryStore,
    Session,
    SessionManager,
    SessionOptions,
)


class Request:
    def __init__(self, cookies: dict[str, str], form: dict[str, str] | None = None) -> None:
        self.cookies = cookies
        self.form = form or {}

    def get_cookie(self, name: str) -> str | None:
        return self.cookies.get(name)


class Response:
    def __init__(self) -> None:
        self.cookies: dict[str, str] = {}
        self.status = 200

    def set_cookie(self, cookie: Cookie) -> None:
        self.cookies[cookie.name] = cookie.value

    def send_error(self, status: int, message: str) -> None:
        self.status = status


def main() -> None:
    manager = SessionManager(
        MemoryStore(),
        secrets.token_bytes(32),
        SessionOptions(session_cookie_name="__Host-session"),
    )
    jar: dict[str, str] = {}

    @manager.manage
    def show_form(request: Request, response: Response, session: Session) -> str:
        return session.csrf_token

    @manager.manage
    def sign_in(request: Request, response: Response, session: Session) -> str:
        try:
            manager.verify_session_csrf_token(request.form.get("csrf", ""), session)
        except CSRFTokenError as exc:
            response.status = 403
            return f"rejected: {exc}"
        manager.create(response, {"user": request.form["user"]})
        return "signed in"

    # Step 1: Render the form; a pre-session carries the CSRF token
    response = Response()
    csrf = show_form(Request(jar), response)
    jar.update(response.cookies)
    print(f"form rendered with csrf token {csrf[:12]}...")

    # Step 2: A forged submission without the token is rejected
    response = Response()
    print(sign_in(Request(jar, {"user": "ada"}), response), response.status)

    # Step 3: A genuine submission replaces the pre-session
    response = Response()
    print(sign_in(Request(jar, {"user": "ada", "csrf": csrf}), response), response.status)
    jar.update(response.cookies)

    session = manager.session_from_request(Request(jar))
    print(f"current session payload: {session.data if session else None}")


if __name__ == "__main__":
    main()
