"""Test that the quickstart API works for simple-session."""
from __future__ import annotations


def test_quickstart_import() -> None:
    from simple_session import MemoryStore, SessionManager

    manager = SessionManager(MemoryStore(), b"\x01" * 32)
    assert manager is not None


def test_version_exported() -> None:
    import simple_session

    assert isinstance(simple_session.__version__, str)
    assert simple_session.__version__ == "0.1.0"


def test_public_names_exported() -> None:
    import simple_session

    for name in simple_session.__all__:
        assert hasattr(simple_session, name), name


def test_quickstart_create_and_resolve() -> None:
    from simple_session import Cookie, MemoryStore, SessionManager

    class Response:
        def __init__(self) -> None:
            self.cookies: list[Cookie] = []

        def set_cookie(self, cookie: Cookie) -> None:
            self.cookies.append(cookie)

        def send_error(self, status: int, message: str) -> None:
            raise AssertionError(f"unexpected error response {status}")

    class Request:
        def __init__(self, cookies: dict[str, str]) -> None:
            self.cookies = cookies

        def get_cookie(self, name: str) -> str | None:
            return self.cookies.get(name)

    manager = SessionManager(MemoryStore(), b"\x01" * 32)
    response = Response()
    session = manager.create(response, {"user": "ada"})

    request = Request({c.name: c.value for c in response.cookies})
    assert manager.session_from_request(request) is session
    manager.verify_session_csrf_token(session.csrf_token, session)
