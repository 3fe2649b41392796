#!/usr/bin/env python3
"""Example: Storage Backends

Demonstrates the in-memory store and, when a server is reachable, the
Redis store with a typed session payload.

Usage:
    python examples/02_storage_backends.py

Requirements:
    pip install simple-session[redis]
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel

from simple_session import MemoryStore, Session, SessionExistsError, SessionNotFoundError, StoreError


class UserInfo(BaseModel):
    user_id: int
    name: str


def make_session(session_id: str) -> Session[UserInfo]:
    return Session[UserInfo](
        id=session_id,
        data=UserInfo(user_id=42, name="Ada"),
        expiration=datetime.now(timezone.utc) + timedelta(minutes=30),
        csrf_token="example-csrf",
    )


def demo_memory() -> None:
    print("=== MemoryStore ===")
    store = MemoryStore()
    session = make_session("example-1")
    store.set(session.id, session, timedelta(minutes=40))
    print(f"  stored {session.id}; live sessions: {len(store)}")
    try:
        store.set(session.id, session, timedelta(minutes=40))
    except SessionExistsError as exc:
        print(f"  second set rejected: {exc}")
    store.delete(session.id)
    try:
        store.get(session.id)
    except SessionNotFoundError as exc:
        print(f"  after delete: {exc}")


def demo_redis() -> None:
    print("=== RedisStore ===")
    try:
        from simple_session.store.redis import RedisStore

        store = RedisStore(url="redis://localhost:6379/0", model=Session[UserInfo])
        session = make_session("example-2")
        store.set(session.id, session, timedelta(minutes=40))
        loaded = store.get(session.id)
        print(f"  loaded {loaded.id}: {loaded.data}")
        store.delete(session.id)
    except ImportError as exc:
        print(f"  skipped: {exc}")
    except StoreError as exc:
        print(f"  Redis unavailable: {exc}")


def main() -> None:
    demo_memory()
    demo_redis()


if __name__ == "__main__":
    main()
