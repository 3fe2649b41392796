"""Shared fixtures for the unit tests."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fakes import ROOT_KEY, Browser, FakeClock, StubStore, no_sleep
from simple_session.retry import Backoff
from simple_session.session.manager import SessionManager
from simple_session.session.options import SessionOptions


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture()
def stub_store() -> StubStore:
    return StubStore()


@pytest.fixture()
def fast_retry() -> Backoff:
    return Backoff(base=0.1, growth=2.0, jitter=0.2, sleep=no_sleep)


@pytest.fixture()
def options() -> SessionOptions:
    return SessionOptions()


@pytest.fixture()
def manager(
    stub_store: StubStore, options: SessionOptions, clock: FakeClock, fast_retry: Backoff
) -> SessionManager:
    return SessionManager(stub_store, ROOT_KEY, options, clock=clock, retry_policy=fast_retry)


@pytest.fixture()
def browser(manager: SessionManager) -> Browser:
    return Browser(manager)
