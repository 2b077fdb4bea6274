"""
Pytest fixtures for SafePhone DR tests. Report stores run on in-memory
storage with a deterministic clock; nothing touches the network.
"""

import itertools
from unittest.mock import MagicMock

import pytest

from safephone.services.report_store import CommunityReportStore
from safephone.services.storage import MemoryStorage


class TickingClock:
    """Epoch-ms clock that advances by one second per call"""

    def __init__(self, start: int = 1_700_000_000_000):
        self._ticks = itertools.count(start, 1000)

    def __call__(self) -> int:
        return next(self._ticks)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def http_session():
    """requests.Session stand-in; configure .get/.post per test"""
    return MagicMock()


@pytest.fixture
def store(memory_storage, http_session, clock):
    return CommunityReportStore(
        memory_storage,
        endpoint="https://reports.example.test/phones",
        http_session=http_session,
        clock=clock,
    )


@pytest.fixture
def client(store):
    """FastAPI TestClient with the in-memory store; lifespan is not run."""
    from fastapi.testclient import TestClient

    from safephone.main import app

    app.state.report_store = store
    yield TestClient(app)
    del app.state.report_store
