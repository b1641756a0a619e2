"""
Pytest fixtures for Backend Seeker tests. Fake paged source and fixed clock;
no network access.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import pytest

from backend_seeker.activity import FixedClock, Record, start_of_day_cutoff

# 2025-10-09 08:53:20 UTC == 16:53:20 UTC+8; day starts 2025-10-08 16:00:00 UTC
NOW = 1_760_000_000
CUTOFF = start_of_day_cutoff(NOW)

WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"


def make_record(sig: str, timestamp: int, tx_type: str = "SWAP", description: str = "") -> Record:
    return Record(signature=sig, timestamp=timestamp, type=tx_type, description=description)


def run(coro: Any) -> Any:
    return asyncio.run(coro)


class FakePagedSource:
    """
    In-memory paged source. Serves `pages` in order, recording every `before`
    cursor; returns an empty page once they run out. `fail_on` (1-based) makes
    that fetch raise.
    """

    def __init__(
        self,
        pages: Sequence[Sequence[Record]],
        *,
        fail_on: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self._pages = [list(p) for p in pages]
        self._fail_on = fail_on
        self._error = error or RuntimeError("upstream 500")
        self.calls: list[str | None] = []
        self.closed = False

    async def fetch(self, before: str | None = None) -> list[Record]:
        self.calls.append(before)
        if self._fail_on is not None and len(self.calls) == self._fail_on:
            raise self._error
        index = len(self.calls) - 1
        return self._pages[index] if index < len(self._pages) else []

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def api_client():
    """
    FastAPI TestClient with a fixed clock. Tests set `api_client.source` to the
    FakePagedSource the route should use.
    """
    from fastapi.testclient import TestClient

    from backend_seeker.api_server.server import app, get_clock, get_source_factory

    client = TestClient(app)
    client.source = FakePagedSource([])
    client.requested_addresses = []

    def _factory(address: str) -> FakePagedSource:
        client.requested_addresses.append(address)
        return client.source

    app.dependency_overrides[get_clock] = lambda: FixedClock(NOW)
    app.dependency_overrides[get_source_factory] = lambda: _factory
    yield client
    app.dependency_overrides.clear()
