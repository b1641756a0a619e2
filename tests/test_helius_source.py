"""
Pytest tests for HeliusPagedSource with mocked HTTP (httpx.MockTransport).

Checks URL/query construction, cursor passing, Record parsing and the mapping
of every failure to UpstreamFetchFailed without leaking the API key.
"""

from __future__ import annotations

import httpx
import pytest

from backend_seeker.activity import FixedClock, collect
from backend_seeker.core.exceptions import UpstreamFetchFailed
from backend_seeker.ingestion import HeliusPagedSource, parse_page
from tests.conftest import CUTOFF, NOW, WALLET, run

API_KEY = "test-helius-key-123"


def _source(handler, **kwargs) -> HeliusPagedSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HeliusPagedSource(WALLET, API_KEY, base_url="https://api.helius.test/", client=client, **kwargs)


def _fetch(source: HeliusPagedSource, before=None):
    async def _go():
        try:
            return await source.fetch(before)
        finally:
            await source._client.aclose()

    return run(_go())


def test_fetch_builds_url_and_parses_records():
    """First page: no before param; api-key sent; items converted to Records."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[
            {"signature": "sigA", "timestamp": NOW - 5, "type": "SWAP", "description": "swap"},
            {"signature": "sigB", "timestamp": NOW - 9, "type": "UNKNOWN", "description": None},
        ])

    records = _fetch(_source(handler))
    assert len(seen) == 1
    url = seen[0].url
    assert url.path == f"/v0/addresses/{WALLET}/transactions"
    assert url.host == "api.helius.test"
    assert url.params["api-key"] == API_KEY
    assert "before" not in url.params
    assert "limit" not in url.params
    assert [r.signature for r in records] == ["sigA", "sigB"]
    assert records[1].description == ""


def test_fetch_passes_before_and_limit():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    records = _fetch(_source(handler, page_limit=50), before="sigCursor")
    assert records == []
    assert seen[0].url.params["before"] == "sigCursor"
    assert seen[0].url.params["limit"] == "50"


@pytest.mark.parametrize("status", [400, 401, 429, 500, 503])
def test_non_success_status_raises(status):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"error": "boom"})

    with pytest.raises(UpstreamFetchFailed, match=str(status)):
        _fetch(_source(handler))


def test_transport_error_raises_without_api_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(f"connection refused for {request.url}", request=request)

    with pytest.raises(UpstreamFetchFailed) as excinfo:
        _fetch(_source(handler))
    assert API_KEY not in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_non_json_body_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(UpstreamFetchFailed, match="non-JSON"):
        _fetch(_source(handler))


@pytest.mark.parametrize(
    "payload",
    [
        {"error": "invalid address"},
        {"transactions": []},
        [{"signature": "sigA"}],
        ["not-an-object"],
    ],
)
def test_malformed_payload_raises(payload):
    with pytest.raises(UpstreamFetchFailed):
        parse_page(payload)


def test_constructor_validation():
    with pytest.raises(ValueError, match="address"):
        HeliusPagedSource("  ", API_KEY)
    with pytest.raises(ValueError, match="api_key"):
        HeliusPagedSource(WALLET, "")
    with pytest.raises(ValueError, match="page_limit"):
        HeliusPagedSource(WALLET, API_KEY, page_limit=101)


def test_collect_over_helius_pages():
    """End to end over the mocked API: two pages, boundary on the second, no third request."""
    requests_seen: list[str | None] = []
    pages = {
        None: [
            {"signature": "s1", "timestamp": NOW - 10, "type": "SWAP", "description": "swap 1"},
            {"signature": "s2", "timestamp": NOW - 20, "type": "TRANSFER", "description": "dust"},
        ],
        "s2": [
            {"signature": "s3", "timestamp": NOW - 30, "type": "UNKNOWN", "description": ""},
            {"signature": "s4", "timestamp": CUTOFF - 1, "type": "SWAP", "description": "yesterday"},
        ],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        before = request.url.params.get("before")
        requests_seen.append(before)
        return httpx.Response(200, json=pages.get(before, []))

    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            source = HeliusPagedSource(WALLET, API_KEY, base_url="https://api.helius.test", client=client)
            return await collect(WALLET, source, FixedClock(NOW))

    bundle = run(_go())
    assert requests_seen == [None, "s2"]
    assert bundle.to_dict()["total"] == 2
    assert [r.signature for r in bundle.swaps] == ["s1"]
    assert [(r.signature, r.type) for r in bundle.stakes] == [("s3", "STAKE")]


def test_owned_client_closed_by_context_manager():
    async def _go():
        async with HeliusPagedSource(WALLET, API_KEY) as source:
            client = source._client
        return client

    client = run(_go())
    assert client.is_closed
