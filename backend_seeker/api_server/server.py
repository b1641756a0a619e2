"""
FastAPI server — today's swaps and stakes for a wallet.

GET /api/transactions?address=<wallet> runs the activity collector against the
Helius API and returns {"success": true, "data": {total, swaps, stakes}}.
Failures return {"success": false, "error": "..."}: 400 for a missing address,
500 for missing configuration, 502 when Helius fails, 503 on cancellation.
Nothing is stored; every request is computed fresh.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

import httpx
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend_seeker import __version__
from backend_seeker.activity import (
    ActivityCollector,
    Clock,
    CollectorConfig,
    PagedSource,
    SystemClock,
)
from backend_seeker.config.env import (
    get_helius_api_key,
    get_helius_base_url,
    get_helius_page_limit,
    get_max_pages,
    get_request_timeout_sec,
    load_seeker_env,
)
from backend_seeker.core.exceptions import (
    CollectorError,
    ConfigurationError,
    InvalidInput,
)
from backend_seeker.ingestion import HeliusPagedSource
from backend_seeker.seeker_logging import get_logger, short_wallet

logger = get_logger(__name__)

SourceFactory = Callable[[str], PagedSource]


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class TransactionOut(BaseModel):
    """One transaction as rendered by the dashboard."""

    signature: str = Field(..., description="Transaction signature (base58)")
    timestamp: int = Field(..., description="Unix timestamp (seconds)")
    description: str = Field("", description="Helius description or rewrite marker")
    type: str = Field(..., description="SWAP, STAKE or UNSTAKE")


class ActivityData(BaseModel):
    total: int = Field(..., ge=0, description="len(swaps) + len(stakes)")
    swaps: list[TransactionOut] = Field(default_factory=list)
    stakes: list[TransactionOut] = Field(default_factory=list)


class ActivityResponse(BaseModel):
    """GET /api/transactions success payload."""

    success: bool = True
    data: ActivityData


class ErrorResponse(BaseModel):
    success: bool = False
    error: str = Field(..., description="Human-readable failure message")


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------

def get_clock() -> Clock:
    return SystemClock()


def get_collector(clock: Clock = Depends(get_clock)) -> ActivityCollector:
    """Dependency: collector with limits from env (COLLECTOR_MAX_PAGES, HELIUS_REQUEST_TIMEOUT_SEC)."""
    config = CollectorConfig(
        max_pages=get_max_pages(),
        fetch_timeout_sec=get_request_timeout_sec(),
    )
    return ActivityCollector(config=config, clock=clock)


def get_source_factory(request: Request) -> SourceFactory:
    """
    Dependency: build a Helius source per address.

    The API key is checked when the factory is called, so a missing address is
    still reported as 400 before configuration errors.
    """
    shared_client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    def _factory(address: str) -> PagedSource:
        api_key = get_helius_api_key()
        if not api_key:
            raise ConfigurationError("HELIUS_API_KEY is not configured; add it to .env")
        return HeliusPagedSource(
            address,
            api_key,
            base_url=get_helius_base_url(),
            page_limit=get_helius_page_limit(),
            timeout_sec=get_request_timeout_sec(),
            client=shared_client,
        )

    return _factory


async def _close_source(source: PagedSource) -> None:
    aclose = getattr(source, "aclose", None)
    if aclose is not None:
        await aclose()


async def watch_disconnect(request: Request, stop_event: asyncio.Event, interval_sec: float = 0.5) -> None:
    """Set `stop_event` once the client has gone away."""
    while not stop_event.is_set():
        if await request.is_disconnected():
            stop_event.set()
            return
        await asyncio.sleep(interval_sec)


async def get_stop_event(request: Request) -> AsyncIterator[asyncio.Event]:
    """
    Dependency: stop event for one collection, set when the client disconnects.

    The collector checks it before each page fetch, so an abandoned request
    stops paging Helius and ends with CollectionCancelled (503).
    """
    stop_event = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(request, stop_event))
    try:
        yield stop_event
    finally:
        watcher.cancel()


# -----------------------------------------------------------------------------
# Lifespan: one pooled HTTP client for all Helius calls
# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    load_seeker_env()
    app.state.http_client = httpx.AsyncClient(timeout=httpx.Timeout(get_request_timeout_sec()))
    logger.info("api_started", helius_base_url=get_helius_base_url())
    yield
    await app.state.http_client.aclose()
    app.state.http_client = None
    logger.info("api_stopped")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Backend Seeker API",
    description="Today's (UTC+8) swaps and stakes for a Solana wallet, from Helius.",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(CollectorError)
async def collector_error_handler(request: Request, exc: CollectorError) -> JSONResponse:
    body = ErrorResponse(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.get(
    "/api/transactions",
    response_model=ActivityResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 500, 502, 503)},
)
async def get_transactions(
    address: str | None = Query(None, description="Solana wallet address"),
    collector: ActivityCollector = Depends(get_collector),
    source_factory: SourceFactory = Depends(get_source_factory),
    stop_event: asyncio.Event = Depends(get_stop_event),
) -> ActivityResponse:
    """Return today's swaps and stakes for `address`, newest first."""
    address = (address or "").strip()
    if not address:
        raise InvalidInput("address query parameter is required")

    source = source_factory(address)
    try:
        bundle = await collector.collect(address, source, stop_event=stop_event)
    except CollectorError as e:
        logger.error(
            "api_transactions_failed",
            wallet_id=short_wallet(address),
            error_type=type(e).__name__,
            error=e.message,
        )
        raise
    finally:
        await _close_source(source)

    return ActivityResponse(data=ActivityData.model_validate(bundle.to_dict()))


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}
