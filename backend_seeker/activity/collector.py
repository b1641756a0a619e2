"""
Activity collector — today's swaps and stakes for one address.

Walks the paged source backward from the newest transaction, stops at the first
record older than 00:00 UTC+8, classifies everything in between and returns a
ResultBundle. A failed page aborts the whole collection: nothing accumulated
before the failure is returned.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Sequence

import structlog

from backend_seeker.activity.clock import Clock, SystemClock, start_of_day_cutoff
from backend_seeker.activity.models import Record, ResultBundle
from backend_seeker.activity.policy import classify
from backend_seeker.activity.source import PagedSource
from backend_seeker.core.exceptions import (
    CollectionCancelled,
    InvalidInput,
    UpstreamFetchFailed,
)
from backend_seeker.seeker_logging import bind_wallet

DEFAULT_MAX_PAGES = 100
DEFAULT_FETCH_TIMEOUT_SEC = 30.0


@dataclass
class CollectorConfig:
    """Limits for one collection run."""

    max_pages: int = DEFAULT_MAX_PAGES
    fetch_timeout_sec: float | None = DEFAULT_FETCH_TIMEOUT_SEC


class ActivityCollector:
    """
    Single-pass pagination, boundary check and classification.

    Holds no per-request state; one instance can serve any number of
    concurrent collect() calls.
    """

    def __init__(
        self,
        config: CollectorConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or CollectorConfig()
        if self._config.max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        if self._config.fetch_timeout_sec is not None and self._config.fetch_timeout_sec <= 0:
            raise ValueError("fetch_timeout_sec must be positive or None")
        self._clock = clock or SystemClock()

    async def collect(
        self,
        address: str,
        source: PagedSource,
        *,
        stop_event: asyncio.Event | None = None,
    ) -> ResultBundle:
        """
        Collect today's activity for address from source.

        Raises:
            InvalidInput: address is empty; source is never called.
            UpstreamFetchFailed: any page fetch failed, timed out or was malformed.
            CollectionCancelled: stop_event was set before a page fetch.
        """
        address = (address or "").strip()
        if not address:
            raise InvalidInput("address must be non-empty")

        cutoff = start_of_day_cutoff(self._clock.now())
        log = bind_wallet(address, __name__)
        log.debug("collector_started", cutoff=cutoff)

        accepted: list[Record] = []
        cursor: str | None = None
        pages = 0

        while True:
            if stop_event is not None and stop_event.is_set():
                log.info("collector_cancelled", pages=pages)
                raise CollectionCancelled("collection cancelled")
            if pages >= self._config.max_pages:
                log.warning(
                    "collector_page_cap_reached",
                    max_pages=self._config.max_pages,
                    accepted=len(accepted),
                )
                break

            page = await self._fetch_page(source, cursor, log)
            pages += 1
            if not page:
                log.debug("collector_exhausted", pages=pages)
                break

            boundary_hit = False
            for record in page:
                if record.timestamp < cutoff:
                    boundary_hit = True
                    break
                kept = classify(record)
                if kept is not None:
                    accepted.append(kept)

            if boundary_hit:
                log.debug("collector_boundary_reached", pages=pages)
                break

            next_cursor = page[-1].signature
            if next_cursor == cursor:
                raise UpstreamFetchFailed("upstream page did not advance past cursor")
            cursor = next_cursor

        bundle = ResultBundle.partition(accepted)
        log.info(
            "collector_done",
            pages=pages,
            total=bundle.total,
            swaps=len(bundle.swaps),
            stakes=len(bundle.stakes),
        )
        return bundle

    async def _fetch_page(
        self,
        source: PagedSource,
        cursor: str | None,
        log: structlog.BoundLogger,
    ) -> Sequence[Record]:
        """Fetch one page under the configured deadline; every failure becomes UpstreamFetchFailed."""
        timeout = self._config.fetch_timeout_sec
        try:
            if timeout is None:
                page = await source.fetch(cursor)
            else:
                page = await asyncio.wait_for(source.fetch(cursor), timeout=timeout)
        except UpstreamFetchFailed as e:
            log.warning("collector_fetch_failed", error=e.message)
            raise
        except asyncio.TimeoutError as e:
            log.warning("collector_fetch_timeout", timeout_sec=timeout)
            raise UpstreamFetchFailed(f"page fetch timed out after {timeout}s") from e
        except Exception as e:
            log.warning("collector_fetch_failed", error=str(e))
            raise UpstreamFetchFailed(f"page fetch failed: {e}") from e

        if not isinstance(page, (list, tuple)) or not all(isinstance(r, Record) for r in page):
            raise UpstreamFetchFailed("upstream returned a malformed page")
        log.debug(
            "collector_page_fetched",
            size=len(page),
            before=cursor[:16] if cursor else None,
        )
        return page


async def collect(
    address: str,
    source: PagedSource,
    clock: Clock | None = None,
    *,
    config: CollectorConfig | None = None,
    stop_event: asyncio.Event | None = None,
) -> ResultBundle:
    """Collect today's swaps and stakes for address. See ActivityCollector.collect."""
    collector = ActivityCollector(config=config, clock=clock)
    return await collector.collect(address, source, stop_event=stop_event)
