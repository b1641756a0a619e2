"""
Print today's (UTC+8) swaps and stakes for a wallet as JSON.

Uses the same collector and Helius source as the HTTP API. Requires
HELIUS_API_KEY in the environment or .env.

Usage:
  py -m backend_seeker.tools.collect_today <ADDRESS> [--max-pages 20] [--now 1760000000]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from backend_seeker.activity import ActivityCollector, CollectorConfig, FixedClock, ResultBundle, SystemClock
from backend_seeker.config.env import (
    get_helius_api_key,
    get_helius_base_url,
    get_helius_page_limit,
    get_max_pages,
    get_request_timeout_sec,
    load_seeker_env,
    print_seeker_startup,
)
from backend_seeker.core.exceptions import CollectorError, InvalidInput
from backend_seeker.ingestion import HeliusPagedSource
from backend_seeker.seeker_logging import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2


async def _run(address: str, api_key: str, collector: ActivityCollector) -> ResultBundle:
    async with HeliusPagedSource(
        address,
        api_key,
        base_url=get_helius_base_url(),
        page_limit=get_helius_page_limit(),
        timeout_sec=get_request_timeout_sec(),
    ) as source:
        return await collector.collect(address, source)


def main(argv: list[str] | None = None) -> int:
    load_seeker_env()

    ap = argparse.ArgumentParser(description="Collect today's swaps and stakes for a Solana wallet")
    ap.add_argument("address", help="Solana wallet address")
    ap.add_argument("--max-pages", type=int, default=None, help="Max Helius pages to walk (default: COLLECTOR_MAX_PAGES or 100)")
    ap.add_argument("--now", type=int, default=None, help="Pretend current Unix time (seconds) for the day boundary")
    ap.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    args = ap.parse_args(argv)

    address = args.address.strip()
    if not address:
        print("[collect_today] ERROR: address must be non-empty", file=sys.stderr)
        return EXIT_INVALID_INPUT

    api_key = get_helius_api_key()
    if not api_key:
        print("[collect_today] ERROR: set HELIUS_API_KEY in .env", file=sys.stderr)
        return EXIT_FAILED

    max_pages = args.max_pages if args.max_pages and args.max_pages > 0 else get_max_pages()
    print_seeker_startup("collect_today", api_key=api_key, max_pages=max_pages)
    clock = FixedClock(args.now) if args.now is not None else SystemClock()
    collector = ActivityCollector(
        config=CollectorConfig(max_pages=max_pages, fetch_timeout_sec=get_request_timeout_sec()),
        clock=clock,
    )

    try:
        bundle = asyncio.run(_run(address, api_key, collector))
    except InvalidInput as e:
        print(f"[collect_today] ERROR: {e.message}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except CollectorError as e:
        logger.error("collect_today_failed", error_type=type(e).__name__, error=e.message)
        print(f"[collect_today] ERROR: {e.message}", file=sys.stderr)
        return EXIT_FAILED

    print(json.dumps(bundle.to_dict(), ensure_ascii=False, indent=args.indent or None))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
