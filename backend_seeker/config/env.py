"""
Environment variable loading and validation for Backend Seeker.

- HELIUS_API_KEY: Helius API key (required to query the enhanced transactions API)
- HELIUS_API_BASE_URL: API host (default: https://api.helius.xyz)
- HELIUS_PAGE_LIMIT: page size sent as `limit` (1-100; unset = provider default)
- HELIUS_REQUEST_TIMEOUT_SEC: per-page fetch deadline in seconds (default: 30)
- COLLECTOR_MAX_PAGES: hard cap on pages walked per request (default: 100)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TextIO

from dotenv import load_dotenv

# Project root: config is backend_seeker/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_HELIUS_API_BASE_URL = "https://api.helius.xyz"
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0
DEFAULT_MAX_PAGES = 100
HELIUS_MAX_PAGE_LIMIT = 100


def load_seeker_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env wins."""
    load_dotenv(_ENV_PATH, override=False)


def _env_str(name: str) -> str:
    return (os.getenv(name) or "").strip()


def get_helius_api_key() -> str | None:
    """Return HELIUS_API_KEY, or None when unset/blank."""
    load_seeker_env()
    return _env_str("HELIUS_API_KEY") or None


def get_helius_base_url() -> str:
    load_seeker_env()
    return (_env_str("HELIUS_API_BASE_URL") or DEFAULT_HELIUS_API_BASE_URL).rstrip("/")


def get_helius_page_limit() -> int | None:
    """
    Return HELIUS_PAGE_LIMIT clamped to 1..100, or None to let Helius pick.
    Non-numeric values are ignored.
    """
    load_seeker_env()
    raw = _env_str("HELIUS_PAGE_LIMIT")
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return max(1, min(value, HELIUS_MAX_PAGE_LIMIT))


def get_request_timeout_sec() -> float:
    load_seeker_env()
    raw = _env_str("HELIUS_REQUEST_TIMEOUT_SEC")
    try:
        value = float(raw) if raw else DEFAULT_REQUEST_TIMEOUT_SEC
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT_SEC
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT_SEC


def get_max_pages() -> int:
    load_seeker_env()
    raw = _env_str("COLLECTOR_MAX_PAGES")
    try:
        value = int(raw) if raw else DEFAULT_MAX_PAGES
    except ValueError:
        return DEFAULT_MAX_PAGES
    return value if value > 0 else DEFAULT_MAX_PAGES


def mask_api_key(text: str, api_key: str | None = None) -> str:
    """Mask the api-key query value (and the raw key when given) in a URL or message."""
    if "api-key=" in text:
        head, _, tail = text.partition("api-key=")
        _, amp, rest = tail.partition("&")
        text = head + "api-key=***" + (amp + rest if amp else "")
    if api_key:
        text = text.replace(api_key, "***")
    return text


def print_seeker_startup(
    script_name: str,
    *,
    api_key: str | None = None,
    max_pages: int | None = None,
    file: TextIO | None = None,
) -> None:
    """
    Print effective Helius settings at script start (API key never shown).

    Callers pass the api_key and max_pages they resolved; env values are shown
    otherwise. Goes to stderr so stdout stays free for command output.
    """
    load_seeker_env()
    key_state = "set" if (api_key if api_key is not None else get_helius_api_key()) else "missing"
    print(
        f"[seeker] {script_name} | api={get_helius_base_url()} | api_key={key_state}"
        f" | page_limit={get_helius_page_limit() or 'default'}"
        f" | timeout={get_request_timeout_sec()}s"
        f" | max_pages={max_pages if max_pages is not None else get_max_pages()}",
        file=file or sys.stderr,
    )
