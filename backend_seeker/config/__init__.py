"""
Configuration for Backend Seeker.

Loads settings from environment variables and an optional .env file.
"""

from backend_seeker.config.env import (  # noqa: F401
    get_helius_api_key,
    get_helius_base_url,
    get_helius_page_limit,
    get_max_pages,
    get_request_timeout_sec,
    load_seeker_env,
)

__all__ = [
    "get_helius_api_key",
    "get_helius_base_url",
    "get_helius_page_limit",
    "get_max_pages",
    "get_request_timeout_sec",
    "load_seeker_env",
]
