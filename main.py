"""
Main entrypoint: FastAPI server for the daily activity feed.

Env: HELIUS_API_KEY (required for /api/transactions), API_HOST, API_PORT, LOG_LEVEL,
plus the collector settings documented in backend_seeker.config.env.

Equivalent: uvicorn backend_seeker.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_seeker.seeker_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    from backend_seeker.config.env import get_helius_api_key, load_seeker_env

    load_seeker_env()
    api_host = os.getenv("API_HOST", "0.0.0.0").strip()
    api_port = int(os.getenv("API_PORT", "8000").strip() or "8000")

    if not get_helius_api_key():
        logger.warning(
            "main_config_warning",
            message="HELIUS_API_KEY not set: /api/transactions will answer 500 until it is configured",
        )

    from backend_seeker.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=api_host, port=api_port)
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
