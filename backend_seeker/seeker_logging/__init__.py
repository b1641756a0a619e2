"""
Structured logging for Backend Seeker.

JSON logs with timestamp, event_type and wallet_id.
Use get_logger() in all modules for aggregation-friendly output.
"""

from backend_seeker.seeker_logging.logger import bind_wallet, get_logger, short_wallet

__all__ = ["bind_wallet", "get_logger", "short_wallet"]
