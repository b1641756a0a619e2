"""
Upstream transaction history sources.
"""

from backend_seeker.ingestion.helius_source import HeliusPagedSource, parse_page

__all__ = ["HeliusPagedSource", "parse_page"]
