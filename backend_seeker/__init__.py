"""
Backend Seeker — daily on-chain activity feed for a Solana wallet.

Pulls an address's enhanced transaction history from Helius, keeps only
today's records (day boundary at 00:00 UTC+8), reclassifies them into swaps
and stakes, and serves the result to the dashboard over HTTP.
"""

__version__ = "0.1.0"
