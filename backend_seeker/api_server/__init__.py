"""
HTTP API exposing the daily activity feed.
"""
