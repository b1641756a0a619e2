"""
Core utilities shared by the collector, HTTP API and CLI tools.
"""
