"""
Command-line tools for Backend Seeker.
"""
