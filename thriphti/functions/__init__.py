"""
Functions package - Stateless utility endpoints for the admin surface.

Each module holds one group of request handlers as a Flask blueprint:
1. api_keys: Key status, provider connection tests, key update acknowledgement
2. rss: RSS feed quick test and full validation
"""

from .server import create_app, main

__all__ = [
    "create_app",
    "main",
]
