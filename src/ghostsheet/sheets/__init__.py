"""Published spreadsheet feed retrieval."""

from .client import FeedClient

__all__ = [
    "FeedClient",
]
