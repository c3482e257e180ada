"""Domain layer public API.

Import domain types from here rather than from feedloader.domain.models directly.
This keeps the internal module structure free to change without breaking callers.
"""

from feedloader.domain.exceptions import (
    ConnectivityError,
    FeedLoaderError,
    FeedLoaderErrorKind,
    InvalidDataError,
    ResultStateError,
)
from feedloader.domain.feed_loader import FeedLoader, load_feed_async
from feedloader.domain.models import FeedItem, LoadFeedResult

__all__ = [
    # Models
    "FeedItem",
    "FeedLoaderErrorKind",
    "LoadFeedResult",
    # Contracts
    "FeedLoader",
    "load_feed_async",
    # Exceptions
    "FeedLoaderError",
    "ConnectivityError",
    "InvalidDataError",
    "ResultStateError",
]
