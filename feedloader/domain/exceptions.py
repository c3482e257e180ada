"""Domain exceptions.

The remote loader never raises: every outcome of a load is delivered through
its completion as a `LoadFeedResult`. These exceptions exist for callers that
prefer exception-style control flow and ask for it explicitly, via
`LoadFeedResult.unwrap()` or `load_feed_async()`.

Hierarchy:
    FeedLoaderError               root for all application errors
    ├── ConnectivityError         the transport call itself failed
    ├── InvalidDataError          non-200 status or undecodable body
    └── ResultStateError          a result built with neither or both variants

Rules:
- No bare `except` anywhere in the codebase; always catch a specific type.
- Infrastructure errors (httpx exceptions) never reach callers. The transport
  delivers them as a failure outcome and the remote loader collapses every
  such failure into CONNECTIVITY.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Optional


class FeedLoaderErrorKind(str, Enum):
    """Error kinds a load can complete with.

    Inherits from str so that JSON serialisation produces the raw value
    ("CONNECTIVITY", "INVALID_DATA") without a custom encoder.
    """

    CONNECTIVITY = "CONNECTIVITY"
    INVALID_DATA = "INVALID_DATA"


class FeedLoaderError(Exception):
    """Root exception for all application-level errors."""

    kind: ClassVar[Optional[FeedLoaderErrorKind]] = None


class ConnectivityError(FeedLoaderError):
    """Raised when a load failed before a usable HTTP exchange completed.

    This covers DNS failures, connection resets, TLS failures and timeouts.
    The specific transport error is not exposed.
    """

    kind = FeedLoaderErrorKind.CONNECTIVITY


class InvalidDataError(FeedLoaderError):
    """Raised when an HTTP exchange completed but yielded no feed.

    This covers:
    - Any status code other than 200
    - A body that is not JSON
    - A JSON body without an `items` array
    - An item missing `id` or `image`, or carrying a malformed UUID / URL
    """

    kind = FeedLoaderErrorKind.INVALID_DATA


class ResultStateError(FeedLoaderError):
    """Raised when a two-variant result is built with neither or both variants."""


def error_for_kind(kind: FeedLoaderErrorKind, message: str = "") -> FeedLoaderError:
    """Build the domain exception matching an error kind."""
    if kind is FeedLoaderErrorKind.CONNECTIVITY:
        return ConnectivityError(message or "feed could not be reached")
    return InvalidDataError(message or "feed response was not valid")
