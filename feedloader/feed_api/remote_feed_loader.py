"""Remote feed loader.

Issues one GET per `load` call through an `HTTPClient` and routes the outcome:

    transport failure            → LoadFeedResult.failure(CONNECTIVITY)
    transport success            → map_feed_items(data, response), verbatim

Lifetime:
    The continuation handed to the client holds only a weak reference to the
    loader. If the loader has been garbage-collected by the time the client
    completes, the outcome is dropped and `completion` is never called. The
    transport call itself is not cancelled.

Each `load` is independent: no deduplication, no caching, no ordering
guarantee between completions of overlapping calls.
"""

from __future__ import annotations

import time
import weakref
from typing import Callable

import structlog

from feedloader.domain.exceptions import FeedLoaderErrorKind
from feedloader.domain.models import LoadFeedResult
from feedloader.feed_api.feed_items_mapper import map_feed_items
from feedloader.feed_api.http_client import HTTPClient, HTTPClientResult


class RemoteFeedLoader:
    """`FeedLoader` backed by a remote JSON endpoint.

    The client is shared, not owned: one `HTTPClient` may serve many loaders
    and many concurrent loads.
    """

    def __init__(self, url: str, client: HTTPClient) -> None:
        self._url = url
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    @property
    def client(self) -> HTTPClient:
        return self._client

    def load(self, completion: Callable[[LoadFeedResult], None]) -> None:
        """Request the feed and deliver exactly one result to `completion`.

        Returns immediately. `completion` runs on whatever thread the client
        completes on, and is skipped entirely if this loader is gone by then.
        """
        # The continuation below must not close over `self`.
        owner = weakref.ref(self)
        url = self._url
        log = structlog.get_logger().bind(component="remote_feed_loader", url=url)

        log.info("remote_feed_loader.load.starting", status="starting")
        started_at = time.monotonic()

        def _on_result(result: HTTPClientResult) -> None:
            if owner() is None:
                log.debug("remote_feed_loader.load.discarded", status="discarded")
                return

            duration_ms = int((time.monotonic() - started_at) * 1000)

            if not result.is_success:
                log.warning(
                    "remote_feed_loader.load.connectivity_error",
                    status="failed",
                    error=str(result.error),
                    error_type=type(result.error).__name__,
                    duration_ms=duration_ms,
                )
                completion(LoadFeedResult.failure(FeedLoaderErrorKind.CONNECTIVITY))
                return

            mapped = map_feed_items(result.data, result.response)
            log.info(
                "remote_feed_loader.load.completed",
                status="completed" if mapped.is_success else "failed",
                status_code=result.response.status_code,
                items_count=len(mapped.items) if mapped.items is not None else None,
                error=mapped.error.value if mapped.error is not None else None,
                duration_ms=duration_ms,
            )
            completion(mapped)

        self._client.get(url, _on_result)
