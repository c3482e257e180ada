"""Feature-level loading contract.

Presentation code depends on `FeedLoader` only; where the feed comes from
(remote endpoint, cache, fixture) is an implementation detail behind it.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol, runtime_checkable

from feedloader.domain.models import FeedItem, LoadFeedResult


@runtime_checkable
class FeedLoader(Protocol):
    """Loads the feed and reports the outcome through a callback.

    `load` returns immediately. `completion` is invoked at most once, on
    whatever thread the underlying work finishes on. Failures are delivered
    as `LoadFeedResult.failure(...)`; `load` itself never raises.
    """

    def load(self, completion: Callable[[LoadFeedResult], None]) -> None:
        ...


async def load_feed_async(loader: FeedLoader) -> list[FeedItem]:
    """Await a single load from a callback-style `FeedLoader`.

    The completion may fire on a worker thread, so the result is handed back
    to the running event loop with `call_soon_threadsafe`. The caller keeps a
    strong reference to `loader` for the whole await.

    Raises:
        ConnectivityError: the transport call failed.
        InvalidDataError: the response was not a valid feed.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[LoadFeedResult] = loop.create_future()

    def _resolve(result: LoadFeedResult) -> None:
        if not future.done():
            future.set_result(result)

    def _on_complete(result: LoadFeedResult) -> None:
        loop.call_soon_threadsafe(_resolve, result)

    loader.load(_on_complete)
    result = await future
    return result.unwrap()
