"""httpx-backed implementation of the `HTTPClient` port.

Each `get` is submitted to an executor and returns immediately; the exchange
runs on a worker thread and the completion is invoked from that thread.

Outcome mapping:
    httpx.HTTPError / httpx.InvalidURL  → HTTPClientResult.failure(exc)
    any other exception in the exchange → HTTPClientResult.failure(exc), logged
    any completed response (any status) → HTTPClientResult.success(body, meta)
    get after close / rejected submit   → HTTPClientResult.failure(RuntimeError)

Exceptions raised by the completion itself are logged, never re-raised.

The `httpx.Client` is shared by all worker threads; httpx clients are safe
to use concurrently.
"""

from __future__ import annotations

from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

import httpx
import structlog

from feedloader.config import constants
from feedloader.feed_api.http_client import HTTPClientResult, HTTPResponse


def build_httpx_client(timeout_seconds: float = constants.HTTP_TIMEOUT_SECONDS) -> httpx.Client:
    """Create an `httpx.Client` with the transport defaults.

    No headers are added beyond httpx's own; the feed request is a plain GET.
    """
    return httpx.Client(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
    )


class HTTPXClient:
    """`HTTPClient` running each GET on a background thread.

    A caller-supplied `client` or `executor` is borrowed and left open by
    `close()`; the ones built here are owned and shut down by it.

    Every `get` delivers exactly one result, including when the client is
    already closed (delivered synchronously, from the calling thread) and
    when a queued exchange is dropped by `close(wait=False)`.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        executor: Optional[Executor] = None,
        max_workers: int = constants.HTTP_MAX_WORKERS,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else build_httpx_client()
        self._owns_executor = executor is None
        self._executor = (
            executor
            if executor is not None
            else ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="feedloader-http")
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, url: str, completion: Callable[[HTTPClientResult], None]) -> None:
        log = structlog.get_logger().bind(component="httpx_client", url=url)

        try:
            if self._closed:
                raise RuntimeError("HTTPXClient is closed")
            future = self._executor.submit(self._perform, url, completion, log)
        except RuntimeError as exc:
            # A shut-down executor refuses new work with RuntimeError as well.
            log.warning(
                "httpx_client.get.rejected",
                status="failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            completion(HTTPClientResult.failure(exc))
            return

        future.add_done_callback(lambda done: self._on_done(done, completion, log=log))

    def _perform(
        self,
        url: str,
        completion: Callable[[HTTPClientResult], None],
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        try:
            result = self._exchange(url, log=log)
        except Exception as exc:
            log.exception(
                "httpx_client.get.crashed",
                status="failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            result = HTTPClientResult.failure(exc)
        completion(result)

    @staticmethod
    def _on_done(
        future: Future,
        completion: Callable[[HTTPClientResult], None],
        *,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        if future.cancelled():
            log.warning("httpx_client.get.cancelled", status="failed")
            completion(HTTPClientResult.failure(CancelledError("exchange dropped on close")))
            return

        exc = future.exception()
        if exc is not None:
            # Raised by the caller's completion; the exchange itself never raises.
            log.error(
                "httpx_client.completion.failed",
                status="failed",
                error=str(exc),
                error_type=type(exc).__name__,
                exc_info=exc,
            )

    def _exchange(self, url: str, *, log: structlog.stdlib.BoundLogger) -> HTTPClientResult:
        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning(
                "httpx_client.get.failed",
                status="failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return HTTPClientResult.failure(exc)

        log.debug(
            "httpx_client.get.completed",
            status="completed",
            status_code=response.status_code,
            bytes_count=len(response.content),
        )
        return HTTPClientResult.success(
            response.content or b"",
            HTTPResponse(status_code=response.status_code, url=str(response.url)),
        )

    def close(self, *, wait: bool = True) -> None:
        """Release owned resources. Calling it again is a no-op.

        With `wait=True` in-flight exchanges finish first. With `wait=False`
        queued exchanges are dropped (each still completes with a failure)
        and the call returns without waiting for running ones.
        """
        if self._closed:
            return
        self._closed = True

        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=not wait)
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HTTPXClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
