"""Command-line entry point.

Invoked as:  python -m feedloader.main

Configures structured JSON logging, loads the feed once from FEED_URL and
prints the items to stdout as a JSON array in the wire shape. Exits 0 on
success and 1 when the load fails or times out.
"""

import asyncio
import json
import logging
import sys

import structlog

from feedloader.config import constants
from feedloader.domain import FeedItem, FeedLoaderError, load_feed_async
from feedloader.feed_api import RemoteFeedLoader, encode_feed_items
from feedloader.infra.httpx_client import HTTPXClient


def _configure_logging() -> None:
    """Configure structlog for structured JSON output.

    Sets up stdlib logging at the configured level so that third-party
    libraries (httpx, httpcore) emit through the same pipeline as
    application code. Log output goes to stderr; stdout carries the feed.
    """
    log_level = getattr(logging, constants.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        stream=sys.stderr,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _render_feed(items: list[FeedItem]) -> str:
    return json.dumps(json.loads(encode_feed_items(items))["items"], indent=2)


async def main() -> int:
    _configure_logging()

    log = structlog.get_logger().bind(
        service=constants.SERVICE_NAME,
        component="main",
        feed_url=constants.FEED_URL,
    )

    with HTTPXClient() as client:
        loader = RemoteFeedLoader(constants.FEED_URL, client)

        log.info("main.load.starting", timeout_seconds=constants.LOAD_TIMEOUT_SECONDS)

        try:
            items = await asyncio.wait_for(
                load_feed_async(loader),
                timeout=constants.LOAD_TIMEOUT_SECONDS,
            )
        except FeedLoaderError as exc:
            log.error(
                "main.load.failed",
                status="failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return 1
        except asyncio.TimeoutError:
            log.error("main.load.timed_out", status="failed")
            # The stuck exchange must not hold the loop; __exit__ is then a no-op.
            client.close(wait=False)
            return 1

    log.info("main.load.completed", status="completed", items_count=len(items))
    print(_render_feed(items))
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
