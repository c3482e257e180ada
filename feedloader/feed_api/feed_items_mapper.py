"""Maps a completed HTTP exchange onto a `LoadFeedResult`.

Validity policy:
    status != 200                      → INVALID_DATA, body ignored
    body not JSON / not the feed shape → INVALID_DATA
    otherwise                          → success, items in wire order

Wire shape (unknown keys are ignored at both levels):

    {"items": [{"id": "<uuid>", "image": "<url>",
                "description": "<str>", "location": "<str>"}, ...]}

The whole body must decode or the call fails; there is no partial result.
"""

from __future__ import annotations

import uuid
from typing import Annotated, Optional

import structlog
from pydantic import AnyUrl, BaseModel, StringConstraints, ValidationError

from feedloader.domain.exceptions import FeedLoaderErrorKind
from feedloader.domain.models import FeedItem, LoadFeedResult
from feedloader.feed_api.http_client import HTTPResponse

OK_200 = 200

# Canonical 8-4-4-4-12 form only; braced, urn: and hyphenless ids are rejected.
UUIDString = Annotated[
    str,
    StringConstraints(
        pattern=r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
    ),
]


class _RemoteFeedItem(BaseModel):
    id: UUIDString
    description: Optional[str] = None
    location: Optional[str] = None
    image: AnyUrl

    def to_model(self) -> FeedItem:
        return FeedItem(
            id=uuid.UUID(self.id),
            description=self.description,
            location=self.location,
            image_url=self.image,
        )


class _Root(BaseModel):
    items: list[_RemoteFeedItem]

    def to_feed(self) -> list[FeedItem]:
        return [item.to_model() for item in self.items]


def map_feed_items(data: bytes, response: HTTPResponse) -> LoadFeedResult:
    """Validate the status and decode the body into feed items."""
    log = structlog.get_logger().bind(
        component="feed_items_mapper",
        url=response.url,
        status_code=response.status_code,
    )

    if response.status_code != OK_200:
        log.warning("feed_items_mapper.map.unexpected_status", status="failed")
        return LoadFeedResult.failure(FeedLoaderErrorKind.INVALID_DATA)

    try:
        root = _Root.model_validate_json(data)
    except ValidationError as exc:
        log.warning(
            "feed_items_mapper.map.invalid_data",
            status="failed",
            error_count=exc.error_count(),
            error_type=type(exc).__name__,
        )
        return LoadFeedResult.failure(FeedLoaderErrorKind.INVALID_DATA)

    feed = root.to_feed()
    log.debug("feed_items_mapper.map.decoded", status="completed", items_count=len(feed))
    return LoadFeedResult.success(feed)


def encode_feed_items(items: list[FeedItem]) -> bytes:
    """Encode items into the wire shape accepted by `map_feed_items`.

    Optional fields that are None are omitted rather than sent as null.
    """
    root = _Root(
        items=[
            _RemoteFeedItem(
                id=str(item.id),
                description=item.description,
                location=item.location,
                image=item.image_url,
            )
            for item in items
        ]
    )
    return root.model_dump_json(exclude_none=True).encode("utf-8")
