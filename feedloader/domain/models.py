"""Domain models.

Pure data layer with no I/O and no configuration.
Every other layer imports from here; this module imports only the sibling
exceptions module.

Pydantic v2 is used for:
  - Field validation at construction time (UUID ids, absolute image URLs)
  - Structural equality, so expected and decoded feeds compare field by field
  - JSON serialisation for the command-line entry point

All models are frozen (immutable). A decoded feed is handed to whoever
receives the load result and is never mutated afterwards.
"""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, model_validator

from feedloader.domain.exceptions import (
    FeedLoaderErrorKind,
    ResultStateError,
    error_for_kind,
)


# ---------------------------------------------------------------------------
# FeedItem
# ---------------------------------------------------------------------------


class FeedItem(BaseModel):
    """A single entry of the remote feed.

    `id` is stable across loads and is the business key for the item.

    `description` and `location` are Optional because the server omits them
    for items that carry none; an absent field is None, never "".
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(description="Server-assigned identifier, stable across loads.")
    description: Optional[str] = Field(
        default=None,
        description="Free text describing the item. None when the server omits it.",
    )
    location: Optional[str] = Field(
        default=None,
        description="Free text naming where the item was taken. None when omitted.",
    )
    image_url: AnyUrl = Field(description="Absolute locator of the item's image.")


# ---------------------------------------------------------------------------
# LoadFeedResult
# ---------------------------------------------------------------------------


class LoadFeedResult(BaseModel):
    """Outcome of one feed load: either a list of items or an error kind.

    Exactly one of `items` and `error` is populated. An empty `items` list is
    a success, not an error. Build instances through `success()` and
    `failure()` rather than the constructor.
    """

    model_config = ConfigDict(frozen=True)

    items: Optional[list[FeedItem]] = None
    error: Optional[FeedLoaderErrorKind] = None

    @model_validator(mode="after")
    def _exactly_one_variant(self) -> LoadFeedResult:
        if (self.items is None) == (self.error is None):
            raise ResultStateError(
                "LoadFeedResult must carry either items or an error, not both or neither"
            )
        return self

    @classmethod
    def success(cls, items: list[FeedItem]) -> LoadFeedResult:
        return cls(items=list(items))

    @classmethod
    def failure(cls, error: FeedLoaderErrorKind) -> LoadFeedResult:
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[FeedItem]:
        """Return the loaded items, or raise the domain error for a failure.

        Raises:
            ConnectivityError: the load completed with CONNECTIVITY.
            InvalidDataError: the load completed with INVALID_DATA.
        """
        if self.error is not None:
            raise error_for_kind(self.error)
        return list(self.items or [])
