"""HTTP client port: the transport contract the remote loader depends on.

Feed API code depends on this port; infrastructure (e.g. httpx) implements it.
Test doubles implement the same Protocol rather than subclassing a concrete
client.

Contract for implementations:
  - `get` returns immediately and delivers exactly one `HTTPClientResult`
    per call, exactly once, on any thread.
  - Transport-level failures (DNS, timeout, connection reset, TLS) become
    `HTTPClientResult.failure(exc)`.
  - Any completed HTTP exchange, whatever its status, becomes
    `HTTPClientResult.success(data, response)`. A response without a body
    carries `b""`, never None.
  - Implementations must be safe to call concurrently; one client may be
    shared by many loaders.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from feedloader.domain.exceptions import ResultStateError


class HTTPResponse(BaseModel):
    """Status metadata of a completed HTTP exchange."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(description="HTTP status code of the final response.")
    url: str = Field(description="URL that produced the final response.")


class HTTPClientResult(BaseModel):
    """Outcome of one transport call: (bytes, response) or an error."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: Optional[bytes] = None
    response: Optional[HTTPResponse] = None
    error: Optional[BaseException] = None

    @model_validator(mode="after")
    def _exactly_one_variant(self) -> HTTPClientResult:
        completed = self.data is not None and self.response is not None
        partial = (self.data is None) != (self.response is None)
        if partial or completed == (self.error is not None):
            raise ResultStateError(
                "HTTPClientResult must carry either data and a response, or an error"
            )
        return self

    @classmethod
    def success(cls, data: bytes, response: HTTPResponse) -> HTTPClientResult:
        return cls(data=data, response=response)

    @classmethod
    def failure(cls, error: BaseException) -> HTTPClientResult:
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None


@runtime_checkable
class HTTPClient(Protocol):
    """Port: issue a GET and report the outcome through `completion`."""

    def get(self, url: str, completion: Callable[[HTTPClientResult], None]) -> None:
        ...
