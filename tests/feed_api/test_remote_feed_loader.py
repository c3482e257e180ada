"""Unit tests for feedloader.feed_api.remote_feed_loader: RemoteFeedLoader.

Coverage targets
----------------
- No request is issued until ``load`` is called.
- Every ``load`` issues its own GET to the configured URL.
- Transport failure → CONNECTIVITY; non-200 / bad JSON → INVALID_DATA.
- 200 with an empty list → empty success; 200 with items → items in order.
- A loader released before the transport completes never calls back.
- Overlapping loads complete independently, in whatever order the
  transport completes them.

Design decisions
----------------
- No network. ``HTTPClientSpy`` implements the ``HTTPClient`` Protocol, records
  every (url, completion) pair and completes them on demand, so each test
  decides exactly when and how the transport finishes.
- Completions are captured into a list, which also proves "exactly once".
"""

from __future__ import annotations

import gc
import json
import uuid
import weakref
from typing import Any, Callable, Optional

import pytest

from feedloader.domain import FeedItem, FeedLoader, FeedLoaderErrorKind, LoadFeedResult
from feedloader.feed_api import HTTPClient, HTTPClientResult, HTTPResponse, RemoteFeedLoader

URL = "https://a-given-url.com/feed"


# ---------------------------------------------------------------------------
# Shared helpers / factories
# ---------------------------------------------------------------------------


class HTTPClientSpy:
    """Records GET requests and completes them when the test says so."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, Callable[[HTTPClientResult], None]]] = []

    @property
    def requested_urls(self) -> list[str]:
        return [url for url, _ in self.messages]

    def get(self, url: str, completion: Callable[[HTTPClientResult], None]) -> None:
        self.messages.append((url, completion))

    def complete_with_error(self, error: BaseException, at: int = 0) -> None:
        self.messages[at][1](HTTPClientResult.failure(error))

    def complete_with_status(self, code: int, data: bytes, at: int = 0) -> None:
        response = HTTPResponse(status_code=code, url=self.messages[at][0])
        self.messages[at][1](HTTPClientResult.success(data, response))


def _make_sut(url: str = URL) -> tuple[RemoteFeedLoader, HTTPClientSpy]:
    client = HTTPClientSpy()
    return RemoteFeedLoader(url, client), client


def _make_item(
    *,
    description: Optional[str] = None,
    location: Optional[str] = None,
    image_url: str = "https://a-url.com/image.jpg",
) -> tuple[FeedItem, dict[str, Any]]:
    item = FeedItem(
        id=uuid.uuid4(),
        description=description,
        location=location,
        image_url=image_url,
    )
    payload = {
        "id": str(item.id),
        "description": description,
        "location": location,
        "image": image_url,
    }
    return item, {key: value for key, value in payload.items() if value is not None}


def _make_items_json(items: list[dict[str, Any]]) -> bytes:
    return json.dumps({"items": items}).encode("utf-8")


def _expect(
    sut: RemoteFeedLoader,
    expected: LoadFeedResult,
    when: Callable[[], None],
) -> None:
    captured: list[LoadFeedResult] = []
    sut.load(captured.append)

    when()

    assert captured == [expected]


def _failure(kind: FeedLoaderErrorKind) -> LoadFeedResult:
    return LoadFeedResult.failure(kind)


# ===========================================================================
# TestRemoteFeedLoaderRequests
# ===========================================================================


class TestRemoteFeedLoaderRequests:
    def test_init_does_not_request_data_from_url(self) -> None:
        _, client = _make_sut()
        assert client.requested_urls == []

    def test_load_requests_data_from_url(self) -> None:
        sut, client = _make_sut(url=URL)

        sut.load(lambda _: None)

        assert client.requested_urls == [URL]

    def test_load_twice_requests_data_from_url_twice(self) -> None:
        sut, client = _make_sut(url=URL)

        sut.load(lambda _: None)
        sut.load(lambda _: None)

        assert client.requested_urls == [URL, URL]

    def test_load_returns_before_transport_completes(self) -> None:
        sut, _ = _make_sut()
        captured: list[LoadFeedResult] = []

        assert sut.load(captured.append) is None
        assert captured == []

    def test_exposes_url_and_client(self) -> None:
        sut, client = _make_sut(url=URL)
        assert sut.url == URL
        assert sut.client is client

    def test_satisfies_feed_loader_protocol(self) -> None:
        sut, client = _make_sut()
        assert isinstance(sut, FeedLoader)
        assert isinstance(client, HTTPClient)


# ===========================================================================
# TestRemoteFeedLoaderErrors
# ===========================================================================


class TestRemoteFeedLoaderErrors:
    def test_load_delivers_connectivity_error_on_client_error(self) -> None:
        sut, client = _make_sut()

        _expect(
            sut,
            _failure(FeedLoaderErrorKind.CONNECTIVITY),
            when=lambda: client.complete_with_error(ConnectionResetError("reset by peer")),
        )

    def test_client_error_is_not_propagated_verbatim(self) -> None:
        sut, client = _make_sut()
        captured: list[LoadFeedResult] = []
        sut.load(captured.append)

        client.complete_with_error(TimeoutError("read timed out"))

        assert captured[0].error is FeedLoaderErrorKind.CONNECTIVITY

    @pytest.mark.parametrize("code", [199, 201, 300, 400, 500])
    def test_load_delivers_invalid_data_on_non_200_response(self, code: int) -> None:
        sut, client = _make_sut()

        _expect(
            sut,
            _failure(FeedLoaderErrorKind.INVALID_DATA),
            when=lambda: client.complete_with_status(code, _make_items_json([])),
        )

    def test_load_delivers_invalid_data_on_each_non_200_response_in_turn(self) -> None:
        sut, client = _make_sut()

        for index, code in enumerate([199, 201, 300, 400, 500]):
            _expect(
                sut,
                _failure(FeedLoaderErrorKind.INVALID_DATA),
                when=lambda: client.complete_with_status(code, _make_items_json([]), at=index),
            )

    def test_load_delivers_invalid_data_on_200_with_invalid_json(self) -> None:
        sut, client = _make_sut()

        _expect(
            sut,
            _failure(FeedLoaderErrorKind.INVALID_DATA),
            when=lambda: client.complete_with_status(200, b"invalid json"),
        )


# ===========================================================================
# TestRemoteFeedLoaderSuccess
# ===========================================================================


class TestRemoteFeedLoaderSuccess:
    def test_load_delivers_empty_feed_on_200_with_empty_list(self) -> None:
        sut, client = _make_sut()

        _expect(
            sut,
            LoadFeedResult.success([]),
            when=lambda: client.complete_with_status(200, _make_items_json([])),
        )

    def test_load_delivers_items_on_200_with_items(self) -> None:
        sut, client = _make_sut()
        item1, json1 = _make_item(image_url="https://a-url.com/1.jpg")
        item2, json2 = _make_item(
            description="a description",
            location="a location",
            image_url="https://another-url.com/2.jpg",
        )

        _expect(
            sut,
            LoadFeedResult.success([item1, item2]),
            when=lambda: client.complete_with_status(200, _make_items_json([json1, json2])),
        )


# ===========================================================================
# TestRemoteFeedLoaderLifetime
# ===========================================================================


class TestRemoteFeedLoaderLifetime:
    def test_load_does_not_complete_after_loader_is_released(self) -> None:
        client = HTTPClientSpy()
        sut: Optional[RemoteFeedLoader] = RemoteFeedLoader(URL, client)
        captured: list[LoadFeedResult] = []
        sut.load(captured.append)

        sut = None
        gc.collect()
        client.complete_with_status(200, _make_items_json([]))

        assert captured == []

    def test_pending_request_does_not_keep_loader_alive(self) -> None:
        sut, client = _make_sut()
        sut.load(lambda _: None)
        ref = weakref.ref(sut)

        del sut
        gc.collect()

        assert ref() is None
        assert client.requested_urls == [URL]

    def test_transport_failure_after_release_is_also_dropped(self) -> None:
        client = HTTPClientSpy()
        sut: Optional[RemoteFeedLoader] = RemoteFeedLoader(URL, client)
        captured: list[LoadFeedResult] = []
        sut.load(captured.append)

        sut = None
        gc.collect()
        client.complete_with_error(OSError("network down"))

        assert captured == []


# ===========================================================================
# TestRemoteFeedLoaderConcurrency
# ===========================================================================


class TestRemoteFeedLoaderConcurrency:
    def test_overlapping_loads_complete_in_transport_order(self) -> None:
        sut, client = _make_sut()
        item, payload = _make_item()
        first: list[LoadFeedResult] = []
        second: list[LoadFeedResult] = []
        sut.load(first.append)
        sut.load(second.append)

        client.complete_with_status(200, _make_items_json([payload]), at=1)
        client.complete_with_error(OSError("network down"), at=0)

        assert second == [LoadFeedResult.success([item])]
        assert first == [_failure(FeedLoaderErrorKind.CONNECTIVITY)]

    def test_client_shared_by_two_loaders(self) -> None:
        client = HTTPClientSpy()
        loader_a = RemoteFeedLoader("https://a.example.com/feed", client)
        loader_b = RemoteFeedLoader("https://b.example.com/feed", client)

        loader_a.load(lambda _: None)
        loader_b.load(lambda _: None)

        assert client.requested_urls == [
            "https://a.example.com/feed",
            "https://b.example.com/feed",
        ]
