"""Feed API layer public API.

Import the transport contract, the response mapper and the remote loader from here.
"""

from feedloader.feed_api.feed_items_mapper import encode_feed_items, map_feed_items
from feedloader.feed_api.http_client import HTTPClient, HTTPClientResult, HTTPResponse
from feedloader.feed_api.remote_feed_loader import RemoteFeedLoader

__all__ = [
    # Transport contract
    "HTTPClient",
    "HTTPClientResult",
    "HTTPResponse",
    # Mapping
    "map_feed_items",
    "encode_feed_items",
    # Loader
    "RemoteFeedLoader",
]
