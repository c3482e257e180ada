"""Constants module.

All configuration values are sourced exclusively from environment variables.
This module is the single gateway between the environment and the codebase:

    Environment variables
            │
            ▼
    feedloader.config.constants   ← os.environ["KEY"]
            │
            ▼
    feedloader.infra, feedloader.main

Rules:
- No module outside this file may call os.environ directly.
- feedloader.domain and feedloader.feed_api never import this module; the
  endpoint URL and the client are passed to RemoteFeedLoader explicitly.
- os.environ["KEY"] is used (not .get) for required values so that a missing
  variable raises KeyError at import time, causing a hard startup failure
  rather than a silent runtime error.
"""

import os

# ---------------------------------------------------------------------------
# Observability
# ---------------------------------------------------------------------------

SERVICE_NAME: str = os.environ["SERVICE_NAME"]
LOG_LEVEL: str = os.environ["LOG_LEVEL"]

# ---------------------------------------------------------------------------
# Feed
# ---------------------------------------------------------------------------

# Absolute URL of the JSON feed endpoint.
FEED_URL: str = os.environ["FEED_URL"]

# ---------------------------------------------------------------------------
# HTTP transport (httpx)
#
# These are optional; sensible defaults exist for all values. Timeouts are
# owned by the transport; the loader imposes none of its own.
# ---------------------------------------------------------------------------

# Seconds allowed for connect / read / write / pool on a single request.
HTTP_TIMEOUT_SECONDS: float = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "10"))

# Worker threads running HTTP exchanges in the background.
HTTP_MAX_WORKERS: int = int(os.environ.get("HTTP_MAX_WORKERS", "4"))

# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

# Seconds `python -m feedloader.main` waits for a load before giving up.
LOAD_TIMEOUT_SECONDS: float = float(os.environ.get("LOAD_TIMEOUT_SECONDS", "30"))
