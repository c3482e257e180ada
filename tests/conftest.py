"""Global pytest configuration.

Sets required environment variables at module level so that
``feedloader.config.constants`` can be imported without raising ``KeyError``.

``feedloader.config.constants`` reads ``os.environ["KEY"]`` (not ``.get``) at
import time. ``conftest.py`` files are loaded by pytest *before* test modules
are collected or imported, which makes this the only reliable injection point
for mandatory env vars.

Rules:
- Do NOT import from ``feedloader.*`` here; constants must not be imported
  until after the env vars below have been applied.
- Use ``setdefault`` so that real env vars set by CI/CD or the developer's
  shell are not clobbered.
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Mandatory environment variables consumed by feedloader.config.constants
# ---------------------------------------------------------------------------

_TEST_ENV: dict[str, str] = {
    # Observability
    "SERVICE_NAME": "feedloader-test",
    "LOG_LEVEL": "ERROR",
    # Feed
    "FEED_URL": "https://feed.example.com/items",
    # HTTP transport (optional in production, explicit here for determinism)
    "HTTP_TIMEOUT_SECONDS": "5",
    "HTTP_MAX_WORKERS": "2",
    "LOAD_TIMEOUT_SECONDS": "5",
}

for _key, _value in _TEST_ENV.items():
    os.environ.setdefault(_key, _value)
