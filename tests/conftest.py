"""Root test configuration for shield.

Provides ``make_request`` for unit-testing predicates against a real
``starlette.requests.Request`` built from a URL, and resets structlog between
tests so that ``configure_logging()`` calls do not leak across modules.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from urllib.parse import urlsplit

import pytest
import structlog
from starlette.requests import Request


def build_request(method: str, url: str) -> Request:
    """Build an HTTP Request whose scope mirrors what an ASGI server would send."""
    parts = urlsplit(url)
    scheme = parts.scheme or "http"
    host = parts.hostname or "localhost"
    port = parts.port or (443 if scheme == "https" else 80)
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": scheme,
        "server": (host, port),
        "client": ("127.0.0.1", 12345),
        "root_path": "",
        "path": parts.path or "/",
        "raw_path": (parts.path or "/").encode("latin-1"),
        "query_string": parts.query.encode("latin-1"),
        "headers": [(b"host", (parts.netloc or host).encode("latin-1"))],
    }
    return Request(scope)


@pytest.fixture()
def make_request() -> Callable[[str, str], Request]:
    return build_request


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after every test."""
    yield
    structlog.reset_defaults()
