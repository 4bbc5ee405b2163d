"""URL scheme allow-list policy."""

from __future__ import annotations

from collections.abc import Iterable

from starlette.requests import Request


class SchemePolicy:
    """Block every request whose URL scheme is not in an allow-list.

    Configured entries are folded to lower case; the request scheme is taken
    from ``request.url.scheme`` (the ASGI ``scope["scheme"]``) as is. An empty
    allow-list blocks everything.

    Behind a TLS-terminating proxy the scope scheme is whatever the server
    reports, so pair this policy with a forwarded-headers middleware when
    ``https`` must be detected from ``X-Forwarded-Proto``.
    """

    __slots__ = ("_schemes", "_allowed")

    def __init__(self, schemes: Iterable[str] = ()) -> None:
        self._schemes: tuple[str, ...] = tuple(schemes)
        self._allowed: frozenset[str] = frozenset(s.lower() for s in self._schemes)

    @property
    def schemes(self) -> tuple[str, ...]:
        return self._schemes

    def block(self, request: Request) -> bool:
        """Return True unless the request URL scheme is allowed."""
        return request.url.scheme not in self._allowed

    __call__ = block

    def __repr__(self) -> str:
        return f"SchemePolicy({list(self._schemes)!r})"
