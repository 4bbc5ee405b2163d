"""HTTP method allow-list policy."""

from __future__ import annotations

from collections.abc import Iterable

from starlette.requests import Request


class MethodPolicy:
    """Block every request whose method is not in an allow-list.

    Configured entries are folded to upper case; the request method is compared
    as presented by the server (ASGI servers pass the request-line token
    through, which is upper case for every standard method). An empty
    allow-list blocks everything.

        >>> policy = MethodPolicy(["get", "post"])
        >>> app.add_middleware(ShieldMiddleware, config=ShieldConfig(block=policy, ...))
    """

    __slots__ = ("_methods", "_allowed")

    def __init__(self, methods: Iterable[str] = ()) -> None:
        self._methods: tuple[str, ...] = tuple(methods)
        self._allowed: frozenset[str] = frozenset(m.upper() for m in self._methods)

    @property
    def methods(self) -> tuple[str, ...]:
        """Configured methods, in the order given."""
        return self._methods

    def block(self, request: Request) -> bool:
        """Return True unless ``request.method`` is an allowed method."""
        return request.method not in self._allowed

    __call__ = block

    def __repr__(self) -> str:
        return f"MethodPolicy({list(self._methods)!r})"
