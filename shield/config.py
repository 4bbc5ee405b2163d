"""Shield configuration records.

Both records are frozen dataclasses created once at wiring time and shared
read-only by every request handled by the middleware. Collections supplied by
the caller are copied into immutable containers in ``__post_init__`` so that
later mutation of the caller's dict or list has no effect on a running shield.

  BlockingResponse: status code, multi-valued headers and body sent on block.
  ShieldConfig    : the blocking predicate plus its BlockingResponse.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from http import HTTPStatus
from types import MappingProxyType
from typing import Union

from starlette.requests import Request

#: A blocking predicate: returns True when the request must be blocked.
Predicate = Callable[[Request], bool]

HeaderValues = Union[str, Sequence[str]]

# Characters that would split or terminate a header line on the wire.
_FORBIDDEN_HEADER_CHARS: frozenset[str] = frozenset({"\r", "\n", "\0"})


def _check_header_text(kind: str, name: str, text: str) -> None:
    """Reject header text Starlette cannot encode or that would break the header line.

    Starlette encodes header names and values as Latin-1 when the response is
    built, so anything outside Latin-1 must fail here rather than per request.
    """
    try:
        text.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError(f"Header {kind} for {name!r} is not Latin-1 encodable: {text!r}") from exc
    if _FORBIDDEN_HEADER_CHARS.intersection(text):
        raise ValueError(f"Header {kind} for {name!r} contains CR, LF or NUL: {text!r}")


def _freeze_headers(headers: Mapping[str, HeaderValues]) -> Mapping[str, tuple[str, ...]]:
    """Copy a header mapping into a read-only mapping of value tuples.

    A bare string is accepted as a single value. Insertion order of names and
    the order of values under each name are preserved.

    Raises:
        TypeError:  If a name or value is not a string.
        ValueError: If a name is empty, or a name or value is not Latin-1
                    encodable or contains CR, LF or NUL.
    """
    frozen: dict[str, tuple[str, ...]] = {}
    for name, values in headers.items():
        if not isinstance(name, str):
            raise TypeError(f"Header name must be a string, got {type(name).__name__}")
        if not name:
            raise ValueError("Header name must not be empty")
        _check_header_text("name", name, name)
        if isinstance(values, str):
            values = (values,)
        values = tuple(values)
        for value in values:
            if not isinstance(value, str):
                raise TypeError(
                    f"Header {name!r} values must be strings, got {type(value).__name__}"
                )
            _check_header_text("value", name, value)
        frozen[name] = values
    return MappingProxyType(frozen)


# ─── BlockingResponse ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BlockingResponse:
    """Response emitted when a request is blocked.

    Fields:
        code:    HTTP status code. Passed through without range validation.
        headers: Header name → ordered values. The first value replaces any
                 existing header of that name, the rest are appended.
        body:    Response body, sent verbatim. May be empty.
    """

    code: int
    headers: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        if isinstance(self.code, bool) or not isinstance(self.code, int):
            raise TypeError(f"code must be an int, got {type(self.code).__name__}")

        object.__setattr__(self, "headers", _freeze_headers(self.headers))

        body = self.body
        if isinstance(body, str):
            body = body.encode("utf-8")
        elif isinstance(body, (bytearray, memoryview)):
            body = bytes(body)
        elif not isinstance(body, bytes):
            raise TypeError(f"body must be bytes or str, got {type(body).__name__}")
        object.__setattr__(self, "body", body)

    @classmethod
    def for_status(
        cls,
        code: int,
        headers: Mapping[str, HeaderValues] | None = None,
    ) -> "BlockingResponse":
        """Plain-text response whose body is the standard reason phrase for ``code``.

        ``BlockingResponse.for_status(405)`` sends ``Method Not Allowed`` with
        ``Content-Type: text/plain; charset=utf-8``. Entries in ``headers``
        override the default content type. Unknown codes get an empty body.
        """
        try:
            phrase = HTTPStatus(code).phrase
        except ValueError:
            phrase = ""
        merged: dict[str, HeaderValues] = {"Content-Type": "text/plain; charset=utf-8"}
        if headers:
            lowered = {name.lower() for name in headers}
            merged = {k: v for k, v in merged.items() if k.lower() not in lowered}
            merged.update(headers)
        return cls(code=code, headers=merged, body=phrase.encode("utf-8"))


# ─── ShieldConfig ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ShieldConfig:
    """Predicate plus the response sent when it returns True."""

    block: Predicate
    response: BlockingResponse

    def __post_init__(self) -> None:
        if not callable(self.block):
            raise TypeError("block must be callable: (Request) -> bool")
        if not isinstance(self.response, BlockingResponse):
            raise TypeError(
                f"response must be a BlockingResponse, got {type(self.response).__name__}"
            )

    @property
    def code(self) -> int:
        """Status code of the blocking response."""
        return self.response.code
