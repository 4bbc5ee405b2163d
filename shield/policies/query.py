"""Query-string policy driven by google-re2 patterns.

QueryPolicy maps query parameter names to RE2 patterns. A request is allowed
only when, for EVERY configured name, the first value of that parameter
matches its pattern (unanchored ``search``). A missing parameter is seen as
the empty string, so optional parameters are written as ``^$|<pattern>``.

Patterns are compiled once, at construction. A pattern that fails to compile
is logged and makes the policy block every request (fail-closed); pass
``strict=True`` to raise InvalidPatternError at construction instead.

IMPORT RULES:
  - ``import re2`` ONLY, never ``import re``.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import re2  # google-re2, NOT stdlib re

from starlette.requests import Request

from shield.utils.logger import get_logger

logger = get_logger(__name__)


class InvalidPatternError(ValueError):
    """Raised by a strict QueryPolicy when a pattern is not valid RE2."""

    def __init__(self, param: str, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern for query parameter {param!r}: {pattern!r} ({reason})")
        self.param = param
        self.pattern = pattern
        self.reason = reason


class QueryPolicy:
    """Block requests whose query parameters do not match configured patterns.

    Decision, per request:
      1. No configured parameters → block.
      2. For each (name, pattern): value = first value of ``name`` in the query
         string, or ``""`` when absent. Block as soon as the pattern does not
         match (or did not compile).
      3. Every pattern matched → allow.

    Unknown request parameters are ignored. Only the first value of a repeated
    parameter is inspected.
    """

    __slots__ = ("_params", "_compiled")

    def __init__(self, params: Mapping[str, str] | None = None, strict: bool = False) -> None:
        self._params: Mapping[str, str] = MappingProxyType(dict(params or {}))
        self._compiled: tuple[tuple[str, Any], ...] = tuple(
            (name, _compile(name, pattern, strict)) for name, pattern in self._params.items()
        )

        if not self._params:
            logger.warning("Query policy created with no parameters, every request will be blocked")

    @property
    def params(self) -> Mapping[str, str]:
        """Read-only view of the configured name → pattern mapping."""
        return self._params

    def block(self, request: Request) -> bool:
        """Return False only if every configured pattern matches its parameter."""
        if not self._compiled:
            return True

        query = request.query_params
        for name, regexp in self._compiled:
            if regexp is None:
                return True
            values = query.getlist(name)
            value = values[0] if values else ""
            if regexp.search(value) is None:
                return True
        return False

    __call__ = block

    def __repr__(self) -> str:
        return f"QueryPolicy({dict(self._params)!r})"


def _compile(name: str, pattern: str, strict: bool) -> Any:
    """Compile ``pattern`` to an re2._Regexp; None marks a pattern that never matches."""
    try:
        return re2.compile(pattern)
    except (re2.error, TypeError) as exc:
        if strict:
            raise InvalidPatternError(name, str(pattern), str(exc)) from exc
        logger.error(
            "Query policy pattern is not a valid RE2 regex, parameter will always block",
            param=name,
            pattern=pattern,
            error=str(exc),
        )
        return None
