"""Shield middleware: blocks or forwards requests based on a predicate.

Usage:
    from starlette.applications import Starlette

    from shield import BlockingResponse, Shield, ShieldConfig, ShieldMiddleware
    from shield.policies import MethodPolicy

    config = ShieldConfig(
        block=MethodPolicy(["GET"]),
        response=BlockingResponse.for_status(405),
    )

    app = Starlette(routes=...)
    app.add_middleware(ShieldMiddleware, config=config)

    # or, wrapping any ASGI app directly:
    asgi_app = Shield(config).wrap(app)

When the predicate returns True the middleware sends the configured response
(headers, then status, then body in a single ``http.response.start`` /
``http.response.body`` pair) and returns without calling the downstream app.
When it returns False the original ``scope``, ``receive`` and ``send`` are
handed to the downstream app untouched. The shield neither wraps ``send`` nor
buffers the downstream response.

Only ``http`` scopes are evaluated; ``lifespan`` and ``websocket`` scopes pass
through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from shield.config import BlockingResponse, HeaderValues, Predicate, ShieldConfig
from shield.response import build_block_response
from shield.utils.logger import get_logger

logger = get_logger(__name__)


class ShieldMiddleware:
    """Pure ASGI middleware that short-circuits requests matching a predicate.

    Registration:
        application.add_middleware(ShieldMiddleware, config=ShieldConfig(...))

    Exactly one of {send the blocking response, call the downstream app}
    happens per request. Exceptions raised by the predicate, the downstream
    app or ``send`` propagate unchanged.
    """

    def __init__(self, app: ASGIApp, config: ShieldConfig) -> None:
        if not isinstance(config, ShieldConfig):
            raise TypeError(f"config must be a ShieldConfig, got {type(config).__name__}")
        self.app = app
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        if not self.config.block(request):
            await self.app(scope, receive, send)
            return

        logger.info(
            "Request blocked",
            method=request.method,
            path=request.url.path,
            status_code=self.config.code,
        )
        response = build_block_response(self.config.response)
        await response(scope, receive, send)


class Shield:
    """Holds a ShieldConfig and wraps downstream ASGI apps with it.

    One Shield can wrap any number of apps; every wrapper shares the same
    immutable configuration.
    """

    def __init__(self, config: ShieldConfig) -> None:
        if not isinstance(config, ShieldConfig):
            raise TypeError(f"config must be a ShieldConfig, got {type(config).__name__}")
        self.config = config

    @classmethod
    def from_options(
        cls,
        block: Predicate,
        code: int,
        headers: Mapping[str, HeaderValues] | None = None,
        body: bytes | str = b"",
    ) -> "Shield":
        """Build a Shield from loose options instead of a ShieldConfig.

        Args:
            block:   Predicate; return True to block the request.
            code:    Status code of the blocking response.
            headers: Header name → value(s) of the blocking response.
            body:    Body of the blocking response.
        """
        response = BlockingResponse(code=code, headers=headers or {}, body=body)
        return cls(ShieldConfig(block=block, response=response))

    def wrap(self, app: ASGIApp) -> ShieldMiddleware:
        """Return ``app`` wrapped in a ShieldMiddleware using this shield's config."""
        return ShieldMiddleware(app, config=self.config)
