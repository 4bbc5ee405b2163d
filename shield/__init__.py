"""shield: ASGI middleware that blocks or forwards requests based on a predicate.

Public API:
    Shield           : wraps ASGI apps with a ShieldConfig
    ShieldMiddleware : the ASGI middleware (``app.add_middleware(ShieldMiddleware, config=...)``)
    ShieldConfig     : predicate + BlockingResponse
    BlockingResponse : status code, multi-valued headers, body sent on block
    build_block_response: BlockingResponse → starlette Response
    configure_logging: structlog setup for host applications

Built-in predicates live in ``shield.policies``.
"""
from shield.config import BlockingResponse, Predicate, ShieldConfig
from shield.middleware import Shield, ShieldMiddleware
from shield.response import build_block_response
from shield.utils.logger import configure_logging

__all__ = [
    "BlockingResponse",
    "Predicate",
    "Shield",
    "ShieldConfig",
    "ShieldMiddleware",
    "build_block_response",
    "configure_logging",
]
