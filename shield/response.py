"""Builds the Starlette response sent when the shield blocks a request.

``build_block_response()`` turns a ``BlockingResponse`` into a
``starlette.responses.Response``. Starlette pre-populates ``content-length``
from the body (the same way a server's response writer would); configured
headers are then applied with set-then-append semantics:

  - first value:  ``response.headers[name] = value`` displaces every existing
                  value under ``name`` (including the auto ``content-length``)
  - later values: ``response.headers.append(name, value)`` accumulates

so that for each configured name the outgoing response carries exactly the
configured values, in the configured order.
"""

from __future__ import annotations

from starlette.responses import Response

from shield.config import BlockingResponse


def build_block_response(blocking: BlockingResponse) -> Response:
    """Build the response for a blocked request.

    A fresh ``Response`` is created per call; the ``BlockingResponse`` itself is
    never mutated and is safe to share across concurrent requests.

    Args:
        blocking: Configured status code, headers and body.

    Returns:
        Response with ``status_code == blocking.code``, ``body == blocking.body``
        and the configured multi-valued headers.
    """
    response = Response(content=blocking.body, status_code=blocking.code)
    for name, values in blocking.headers.items():
        for idx, value in enumerate(values):
            if idx == 0:
                response.headers[name] = value
            else:
                response.headers.append(name, value)
    return response
