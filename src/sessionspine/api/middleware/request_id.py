"""Request-ID middleware — injects ``X-Request-ID`` on every request.

Manifesto:
    Every request gets a unique ID so logs and error reports can be
    correlated.  The ID is also bound into the structlog context, so every
    log line emitted while serving the request carries it.

Tags:
    session-spine, api, middleware, request-id, tracing, correlation

Doc-Types:
    api-reference
"""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from sessionspine.core.logging import bind_context, clear_context


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every request/response cycle."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        clear_context()
        bind_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response
