"""HTTP middleware for scrape correlation and structured logging.

Provide middleware to manage request-scoped context variables, so every log
line written while answering a scrape (including the status translator's)
carries the same request ID.
"""

import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from atlassian_status_exporter.core.logging_config import bind_contextvars, clear_contextvars


class RequestCorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a request ID and the request path to the logging context.

    The ID comes from an upstream `X-Request-ID` header when present and is
    echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next):
        clear_contextvars()

        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        bind_contextvars(request_id=request_id, path=request.url.path)

        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response
