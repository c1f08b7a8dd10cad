"""
Request ID middleware for request correlation.

Every request gets an ID, taken from the X-Request-ID header when the caller
(a probe, a load balancer) supplies one. The ID is echoed back in the
response, stored on request.state for the error handlers, and placed in a
context variable so every log line written while serving the request
carries it.
"""

import uuid
from contextvars import ContextVar
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches a correlation ID to each request."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            # Reset so the ID does not leak into the next request on this task
            request_id_var.reset(token)


def get_request_id() -> str:
    """
    Get the current request ID.

    Returns:
        The current request ID, or empty string outside a request
    """
    return request_id_var.get()
