"""
Middleware components for the JWeb health service.

This module contains FastAPI middleware for cross-cutting concerns
such as request correlation.
"""

from middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    get_request_id,
    request_id_var,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "get_request_id",
    "request_id_var",
]
