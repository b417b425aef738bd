# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Request logging wrapper for endpoint functions.

The logger is passed in explicitly so each app instance (and each test) can
supply its own sink.
"""
import functools
import time
from typing import Any, Awaitable, Callable

from fastapi import Request, Response

Handler = Callable[[Request], Awaitable[Response]]


def remote_addr(request: Request) -> str:
    """Caller address as host:port, or "-" when the transport gives none."""
    if request.client is None:
        return "-"
    return f"{request.client.host}:{request.client.port}"


def with_logging(logger: Any, handler: Handler) -> Handler:
    """Wrap an endpoint so every call is logged with its duration.
    
    Args:
        logger: structlog logger receiving request_started/request_completed
        handler: Endpoint taking the request and returning a response
        
    Returns:
        Handler: Wrapped endpoint with the same signature
        
    Assumptions:
    - handler never raises; it always produces a response
    - The wrapper does not touch the response
    """
    @functools.wraps(handler)
    async def wrapper(request: Request) -> Response:
        start = time.perf_counter()
        context = {
            "method": request.method,
            "path": request.url.path,
            "remote_addr": remote_addr(request),
        }
        logger.info("request_started", **context)
        response = await handler(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 3),
            **context
        )
        return response
    
    return wrapper
