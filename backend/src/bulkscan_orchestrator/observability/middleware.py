"""FastAPI middleware for observability.

Correlates each HTTP request (CCD callbacks, health checks) with an ID taken from
the X-Request-ID header and logs its outcome.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import get_logger
from .request_id import correlation_scope, generate_request_id

logger = get_logger(__name__)

# Polled by the platform; not logged
POLLED_PATHS = frozenset({"/health", "/metrics"})


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to correlate requests and log their outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        quiet = request.url.path in POLLED_PATHS

        with correlation_scope(request_id):
            start_time = time.time()
            if not quiet:
                logger.info(f"{request.method} {request.url.path}")

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Request failed: {request.method} {request.url.path}: {e}",
                    extra={"duration_ms": round((time.time() - start_time) * 1000, 2)},
                    exc_info=True
                )
                raise

            if not quiet or response.status_code >= 500:
                logger.info(
                    f"Request completed: {response.status_code}",
                    extra={
                        "status_code": response.status_code,
                        "duration_ms": round((time.time() - start_time) * 1000, 2),
                    }
                )

        response.headers["X-Request-ID"] = request_id
        return response
