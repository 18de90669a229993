"""HTTP request logging middleware."""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Log method, path, status, and elapsed time of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000

    outcome = "ERROR" if response.status_code >= 400 else "SUCCESS"
    logger.info(
        "%s %s - %d %s - %.0fms",
        request.method,
        request.url.path,
        response.status_code,
        outcome,
        elapsed_ms,
    )
    return response
