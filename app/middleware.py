"""Custom middleware"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def _level_for(status_code: int) -> int:
    """Server errors at ERROR, missing files and other client errors at WARNING"""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware to log request timing, with the level set by response status"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = (time.time() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}"

        logger.log(
            _level_for(response.status_code),
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {process_time:.2f}ms",
        )

        return response
