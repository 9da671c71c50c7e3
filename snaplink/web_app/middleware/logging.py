"""Request logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and duration.

    5xx responses are logged at WARNING; the route that produced them has
    already logged the traceback.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("snaplink.web")

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{client_ip} {request.method} {request.url.path} -> "
            f"{response.status_code} ({duration_ms:.2f}ms)",
        )
        return response
