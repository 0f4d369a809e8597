"""Logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortlink.common.headers import client_address


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request: method, path, status, duration and client."""
    
    def __init__(self, app, logger: logging.Logger = None):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortlink.web")
    
    async def dispatch(self, request: Request, call_next: Callable):
        """Log request and response."""
        start_time = time.perf_counter()
        
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        client = client_address(request.headers, request.client.host if request.client else None)
        
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.error(
                f"{request.method} {path} - Status: 500 - "
                f"Duration: {duration_ms:.2f}ms - Client: {client}"
            )
            raise
        
        duration_ms = (time.perf_counter() - start_time) * 1000
        self.logger.info(
            f"{request.method} {path} - Status: {response.status_code} - "
            f"Duration: {duration_ms:.2f}ms - Client: {client}"
        )
        
        return response
