"""
Stock Panel - Request Logging Middleware
"""
import time

from fastapi import FastAPI, Request
from loguru import logger


def register_request_logging(app: FastAPI) -> None:
    """Log every request with its outcome and duration."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        client = request.client.host if request.client else "unknown"
        user_agent = request.headers.get("user-agent", "unknown")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{duration_ms:.1f}ms client={client} ua={user_agent}"
        )
        return response
