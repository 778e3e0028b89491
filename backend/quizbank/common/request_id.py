"""Request ID middleware: assigns the ID, exposes it to logging, echoes it back."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from quizbank.core.config import settings
from quizbank.core.logging import get_logger, request_id_var

logger = get_logger(__name__)

# Polled by the orchestrator every few seconds
QUIET_PATHS = {f"{settings.API_PREFIX}/health", f"{settings.API_PREFIX}/ready"}


def elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for the lifetime of the request and log its outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        route = {"method": request.method, "path": request.url.path}
        quiet = request.url.path in QUIET_PATHS
        start = time.perf_counter()

        try:
            if not quiet:
                logger.info("Request started", extra={"event": "request_started", **route})
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "Request failed",
                    extra={"event": "request_failed", "latency_ms": elapsed_ms(start), **route},
                )
                raise

            response.headers["X-Request-ID"] = request_id
            if not quiet:
                logger.info(
                    "Request completed",
                    extra={
                        "event": "request_completed",
                        "status_code": response.status_code,
                        "latency_ms": elapsed_ms(start),
                        **route,
                    },
                )
            return response
        finally:
            request_id_var.reset(token)
