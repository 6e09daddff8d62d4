"""Request Logging — one structured log line per HTTP request.

Invariants:
    - Logs method, path, status_code, duration_ms, client_id (when admission ran)
    - Never logs headers or bodies (auth-token stays out of the logs)
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("notes_api.requests")


def register_request_logging(app: FastAPI) -> None:
    """Attach the timing middleware to the app."""

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "client_id": getattr(request.state, "client_id", None),
            },
        )
        return response
