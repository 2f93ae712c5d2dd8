# app/middleware/metrics.py
import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)


def new_metrics() -> dict:
    return {
        "requests": 0,
        "errors": 0,
        "total_response_ms": 0.0,
    }


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Collects in-process metrics on app.state.metrics:
      - total requests
      - responses with status >= 400
      - total response time (ms)
    app.state may not exist yet while the middleware stack builds, so the
    counters are created lazily on the first request.
    """

    def __init__(self, app, dispatch: Callable = None):
        super().__init__(app, dispatch=dispatch)

    async def dispatch(self, request: Request, call_next):
        metrics = getattr(request.app.state, "metrics", None)
        if metrics is None:
            metrics = request.app.state.metrics = new_metrics()

        start = time.perf_counter()
        status_code = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
        except Exception:
            # unhandled errors are turned into 500s by ServerErrorMiddleware, outside this one
            metrics["errors"] += 1
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            metrics["requests"] += 1
            metrics["total_response_ms"] += elapsed_ms
            logger.debug(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status=status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )

        if status_code >= 400:
            metrics["errors"] += 1
        return response
