import logging
import sys
import time
from contextlib import contextmanager
from typing import Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from sweetshop.core.config import settings

logger = logging.getLogger(__name__)

def configure_logging(level: Optional[str] = None) -> None:
    """Send application logs to stdout at the configured level."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

class LatencyTracker:
    """Tracks execution latency for named operations."""

    def __init__(self):
        self.measurements: Dict[str, float] = {}

    @contextmanager
    def measure(self, operation_name: str):
        start_time = time.perf_counter()
        try:
            yield
        finally:
            self.measurements[operation_name] = (time.perf_counter() - start_time) * 1000

    def get_measurement(self, operation_name: str) -> Optional[float]:
        return self.measurements.get(operation_name)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        tracker = LatencyTracker()
        with tracker.measure("request"):
            response = await call_next(request)
        duration_ms = tracker.get_measurement("request")
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.2f}ms)")
        return response
