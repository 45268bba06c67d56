import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from hasher.drain import ShutdownCoordinator

logger = logging.getLogger("hasher.request")


class InFlightMiddleware(BaseHTTPMiddleware):
    """Counts every request in the shutdown coordinator while it is handled."""

    def __init__(self, app, coordinator: ShutdownCoordinator):
        super().__init__(app)
        self.coordinator = coordinator

    async def dispatch(self, request: Request, call_next):
        with self.coordinator.track():
            return await call_next(request)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()
        client = request.client.host if request.client else "-"
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "client=%s method=%s path=%s status=500 duration_ms=%.2f UNHANDLED",
                client, request.method, request.url.path, (time.monotonic() - start) * 1000,
            )
            raise
        logger.info(
            "client=%s method=%s path=%s status=%s duration_ms=%.2f",
            client, request.method, request.url.path, response.status_code,
            (time.monotonic() - start) * 1000,
        )
        return response
