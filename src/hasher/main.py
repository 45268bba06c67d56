import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hasher.config import settings
from hasher.error_handlers import register_error_handlers
from hasher.middleware import InFlightMiddleware, RequestLogMiddleware
from hasher.routes.hash_route import router as hash_router
from hasher.routes.health import router as health_router
from hasher.routes.stats_route import router as stats_router
from hasher.services import Services, build_services
from hasher.work import HASH_DELAY_SECONDS

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    services: Services = app.state.services
    logger.info("Hash service started")

    yield

    # Shutdown: in-flight requests drain, background workers do not
    logger.info("Shutting down, waiting for pending requests to complete...")
    await services.coordinator.wait_drained(timeout=settings.drain_timeout)
    await services.scheduler.abandon()
    logger.info("Graceful shutdown complete")


def create_app(hash_delay: float = HASH_DELAY_SECONDS) -> FastAPI:
    app = FastAPI(
        title="Password Hash Service",
        description="Accepts passwords, hashes them after a delay, and reports timing stats",
        version="0.1.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    services = build_services(hash_delay=hash_delay)
    app.state.services = services

    register_error_handlers(app)
    app.add_middleware(InFlightMiddleware, coordinator=services.coordinator)
    app.add_middleware(RequestLogMiddleware)
    app.include_router(hash_router)
    app.include_router(stats_router)
    app.include_router(health_router)
    return app


app = create_app()
