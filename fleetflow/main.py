from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from fleetflow.core.db import init_models
from fleetflow.core.environment import get_cors_origins
from fleetflow.core.logging import setup_logging
from fleetflow.exceptions import register_exception_handlers
from fleetflow.middleware.rate_limit import custom_rate_limit_exceeded, limiter
from fleetflow.routers import (
    analytics,
    auth,
    dashboard,
    drivers,
    expenses,
    health,
    maintenance,
    metrics,
    trips,
    vehicles,
)

# registers every table on Base.metadata
import fleetflow.models  # noqa: F401

logger = logging.getLogger(__name__)

ROUTERS = (
    health.router,
    auth.router,
    vehicles.router,
    drivers.router,
    trips.router,
    maintenance.router,
    expenses.router,
    dashboard.router,
    analytics.router,
    metrics.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("FleetFlow API started")
    yield
    logger.info("FleetFlow API stopped")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the FastAPI application. Tests pass use_lifespan=False and bring their own database."""
    app = FastAPI(title="FleetFlow API", lifespan=lifespan if use_lifespan else None)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, custom_rate_limit_exceeded)
    register_exception_handlers(app)

    # applies RATE_LIMIT_DEFAULT to routes without their own @limiter.limit
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],   # Allows POST, GET, PUT, OPTIONS
        allow_headers=["*"],
    )

    @app.get("/", tags=["root"])
    def root():
        return {"message": "FleetFlow API is running"}

    for router in ROUTERS:
        app.include_router(router)

    return app


setup_logging()
app = create_app()
