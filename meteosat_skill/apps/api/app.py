"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from meteosat_skill.apps.api.middleware import CorrelationIdMiddleware
from meteosat_skill.core.logging import get_logger
from meteosat_skill.core.regions import REGIONS
from meteosat_skill.services import ServiceContainer

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=unused-argument
    """Log service start and stop."""
    logger.info("Initializing meteosat skill with %d regions...", len(REGIONS))
    yield
    logger.info("meteosat skill stopped.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(lifespan=lifespan)
    # Handlers resolve their services from app.state.
    app.state.services = services
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import health, skill  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(skill.router)
    return app


__all__ = ["create_app", "lifespan"]
