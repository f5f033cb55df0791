"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from mailbridge.infrastructure import get_email_adapter, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    try:
        adapter = get_email_adapter()
        logger.info(f"Email provider: {adapter.name}")
    except Exception as e:
        logger.warning(f"Email adapter not ready (non-fatal): {e}")

    yield

    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Provider-agnostic outbound email delivery",
        lifespan=lifespan,
    )

    from mailbridge.api.routes import router

    app.include_router(router)

    return app


# Create app instance
app = create_app()
