"""
Application assembly.

Builds the FastAPI app around an already wired session stack so the same
assembly serves production (main.py) and tests.
"""

import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from . import __version__
from .modules.api.consumer import create_consumer_router
from .modules.api.routes import create_session_router
from .modules.factory import SharedSessionComponents
from .modules.middleware import use_shared_sessions

logger = logging.getLogger(__name__)


def create_app(components: SharedSessionComponents) -> FastAPI:
    """
    Create the SharedSession FastAPI application.

    Args:
        components: Session stack built by SharedSessionFactory

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting SharedSession API...")
        yield
        logger.info("Shutting down SharedSession API...")
        await components.close()
        logger.info("SharedSession API shutdown complete")

    app = FastAPI(
        title="SharedSession API",
        description="Server-side sessions shared between web applications",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.components = components

    use_shared_sessions(
        app,
        components.session_store,
        components.protection_provider,
        components.options,
    )

    app.include_router(create_session_router(components.session_service))
    app.include_router(create_consumer_router())

    @app.get("/healthz")
    async def healthz():
        """
        Minimal health check endpoint for readiness/liveness probes.

        Returns:
            200: Service is running
        """
        return {"status": "ok"}

    @app.get("/health")
    async def health_check():
        """
        Health check including the session cache.

        Returns:
            200: Service healthy
            503: Session cache unreachable
        """
        try:
            cache_ok = await components.cache.ping()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(status_code=503, content={"status": "unhealthy", "error": str(e)})

        if not cache_ok:
            return JSONResponse(status_code=503, content={"status": "unhealthy", "cache": "disconnected"})

        return {"status": "healthy", "cache": "connected", "version": __version__}

    @app.exception_handler(redis.ConnectionError)
    async def redis_error_handler(request, exc):
        """Handle Redis connection errors."""
        logger.error(f"Redis connection error: {exc}")
        return JSONResponse(status_code=503, content={"error": "Session store connection failed"})

    @app.exception_handler(ValueError)
    async def validation_error_handler(request, exc):
        """Handle validation errors."""
        logger.error(f"Validation error: {exc}")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    return app
