"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.logging_config import configure_logging

from .dependencies import get_container
from .errors import register_exception_handlers
from .routes import health
from modules.accounts.routes import profile_router, sessions_router, users_router
from modules.boards.routes import router as boards_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Builds the service container before serving traffic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    get_container().initialize()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Collaborative whiteboard API: accounts, boards and sharing",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app, debug=settings.debug)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(sessions_router, prefix="/api/sessions", tags=["sessions"])
    app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
    app.include_router(boards_router, prefix="/api/boards", tags=["boards"])

    return app


# Application instance for uvicorn
app = create_app()
