"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) because:
- Easier to test with different configurations
- Explicit about initialization order

For local development:
    uvicorn coaching_api.main:app --reload --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .api.errors import ApiError, api_error_handler
from .api.routes import coachings, health, projects
from .config.settings import Settings, get_settings
from .infrastructure.mongo.client import MongoConfig, create_mongo_store

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=get_settings().log_level.upper(),
)

logger = logging.getLogger(__name__)


class HelloResponse(BaseModel):
    message: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the store handle on startup and closes it on shutdown. Routes
    reach it through `app.state.store`.
    """
    settings: Settings = app.state.settings

    logger.info(
        "Coaching API starting",
        extra={
            "version": settings.api_version,
            "mock_mode": {"mongodb": settings.mongodb_mock_mode},
        }
    )

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        logger.error(
            "Missing required configuration",
            extra={"missing_fields": missing_fields}
        )

    app.state.store = create_mongo_store(
        config=MongoConfig(
            uri=settings.mongodb_uri,
            database=settings.mongodb_database,
            max_pool_size=settings.mongodb_max_pool_size,
            server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
        ),
        mock_mode=settings.mongodb_mock_mode,
    )

    try:
        yield
    finally:
        app.state.store.close()
        logger.info("Coaching API shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application. Tests pass their own
    settings; otherwise they come from the environment.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Role-scoped access to projects and coachings.

        ## Authentication

        Endpoints under `/coachings` and `/projects` require the caller's
        user id in the `X-User-Id` header.

        ## Roles

        - **ops**: everything
        - **pm**: records of the projects they manage
        - **client**: coachings where they are the client
        - **coach**: coachings where they are the coach

        Any other role receives 403.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        coachings.router,
        prefix="/coachings",
        tags=["Coachings"],
    )

    app.include_router(
        projects.router,
        prefix="/projects",
        tags=["Projects"],
    )

    @app.get("/", response_model=HelloResponse, include_in_schema=False)
    @app.get("/hello", response_model=HelloResponse, tags=["Hello"])
    async def hello() -> HelloResponse:
        """Unauthenticated hello endpoint."""
        return HelloResponse(message="Hello World!")

    app.add_exception_handler(ApiError, api_error_handler)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Catch-all exception handler.

        Logs the full error server-side but returns a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.api_title,
            "version": settings.api_version,
        }
    )

    return app


# Create the application instance
# This is what uvicorn imports
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "coaching_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
