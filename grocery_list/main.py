"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from grocery_list.api import categories, entries, frontend
from grocery_list.config import Settings, get_settings
from grocery_list.database import open_database
from grocery_list.exceptions import GroceryListError
from grocery_list.services.demo_reset import DemoResetScheduler

logger = logging.getLogger(__name__)


async def grocery_list_error_handler(request: Request, exc: GroceryListError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code, content={"detail": "Internal server error"}
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed with a database error")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for ``settings`` (the cached environment settings by default)."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the database and start the demo reset job if enabled."""
        logger.info(f"Starting grocery list backend on port {settings.port}")
        logger.info(f"Database URL: {settings.database_url}")
        logger.info(f"Running in demo mode: {settings.is_demo}")

        database = open_database(settings.database_url)
        app.state.database = database

        scheduler = None
        if settings.is_demo:
            scheduler = DemoResetScheduler(
                database,
                settings.demo_database_path,
                settings.demo_reset_interval_seconds,
            )
            scheduler.start()
        app.state.reset_scheduler = scheduler

        yield

        if scheduler is not None:
            await scheduler.stop()
        database.dispose()

    app = FastAPI(
        title="Grocery List API",
        description="Grocery list with categories, manual ordering and autocomplete",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(GroceryListError, grocery_list_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}

    # Register routers; the frontend catch-all must come last
    app.include_router(entries.router)
    app.include_router(categories.router)
    app.include_router(frontend.router)

    return app


app = create_app()
