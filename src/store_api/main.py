"""
Application factory and entry point.

    uvicorn "store_api.main:create_app" --factory
    store-api            # console script, see pyproject.toml
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from store_api.api.v1.error_handlers import register_exception_handlers
from store_api.api.v1.router import api_router
from store_api.config.settings import Settings, get_settings
from store_api.core.logging import RequestIDMiddleware, setup_logging
from store_api.database.connection import Database
from store_api.utils.metadata import get_project_version

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    *,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings: defaults to get_settings()
        database: an existing Database handle (tests inject one); when omitted
            the app creates its own from settings.database_url and disposes it
            on shutdown
        configure_logging: apply setup_logging(settings); tests that already
            configured logging pass False
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    owns_database = database is None
    database = database or Database(settings.database_url, echo=settings.SQLALCHEMY_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.init_schema()
        logger.info("app.startup", extra={"env": settings.ENV})
        try:
            yield
        finally:
            if owns_database:
                await database.dispose()
            logger.info("app.shutdown")

    app = FastAPI(title=settings.APP_NAME, version=get_project_version(), lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "store_api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # logging is configured by create_app
    )


if __name__ == "__main__":
    run()
