import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lingopress.config import Settings, settings
from lingopress.database import Database, create_database
from lingopress.exception_handlers import register_exception_handlers
from lingopress.middleware.language import LanguageMiddleware
from lingopress.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from lingopress.routes import articles, health, languages, newsletter, seo, tags

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up the application...")
    config: Settings = app.state.settings
    if config.debug:
        await app.state.database.create_all()
        logger.info("Database tables created (if not existing).")

    yield

    logger.info("Shutting down the application...")
    await app.state.database.dispose()


def create_app(database: Database | None = None, config: Settings = settings) -> FastAPI:
    """Create the FastAPI application.

    The database handle is created here, once per process, and shared by
    every request through ``app.state.database``.
    """
    app = FastAPI(
        title=config.app_name,
        description=config.app_description,
        debug=config.debug,
        version=config.app_version,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = database or create_database(config)

    # Last added runs outermost; logging wraps the language resolver
    app.add_middleware(LanguageMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(seo.router)
    app.include_router(languages.router)
    app.include_router(tags.router)
    app.include_router(articles.router)
    app.include_router(articles.admin_router)
    app.include_router(newsletter.router)

    if config.debug:
        logger.info(f"Running in {config.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        logging.getLogger("sqlalchemy.pool").setLevel(logging.INFO)

    return app


setup_structured_logging(settings.log_level, json_format=settings.log_json)
app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
