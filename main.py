"""
CountMe FastAPI Application
Main entry point: configuration, middleware, error handlers and routers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import health, logs, nutrition, meals, estimates, realtime

from domain.models import init_database
from adapters import NetworkMonitor, NutritionAPIClient, AIRecipeParser

from app.config import settings

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    countme_exception_handler,
    general_exception_handler,
)
from app.exceptions import CountMeError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("countme.main")


async def _init_database_with_retry() -> None:
    """Create the schema, retrying while the database is still coming up."""
    attempts = settings.db_init_attempts
    for attempt in range(1, attempts + 1):
        try:
            # init_database is blocking; keep it off the event loop
            await anyio.to_thread.run_sync(init_database)
        except Exception as exc:
            if attempt == attempts:
                _logger.error("Database initialization failed after %d attempts", attempt)
                raise
            _logger.warning(
                "Database init attempt %d/%d failed (%s); retrying in %.1fs",
                attempt,
                attempts,
                exc,
                settings.db_init_delay_sec,
            )
            await anyio.sleep(settings.db_init_delay_sec)
        else:
            _logger.info("Database ready after %d attempt(s)", attempt)
            return


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application startup and shutdown.
    Initializes the database with retries, creates the external clients and
    starts the network monitor.
    """
    _logger.info(f"Starting CountMe in {settings.environment.value} mode")
    await _init_database_with_retry()

    app.state.nutrition_client = NutritionAPIClient.from_settings()
    app.state.recipe_parser = AIRecipeParser.from_settings()
    if not settings.fatsecret_consumer_key:
        _logger.warning("FatSecret credentials are not configured; food search will fail")

    monitor: Optional[NetworkMonitor] = None
    if settings.network_monitor_enabled:
        monitor = NetworkMonitor.from_settings()
        monitor.start()
    app.state.network_monitor = monitor

    try:
        yield
    finally:
        _logger.info("Shutting down CountMe")
        if monitor is not None:
            await monitor.stop()
        try:
            app.state.nutrition_client.close()
            app.state.recipe_parser.close()
            _logger.info("HTTP clients closed")
        except Exception as e:
            _logger.exception("Error closing HTTP clients during shutdown: %s", e)


_docs_enabled = not settings.is_production()

app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=f"{settings.api_prefix}/openapi.json" if _docs_enabled else None,
    docs_url=f"{settings.api_prefix}/docs" if _docs_enabled else None,
    redoc_url=f"{settings.api_prefix}/redoc" if _docs_enabled else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

# Most specific first; Exception catches whatever the others miss
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(CountMeError, countme_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

for module in (health, logs, nutrition, meals, estimates, realtime):
    app.include_router(module.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
