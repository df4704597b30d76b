"""Litestar application factory.

``create_app()`` wires configuration, logging, the database engine, the
token authentication middleware, the exception handlers and the
controllers into one Litestar instance. The engine and session factory
live on ``app.state`` for the request-scoped session dependency.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide
from litestar.openapi import OpenAPIConfig

from confhub import __version__
from confhub.api.errors import EXCEPTION_HANDLERS
from confhub.api.health import HealthController
from confhub.api.settings import SettingsController
from confhub.config import Settings, load_settings
from confhub.core.auth import auth_middleware
from confhub.core.database import (
    create_engine,
    create_schema,
    create_session_factory,
    provide_session,
)
from confhub.core.logging_config import configure_logging

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)  # pyright: ignore[reportAny]


@asynccontextmanager
async def _lifespan(app: Litestar) -> AsyncGenerator[None]:
    """Create the schema if configured and dispose the engine on shutdown."""
    settings: Settings = app.state.settings  # pyright: ignore[reportAny]
    engine = app.state.engine  # pyright: ignore[reportAny]

    if settings.auto_create_schema:
        await create_schema(engine)  # pyright: ignore[reportAny]
        logger.info("database_schema_created")

    logger.info("confhub_started", database_url=engine.url.render_as_string())  # pyright: ignore[reportAny]
    try:
        yield
    finally:
        await engine.dispose()  # pyright: ignore[reportAny]
        logger.info("confhub_stopped")


def create_app(settings: Settings | None = None) -> Litestar:
    """Build the confhub Litestar application.

    Args:
        settings: Configuration to use. Loaded from the environment when None.

    Returns:
        The configured Litestar application.

    Raises:
        ConfigurationError: If settings are loaded and the environment is invalid.
    """
    if settings is None:
        settings = load_settings()

    configure_logging(settings.log_level, json_output=settings.log_json)

    engine = create_engine(settings.database_url, echo=settings.debug)
    session_factory = create_session_factory(engine)

    return Litestar(
        route_handlers=[SettingsController, HealthController],
        state=State(
            {
                "settings": settings,
                "engine": engine,
                "session_factory": session_factory,
            }
        ),
        dependencies={"session": Provide(provide_session)},
        middleware=[auth_middleware],
        exception_handlers=EXCEPTION_HANDLERS,
        lifespan=[_lifespan],
        openapi_config=OpenAPIConfig(title="confhub", version=__version__),
        debug=settings.debug,
    )
