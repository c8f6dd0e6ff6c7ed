"""Application factory."""

import contextlib
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI

from .. import __version__
from ..config import Settings, configure_logging, get_settings
from ..persistence import (
    build_engine,
    build_session_factory,
    create_tables,
    seed_database,
    session_scope,
)
from ..specifications import build_default_registry
from .errors import register_exception_handlers
from .routes import router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    The engine is created here; tables are created (and the demo dataset
    optionally loaded) when the application starts.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    engine = build_engine(settings.database_url, echo=settings.echo_sql)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await create_tables(engine)
        if settings.seed_data:
            async with session_scope(app.state.session_factory) as session:
                await seed_database(session)
        logger.info("Person service started (database: %s)", engine.url)
        yield
        await engine.dispose()
        logger.info("Person service stopped")

    app = FastAPI(title="Person Service", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.registry = build_default_registry()

    register_exception_handlers(app)
    app.include_router(router)
    return app
