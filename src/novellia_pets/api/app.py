"""
FastAPI application factory and server entry point.

The application owns exactly one ``SessionManager``. It is either built from
configuration when the application starts (and disposed when it stops) or
injected by the caller, which keeps the lifecycle under the caller's control.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..database.connection import create_engine, wait_for_database
from ..database.session import SessionManager
from ..exceptions import ConnectionException
from ..models.base import Base
from ..utils.config import AppConfig, LoggingConfigurator
from .errors import register_exception_handlers
from .routes import api_router

logger = logging.getLogger(__name__)


def _build_session_manager(config: AppConfig) -> SessionManager:
    engine = create_engine(
        config.database_url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        echo=config.echo,
    )
    return SessionManager(engine, statement_timeout=config.statement_timeout)


def create_app(
    config: Optional[AppConfig] = None,
    session_manager: Optional[SessionManager] = None,
) -> FastAPI:
    """
    Create the pets API application.

    Args:
        config: Runtime configuration; read from the environment when omitted
            and no session manager is supplied
        session_manager: Ready store handle; when given, the application
            neither creates nor disposes the engine

    Returns:
        Configured FastAPI application with every router under ``/api``
    """
    if config is None and session_manager is None:
        config = AppConfig.from_environment()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if session_manager is not None:
            yield
            return

        manager = _build_session_manager(config)
        try:
            await wait_for_database(manager.engine, timeout=float(config.pool_timeout))
            if config.create_schema:
                if not await manager.initialize_database(Base.metadata):
                    raise ConnectionException("Database initialization failed")
            app.state.session_manager = manager
            logger.info("Pets API started")
            yield
        finally:
            await manager.close_all_sessions()
            logger.info("Pets API stopped")

    app = FastAPI(title="Novellia Pets API", version=__version__, lifespan=lifespan)

    if session_manager is not None:
        app.state.session_manager = session_manager

    origins = config.cors_origins if config is not None else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


def main() -> None:
    """Run the API server with configuration from the environment."""
    config = AppConfig.from_environment()
    LoggingConfigurator.configure_basic_logging(config.log_level)

    logger.info(f"Starting Pets API on {config.host}:{config.port}")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
