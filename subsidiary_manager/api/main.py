"""
FastAPI application factory.

Creates and configures the main application instance.
"""

import asyncio
import contextlib
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from subsidiary_manager import __version__
from subsidiary_manager.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from subsidiary_manager.api.middleware.error_handler import setup_exception_handlers
from subsidiary_manager.api.routes import (
    auth_router,
    config_router,
    health_router,
    inventory_router,
    overview_router,
    reports_router,
    sales_router,
    subsidiaries_router,
    users_router,
)
from subsidiary_manager.application.bootstrap import run_delayed_bootstrap
from subsidiary_manager.config import Settings, configure_logging, get_logger, get_settings
from subsidiary_manager.core.interfaces import ISessionStore
from subsidiary_manager.infrastructure.storage import (
    Database,
    MemorySessionStore,
    SQLSessionStore,
    SQLUserStore,
    close_database,
    init_database,
)
from subsidiary_manager.infrastructure.storage.database.migrations import run_migrations

logger = get_logger(__name__)


def create_session_store(settings: Settings, db: Database) -> ISessionStore:
    """Database-backed or in-process sessions, per AUTH_SESSION_BACKEND."""
    backend = settings.session_backend
    if backend == "database":
        store: ISessionStore = SQLSessionStore(db)
    else:
        store = MemorySessionStore(settings.auth.memory_check_period_seconds)
        if settings.database.engine != "sqlite":
            logger.warning(
                "sessions_in_memory",
                engine=settings.database.engine,
                detail="sessions are lost on restart and not shared between workers",
            )
    logger.info("session_store_ready", backend=backend)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Connects and migrates the database before serving. Any failure there
    is fatal so the process exits instead of serving without storage.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        db = await init_database(settings.database)
        await run_migrations(db)
        logger.info("database_initialized", engine=db.engine)
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        await close_database()
        raise

    session_store = create_session_store(settings, db)
    app.state.session_store = session_store
    await session_store.prune_expired()

    bootstrap_task = asyncio.create_task(
        run_delayed_bootstrap(SQLUserStore(db), settings.auth)
    )

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    bootstrap_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await bootstrap_task

    await close_database()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Head-company and subsidiary inventory, sales and staff management",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS; credentials are needed for the session cookie
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(subsidiaries_router)
    app.include_router(inventory_router)
    app.include_router(sales_router)
    app.include_router(users_router)
    app.include_router(overview_router)
    app.include_router(reports_router)
    app.include_router(config_router)

    return app


# Create app instance
app = create_app()


# Root health endpoint (for k8s/docker health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {
        "status": "healthy",
        "version": __version__,
    }
