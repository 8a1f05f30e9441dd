"""
Health check endpoints.
"""

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from subsidiary_manager import __version__
from subsidiary_manager.application.dto.responses import DatabaseHealthResponse, HealthResponse
from subsidiary_manager.config import get_settings
from subsidiary_manager.core.exceptions import StorageError
from subsidiary_manager.infrastructure.storage import get_database

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=DatabaseHealthResponse)
async def db_health() -> DatabaseHealthResponse | JSONResponse:
    """
    Database health check.

    Round-trips a trivial query; 503 when the database is unreachable.
    """
    engine = get_settings().database.engine
    try:
        db = get_database()
        start = time.time()
        await db.ping()
        latency = (time.time() - start) * 1000
    except StorageError as e:
        body = DatabaseHealthResponse(status="unhealthy", engine=engine, error=e.message)
        return JSONResponse(status_code=503, content=body.model_dump())

    return DatabaseHealthResponse(status="healthy", engine=db.engine, latency_ms=latency)
