"""
TaskHub Backend — Health Check Route
======================================

What:  GET /health for load balancers and container health checks.
How:   Runs `SELECT 1` against the database and counts live sessions.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from taskhub import __version__
from taskhub.database import Database, get_database
from taskhub.dependencies import get_session_store
from taskhub.schemas.common import HealthResponse
from taskhub.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    database: Database = Depends(get_database),
    store: SessionStore = Depends(get_session_store),
):
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        active_sessions=await store.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )

    if overall == "unhealthy":
        return JSONResponse(status_code=503, content=body.model_dump(by_alias=True))
    return body
