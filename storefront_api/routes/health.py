"""
Storefront API - Health Check Route
=====================================

What:  Liveness + database check for monitoring and load balancer probes.
How:   Runs `SELECT 1 AS ok` on a pooled connection.

Status levels:
    200 {"status": "ok", "db": true}      database answered
    500 {"status": "error", "db": false}  database unreachable
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from storefront_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Server OK", "model": HealthResponse},
        500: {"description": "Database unreachable", "model": HealthResponse},
    },
    summary="Liveness + DB check",
)
async def health_check(request: Request):
    """Probe the database with SELECT 1 and report the result."""
    try:
        db_ok = await request.app.state.db.ping()
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        return JSONResponse(status_code=500, content={"status": "error", "db": False})

    return HealthResponse(status="ok", db=db_ok)
