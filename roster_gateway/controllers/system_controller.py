# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints — health, readiness, metrics."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from roster_gateway.core.config import settings
from roster_gateway.core.dependencies import get_roster_cache
from roster_gateway.services.cache import TTLCache

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}


@router.get("/health/ready")
async def readiness(roster: TTLCache = Depends(get_roster_cache)):
    """Ready once a fresh roster is cached."""
    entry = roster.peek()
    ready = roster.is_fresh()
    body = {
        "status": "ready" if ready else "not_ready",
        "service": settings.SERVICE_NAME,
        "roster_loaded": entry is not None,
        "roster_members": len(entry.value) if entry is not None else 0,
        "roster_age_seconds": roster.age(),
    }
    return JSONResponse(status_code=200 if ready else 503, content=body)


@router.get("/metrics")
async def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
