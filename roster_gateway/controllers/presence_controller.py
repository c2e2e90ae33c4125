# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Presence writes, last-seen projection and cache invalidation."""
from fastapi import APIRouter, Depends, HTTPException

from roster_gateway.core.dependencies import (
    get_activity_cache,
    get_presence_service,
    get_roster_cache,
)
from roster_gateway.core.errors import ConfigurationError, FetchError
from roster_gateway.schemas import LastSeenEntry, PresenceRequest
from roster_gateway.services.cache import TTLCache
from roster_gateway.services.presence_service import PresenceService

router = APIRouter(prefix="/api/v1", tags=["Presences"])


@router.post("/presences")
async def record_presence(
    payload: PresenceRequest,
    service: PresenceService = Depends(get_presence_service),
):
    try:
        result = await service.record_presence(payload.model_dump(by_alias=True, exclude_none=True))
    except (FetchError, ConfigurationError) as e:
        raise HTTPException(status_code=502, detail=f"Directory rejected the presence: {e}")
    return {"success": True, "message": result.get("message", "Presence recorded")}


@router.get("/presences/last-seen", response_model=list[LastSeenEntry])
async def last_seen(service: PresenceService = Depends(get_presence_service)):
    try:
        return await service.last_seen()
    except (FetchError, ConfigurationError) as e:
        raise HTTPException(status_code=502, detail=f"Directory unavailable: {e}")


@router.post("/cache/invalidate")
async def invalidate_caches(
    roster: TTLCache = Depends(get_roster_cache),
    activity: TTLCache = Depends(get_activity_cache),
):
    """Operator hook for edits made directly in the sheet."""
    roster.invalidate()
    activity.invalidate()
    return {"status": "invalidated", "caches": [roster.name, activity.name]}
