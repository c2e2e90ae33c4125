# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Member listing over the cached roster.
Thin HTTP layer — delegates ALL logic to MemberService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from roster_gateway.core.dependencies import get_member_service
from roster_gateway.core.errors import ConfigurationError, FetchError
from roster_gateway.schemas import MemberListResponse
from roster_gateway.services.member_service import MemberService

router = APIRouter(prefix="/api/v1", tags=["Members"])


@router.get("/members", response_model=MemberListResponse)
async def list_members(
    name: Optional[str] = Query(default=None, description="Words of the member's name"),
    group: Optional[str] = Query(default=None, description="Exact group / congregation"),
    leader: Optional[str] = Query(default=None, description="Leader name prefix"),
    service: MemberService = Depends(get_member_service),
):
    """List members (credentials are never returned)."""
    try:
        members = await service.list_members(name=name, group=group, leader=leader)
    except (FetchError, ConfigurationError) as e:
        raise HTTPException(status_code=502, detail=f"Directory unavailable: {e}")
    return MemberListResponse(count=len(members), membros=members)


@router.get("/members/leaders", response_model=MemberListResponse)
async def list_leaders(service: MemberService = Depends(get_member_service)):
    """Members recognised as leaders by role or by being someone's leader."""
    try:
        members = await service.list_leaders()
    except (FetchError, ConfigurationError) as e:
        raise HTTPException(status_code=502, detail=f"Directory unavailable: {e}")
    return MemberListResponse(count=len(members), membros=members)
