# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Read path over the cached roster — listing and filtering members.
Fetch errors propagate; the controller maps them to 502.
"""

from typing import Any, Optional

from roster_gateway.models.domain import Member
from roster_gateway.services.cache import TTLCache
from roster_gateway.services.leadership import extract_leader_name, is_leader
from roster_gateway.services.name_matcher import filter_by_name
from roster_gateway.services.normalizer import normalize, normalize_strict


class MemberService:
    def __init__(self, roster_cache: TTLCache) -> None:
        self._roster = roster_cache

    async def list_members(
        self,
        name: Optional[str] = None,
        group: Optional[str] = None,
        leader: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        members: list[Member] = await self._roster.get()
        members = filter_by_name(name, members)
        if group:
            wanted = normalize(group)
            members = [m for m in members if normalize(m.group_id) == wanted]
        if leader:
            wanted = normalize_strict(leader)
            members = [
                m for m in members
                if normalize_strict(extract_leader_name(m)).startswith(wanted)
            ]
        return [m.public_view() for m in members]

    async def list_leaders(self) -> list[dict[str, Any]]:
        roster: list[Member] = await self._roster.get()
        return [m.public_view() for m in roster if is_leader(m, roster)]
