# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire the directory client, caches and services.
Tests swap any of these through ``app.dependency_overrides``.
"""

import httpx

from roster_gateway.core.config import settings
from roster_gateway.metrics.prometheus import ROSTER_SIZE
from roster_gateway.services.auth_service import AuthService
from roster_gateway.services.cache import TTLCache
from roster_gateway.services.directory_client import DirectoryClient
from roster_gateway.services.member_service import MemberService
from roster_gateway.services.presence_service import PresenceService

# ── Upstream client and caches (process-wide, one instance each) ──
_http_client: httpx.AsyncClient | None = None
_directory_client = DirectoryClient()
_roster_cache = TTLCache(
    "roster",
    loader=_directory_client.fetch_roster,
    ttl_seconds=settings.ROSTER_CACHE_TTL,
    on_refresh=lambda roster: ROSTER_SIZE.set(len(roster)),
)
_activity_cache = TTLCache(
    "activity",
    loader=_directory_client.fetch_activity,
    ttl_seconds=settings.ACTIVITY_CACHE_TTL,
)

# ── Service instances (with injected dependencies) ──
_auth_service = AuthService(roster_cache=_roster_cache)
_member_service = MemberService(roster_cache=_roster_cache)
_presence_service = PresenceService(
    directory=_directory_client,
    activity_cache=_activity_cache,
    roster_cache=_roster_cache,
)


def init_http_client() -> None:
    global _http_client
    _http_client = httpx.AsyncClient(timeout=settings.DIRECTORY_TIMEOUT, follow_redirects=True)
    _directory_client.attach(_http_client)


async def close_http_client() -> None:
    global _http_client
    _directory_client.attach(None)
    if _http_client:
        await _http_client.aclose()
        _http_client = None


# ── FastAPI dependency functions ──
def get_directory_client() -> DirectoryClient:
    return _directory_client


def get_roster_cache() -> TTLCache:
    return _roster_cache


def get_activity_cache() -> TTLCache:
    return _activity_cache


def get_auth_service() -> AuthService:
    return _auth_service


def get_member_service() -> MemberService:
    return _member_service


def get_presence_service() -> PresenceService:
    return _presence_service
