# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Presence writes and the derived "last seen" projection.

A presence write changes roster-derived facts, so both caches are
invalidated after the directory accepts it.
"""

from datetime import date, datetime
from typing import Any, Optional

from roster_gateway.core.config import settings
from roster_gateway.core.logging import get_logger
from roster_gateway.metrics.prometheus import PRESENCES_RECORDED
from roster_gateway.services.cache import TTLCache
from roster_gateway.services.directory_client import DirectoryClient
from roster_gateway.services.normalizer import normalize_strict

logger = get_logger(__name__)

DATE_FORMATS: tuple[str, ...] = ("%d/%m/%Y", "%d/%m/%Y %H:%M:%S", "%d/%m/%Y %H:%M")


def parse_presence_date(value: Any) -> Optional[date]:
    """Accept ISO dates/datetimes and dd/mm/yyyy; anything else is None."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


class PresenceService:
    def __init__(
        self,
        directory: DirectoryClient,
        activity_cache: TTLCache,
        roster_cache: TTLCache,
    ) -> None:
        self._directory = directory
        self._activity = activity_cache
        self._roster = roster_cache

    async def record_presence(self, payload: dict[str, Any]) -> dict[str, Any]:
        result = await self._directory.submit(settings.DIRECTORY_PRESENCE_ACTION, payload)
        PRESENCES_RECORDED.inc()
        self._roster.invalidate()
        self._activity.invalidate()
        logger.info("Presence recorded for '%s'", payload.get("Nome", "?"))
        return result

    async def last_seen(self) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = await self._activity.get()
        latest: dict[str, tuple[str, date]] = {}
        for row in rows:
            name = str(row.get("Nome") or "").strip()
            key = normalize_strict(name)
            seen = parse_presence_date(row.get("Data"))
            if not key or seen is None:
                continue
            current = latest.get(key)
            if current is None or seen > current[1]:
                latest[key] = (name, seen)
        ordered = sorted(latest.values(), key=lambda item: item[1], reverse=True)
        return [{"name": name, "last_seen": seen.isoformat()} for name, seen in ordered]
