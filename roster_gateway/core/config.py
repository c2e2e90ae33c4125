# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service settings, read from the environment once at import.
Legacy variable names from the Node deployment are still honoured.
"""

import os


def _env(name: str, *fallbacks: str, default: str = "") -> str:
    """First non-empty value among ``name`` and its legacy aliases."""
    for key in (name, *fallbacks):
        value = os.getenv(key)
        if value:
            return value.strip()
    return default


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "roster-gateway")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("PORT", "3000"))

    # ── Upstream directory (Apps Script web app) ──
    DIRECTORY_URL: str = _env("DIRECTORY_URL", "APPS_SCRIPT_URL")
    DIRECTORY_AUTH_TOKEN: str = _env("DIRECTORY_AUTH_TOKEN", "APPS_SCRIPT_AUTH_TOKEN")
    DIRECTORY_TIMEOUT: float = float(os.getenv("DIRECTORY_TIMEOUT", "10.0"))
    DIRECTORY_DEADLINE: float = float(os.getenv("DIRECTORY_DEADLINE", "25.0"))
    DIRECTORY_RETRY_MAX_RETRIES: int = int(os.getenv("DIRECTORY_RETRY_MAX_RETRIES", "1"))
    DIRECTORY_RETRY_BACKOFF_BASE: float = float(os.getenv("DIRECTORY_RETRY_BACKOFF_BASE", "0.3"))
    DIRECTORY_ROSTER_QUERY: str = os.getenv("DIRECTORY_ROSTER_QUERY", "getMembros")
    DIRECTORY_ACTIVITY_QUERY: str = os.getenv("DIRECTORY_ACTIVITY_QUERY", "getPresencas")
    DIRECTORY_PRESENCE_ACTION: str = os.getenv("DIRECTORY_PRESENCE_ACTION", "registrarPresenca")

    # ── Caches ──
    ROSTER_CACHE_TTL: float = float(os.getenv("ROSTER_CACHE_TTL", "300"))
    ACTIVITY_CACHE_TTL: float = float(os.getenv("ACTIVITY_CACHE_TTL", "120"))
    WARM_CACHE_ON_STARTUP: bool = (
        os.getenv("WARM_CACHE_ON_STARTUP", "true").lower() == "true"
    )

    # ── Administrator bypass ──
    ADMIN_USERNAME: str = _env("ADMIN_USERNAME")
    ADMIN_CREDENTIAL: str = os.getenv("ADMIN_CREDENTIAL") or os.getenv("ADMIN_RI") or ""

    CORS_ORIGINS: list[str] = _env("CORS_ORIGINS", "FRONTEND_URL", default="*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def directory_configured(self) -> bool:
        return bool(self.DIRECTORY_URL and self.DIRECTORY_AUTH_TOKEN)

    @property
    def admin_configured(self) -> bool:
        return bool(self.ADMIN_USERNAME and self.ADMIN_CREDENTIAL)


settings = Settings()
