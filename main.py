# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Roster Gateway
==============
Fronts the member directory (an Apps Script web app over the member sheet)
with a read-through roster cache and the leader login used by the
attendance front-end.

    POST /api/v1/auth/login          admin / leader login
    GET  /api/v1/members             cached roster, filterable
    GET  /api/v1/members/leaders     members holding leadership
    POST /api/v1/presences           record presence (invalidates caches)
    GET  /api/v1/presences/last-seen last presence per member
    POST /api/v1/cache/invalidate    force the next read to refetch

Port: 3000
"""
import asyncio
import contextlib
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roster_gateway.controllers import (
    auth_controller,
    member_controller,
    presence_controller,
    system_controller,
)
from roster_gateway.core.config import settings
from roster_gateway.core.dependencies import (
    close_http_client,
    get_auth_service,
    get_roster_cache,
    init_http_client,
)
from roster_gateway.core.logging import get_logger
from roster_gateway.middleware import MetricsMiddleware, RequestIDMiddleware
from roster_gateway.schemas import ErrorResponse

logger = get_logger("roster-gateway")


def _log_configuration() -> None:
    if not settings.directory_configured:
        logger.warning(
            "DIRECTORY_URL / DIRECTORY_AUTH_TOKEN not set; roster access disabled, "
            "leader logins will report the directory as unavailable"
        )
    if not get_auth_service().admin_configured:
        logger.warning("ADMIN_USERNAME / ADMIN_CREDENTIAL not set; administrator login disabled")


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Shared HTTP client, non-blocking roster warm-up, clean shutdown."""
    init_http_client()
    _log_configuration()
    warmup = None
    if settings.WARM_CACHE_ON_STARTUP and settings.directory_configured:
        warmup = asyncio.create_task(get_roster_cache().warm())
    logger.info("Roster gateway starting on port %d", settings.SERVICE_PORT)
    yield
    if warmup is not None and not warmup.done():
        warmup.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await warmup
    await close_http_client()
    logger.info("Roster gateway shut down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Roster Gateway",
    description="Cached member directory and leader authentication.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": None, "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(auth_controller.router)
app.include_router(member_controller.router)
app.include_router(presence_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
