# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Authentication — login endpoint."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from roster_gateway.core.dependencies import get_auth_service
from roster_gateway.models.domain import AuthStatus
from roster_gateway.schemas import LoginRequest, LoginResponse
from roster_gateway.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1", tags=["Auth"])

STATUS_CODES: dict[AuthStatus, int] = {
    AuthStatus.SUCCESS: 200,
    AuthStatus.DENIED: 401,
    AuthStatus.SERVER_ERROR: 503,
}


@router.post("/auth/login", response_model=LoginResponse)
async def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    outcome = await service.login(payload.username, payload.password)
    body = LoginResponse(
        success=outcome.ok,
        message=outcome.message,
        leader_name=outcome.principal_name,
        role=outcome.role,
    )
    return JSONResponse(
        status_code=STATUS_CODES[outcome.status],
        content=body.model_dump(by_alias=True),
    )
