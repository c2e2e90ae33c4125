# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""

    @field_validator("username", "password", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        # numeric RIs are often posted as JSON numbers
        return "" if v is None else str(v)


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    leader_name: Optional[str] = Field(default=None, serialization_alias="leaderName")
    role: Optional[str] = None


class MemberListResponse(BaseModel):
    success: bool = True
    count: int
    membros: list[dict[str, Any]]


class PresenceRequest(BaseModel):
    """Presence row forwarded to the directory; extra columns pass through."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(..., min_length=1, max_length=255, alias="Nome")
    date: Optional[str] = Field(default=None, alias="Data")
    group_id: Optional[str] = Field(default=None, alias="Congregacao")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class LastSeenEntry(BaseModel):
    name: str
    last_seen: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
