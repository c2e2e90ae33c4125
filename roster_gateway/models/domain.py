# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Member(BaseModel):
    """A read-only copy of one directory row.

    Field aliases are the spreadsheet column names the directory emits.
    Columns we do not model are kept as extras and passed through.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    name: str = Field(default="", alias="Nome")
    credential: str = Field(default="", alias="RI")
    role_title: str = Field(default="", alias="Cargo")
    status: str = Field(default="", alias="Status")
    leader_field: str = Field(default="", alias="Lider")
    group_id: str = Field(default="", alias="Congregacao")

    @field_validator(
        "name", "credential", "role_title", "status", "leader_field", "group_id",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        # the sheet hands back numbers for numeric cells (RI especially)
        if v is None:
            return ""
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v)

    def public_view(self) -> dict[str, Any]:
        """Upstream-shaped dict without the credential."""
        data = self.model_dump(by_alias=True)
        data.pop("RI", None)
        return data


class MatchTier(str, Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    WORD_SUBSET = "word_subset"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    member: Optional[Member]
    tier: MatchTier

    @property
    def matched(self) -> bool:
        return self.member is not None


NO_MATCH = MatchResult(member=None, tier=MatchTier.NONE)


@dataclass(frozen=True)
class CacheEntry:
    """Cached value and the monotonic time it was fetched, published together."""
    value: Any
    fetched_at: float


class AuthStatus(str, Enum):
    SUCCESS = "success"
    DENIED = "denied"
    SERVER_ERROR = "server_error"


class AuthOutcome(BaseModel):
    """Terminal result of one login attempt."""

    status: AuthStatus
    ok: bool
    message: str
    principal_name: Optional[str] = None
    role: Optional[Literal["admin", "leader"]] = None
    reason: str

    @classmethod
    def success(cls, principal_name: str, role: str, message: str) -> "AuthOutcome":
        return cls(
            status=AuthStatus.SUCCESS, ok=True, message=message,
            principal_name=principal_name, role=role, reason=role,
        )

    @classmethod
    def denied(cls, reason: str, message: str) -> "AuthOutcome":
        return cls(status=AuthStatus.DENIED, ok=False, message=message, reason=reason)

    @classmethod
    def server_error(cls, reason: str, message: str) -> "AuthOutcome":
        return cls(status=AuthStatus.SERVER_ERROR, ok=False, message=message, reason=reason)
