# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Login decision for leaders and the administrator.

State machine (every path ends in exactly one terminal outcome):
    admin check ─► roster lookup ─► name resolution ─► credential check
                ─► leadership check ─► SUCCESS | DENIED | SERVER_ERROR

The admin check runs before the roster is touched, so the administrator
can still log in while the directory is down.
"""

from typing import Optional

from roster_gateway.core.config import settings
from roster_gateway.core.errors import ConfigurationError, FetchError
from roster_gateway.core.logging import get_logger
from roster_gateway.metrics.prometheus import LOGIN_ATTEMPTS
from roster_gateway.models.domain import AuthOutcome
from roster_gateway.services.cache import TTLCache
from roster_gateway.services.leadership import is_leader
from roster_gateway.services.name_matcher import resolve
from roster_gateway.services.normalizer import normalize

logger = get_logger(__name__)

MSG_DIRECTORY_UNAVAILABLE = "directory unavailable"
MSG_NOT_FOUND = "user not found"
MSG_INVALID_CREDENTIAL = "invalid credential"
MSG_NOT_LEADER = "not authorized: requires leadership"
MSG_INTERNAL_ERROR = "internal error"


class AuthService:
    """Business logic for the login endpoint."""

    def __init__(
        self,
        roster_cache: TTLCache,
        admin_username: Optional[str] = None,
        admin_credential: Optional[str] = None,
    ) -> None:
        self._roster = roster_cache
        self._admin_username = (
            settings.ADMIN_USERNAME if admin_username is None else admin_username
        )
        self._admin_credential = (
            settings.ADMIN_CREDENTIAL if admin_credential is None else admin_credential
        )

    @property
    def admin_configured(self) -> bool:
        return bool(self._admin_username and self._admin_credential)

    async def login(self, username, password) -> AuthOutcome:
        """Authenticate one login attempt. Never raises."""
        try:
            outcome = await self._login(username, password)
        except Exception:
            logger.exception("Unexpected failure while authenticating '%s'", username)
            outcome = AuthOutcome.server_error("internal_error", MSG_INTERNAL_ERROR)
        LOGIN_ATTEMPTS.labels(outcome=outcome.status.value, reason=outcome.reason).inc()
        return outcome

    async def _login(self, username, password) -> AuthOutcome:
        if self._is_admin(username, password):
            logger.info("Administrator login")
            return AuthOutcome.success("admin", "admin", "Login successful as administrator")

        try:
            roster = await self._roster.get()
        except (FetchError, ConfigurationError) as exc:
            logger.warning("Login aborted, directory unavailable: %s", exc)
            return AuthOutcome.server_error("directory_unavailable", MSG_DIRECTORY_UNAVAILABLE)
        if not roster:
            logger.warning("Login aborted, directory returned an empty roster")
            return AuthOutcome.server_error("directory_unavailable", MSG_DIRECTORY_UNAVAILABLE)

        match = resolve(username, roster)
        if not match.matched:
            logger.info("Login denied: no member matches '%s'", username)
            return AuthOutcome.denied("not_found", MSG_NOT_FOUND)
        member = match.member

        supplied = "" if password is None else str(password).strip()
        expected = member.credential.strip()
        # a member without a stored RI cannot log in with an empty password
        if not expected or supplied != expected:
            logger.info("Login denied: invalid credential for '%s'", member.name)
            return AuthOutcome.denied("invalid_credential", MSG_INVALID_CREDENTIAL)

        if not is_leader(member, roster):
            logger.info("Login denied: '%s' holds no leadership", member.name)
            return AuthOutcome.denied("not_leader", MSG_NOT_LEADER)

        logger.info("Leader login: '%s' (matched by %s)", member.name, match.tier.value)
        return AuthOutcome.success(member.name, "leader", f"Login successful, {member.name}!")

    def _is_admin(self, username, password) -> bool:
        if not self.admin_configured:
            return False
        return (
            normalize(username) == normalize(self._admin_username)
            and password == self._admin_credential
        )
