# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Upstream directory client — inter-service communication.
Talks to the Apps Script web app that fronts the member spreadsheet,
with per-attempt timeouts, bounded retries for reads and an overall deadline.
"""

import asyncio
import time
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from roster_gateway.core.config import settings
from roster_gateway.core.errors import (
    ConfigurationError,
    DirectoryResponseError,
    DirectoryStatusError,
    DirectoryTimeoutError,
    DirectoryTransportError,
    FetchError,
)
from roster_gateway.core.logging import get_logger
from roster_gateway.metrics.prometheus import (
    DIRECTORY_LATENCY,
    DIRECTORY_REQUESTS,
    DIRECTORY_RETRIES,
)
from roster_gateway.models.domain import Member

logger = get_logger(__name__)

RETRYABLE_STATUSES: frozenset[int] = frozenset({502, 503, 504})


class DirectoryClient:
    """Async client for the upstream member directory."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        auth_token: Optional[str] = None,
        timeout: Optional[float] = None,
        deadline: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = settings.DIRECTORY_URL if base_url is None else base_url
        self.auth_token = settings.DIRECTORY_AUTH_TOKEN if auth_token is None else auth_token
        self.timeout = settings.DIRECTORY_TIMEOUT if timeout is None else timeout
        self.deadline = settings.DIRECTORY_DEADLINE if deadline is None else deadline
        self.max_retries = (
            settings.DIRECTORY_RETRY_MAX_RETRIES if max_retries is None else max_retries
        )
        self.backoff_base = (
            settings.DIRECTORY_RETRY_BACKOFF_BASE if backoff_base is None else backoff_base
        )
        self._client = http_client

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.auth_token)

    def attach(self, http_client: Optional[httpx.AsyncClient]) -> None:
        """Use a shared client (owned by the app lifespan) instead of one per call."""
        self._client = http_client

    # ── Domain queries ──

    async def fetch_roster(self) -> list[Member]:
        data = await self.query(settings.DIRECTORY_ROSTER_QUERY)
        rows = data.get("membros")
        if not isinstance(rows, list):
            raise DirectoryResponseError("Directory response has no 'membros' list")
        try:
            members = [Member.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise DirectoryResponseError(f"Directory returned an invalid member row: {exc}") from exc
        logger.info("Roster fetched: %d members", len(members))
        return members

    async def fetch_activity(self) -> list[dict[str, Any]]:
        data = await self.query(settings.DIRECTORY_ACTIVITY_QUERY)
        rows = data.get("presencas")
        if not isinstance(rows, list):
            raise DirectoryResponseError("Directory response has no 'presencas' list")
        return [row for row in rows if isinstance(row, dict)]

    # ── Transport ──

    async def query(self, query_type: str, **params: Any) -> dict[str, Any]:
        """GET ``?tipo=<query_type>``; the auth token travels as a query parameter."""
        query_params = {"tipo": query_type, **params, "auth_token": self.auth_token}
        return await self._call("GET", query_type, params=query_params)

    async def submit(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``?tipo=<action>``; the auth token travels in the JSON body."""
        body = {**payload, "auth_token": self.auth_token}
        return await self._call("POST", action, params={"tipo": action}, body=body)

    async def _call(
        self,
        method: str,
        label: str,
        params: dict[str, Any],
        body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        if not self.configured:
            raise ConfigurationError(
                "Directory URL or auth token not configured (DIRECTORY_URL / DIRECTORY_AUTH_TOKEN)"
            )
        start = time.monotonic()
        try:
            data = await asyncio.wait_for(
                self._call_with_retries(method, label, params, body),
                timeout=self.deadline,
            )
        except asyncio.TimeoutError:
            exc = DirectoryTimeoutError(
                f"Directory call '{label}' exceeded its {self.deadline:.1f}s deadline"
            )
            self._record_failure(label, exc)
            raise exc from None
        except FetchError as exc:
            self._record_failure(label, exc)
            raise
        DIRECTORY_REQUESTS.labels(query=label, outcome="ok").inc()
        DIRECTORY_LATENCY.labels(query=label).observe(time.monotonic() - start)
        return data

    async def _call_with_retries(
        self,
        method: str,
        label: str,
        params: dict[str, Any],
        body: Optional[dict[str, Any]],
    ) -> dict[str, Any]:
        # writes are never retried to avoid duplicate presence rows
        max_attempts = (1 + max(self.max_retries, 0)) if method == "GET" else 1

        for attempt in range(1, max_attempts + 1):
            try:
                resp = await self._send(method, params, body)
            except httpx.TimeoutException as exc:
                error: FetchError = DirectoryTimeoutError(
                    f"Directory call '{label}' timed out after {self.timeout:.1f}s: {exc}"
                )
            except httpx.RequestError as exc:
                error = DirectoryTransportError(f"Directory unreachable for '{label}': {exc}")
            except httpx.InvalidURL as exc:
                # a malformed DIRECTORY_URL fails the same way on every attempt
                raise DirectoryTransportError(
                    f"Directory URL is not usable for '{label}': {exc}"
                ) from exc
            except httpx.HTTPError as exc:
                error = DirectoryTransportError(f"Directory call '{label}' failed: {exc}")
            else:
                if resp.status_code in RETRYABLE_STATUSES and attempt < max_attempts:
                    error = DirectoryStatusError(resp.status_code, resp.text)
                else:
                    return self._parse(resp)

            if attempt >= max_attempts:
                raise error
            DIRECTORY_RETRIES.labels(query=label, attempt=str(attempt)).inc()
            logger.info("Retrying directory call '%s' (attempt %d): %s", label, attempt, error)
            await asyncio.sleep(self.backoff_base * (2 ** (attempt - 1)))

    async def _send(
        self,
        method: str,
        params: dict[str, Any],
        body: Optional[dict[str, Any]],
    ) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(
                method, self.base_url, params=params, json=body, timeout=self.timeout,
            )
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await client.request(method, self.base_url, params=params, json=body)

    @staticmethod
    def _parse(resp: httpx.Response) -> dict[str, Any]:
        if not resp.is_success:
            raise DirectoryStatusError(resp.status_code, resp.text)
        try:
            data = resp.json()
        except ValueError as exc:
            raise DirectoryResponseError(
                "Directory returned a non-JSON body; the script may have crashed"
            ) from exc
        if not isinstance(data, dict):
            raise DirectoryResponseError("Directory returned JSON that is not an object")
        if data.get("success") is False:
            upstream_message = data.get("message") or "Unknown error reported by the directory"
            raise DirectoryResponseError(upstream_message, upstream_message=upstream_message)
        return data

    @staticmethod
    def _record_failure(label: str, exc: FetchError) -> None:
        DIRECTORY_REQUESTS.labels(query=label, outcome=exc.kind).inc()
        if isinstance(exc, DirectoryTimeoutError):
            logger.warning("Directory timeout on '%s': %s", label, exc)
        elif isinstance(exc, DirectoryTransportError):
            logger.warning("Directory transport failure on '%s': %s", label, exc)
        elif isinstance(exc, DirectoryStatusError):
            logger.warning("Directory returned status %d on '%s'", exc.status_code, label)
        else:
            logger.warning("Directory returned an unusable response on '%s': %s", label, exc)
