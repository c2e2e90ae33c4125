# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy for the gateway.

Denied logins are not exceptions: they are ``AuthOutcome`` values.
Everything here describes a broken dependency, not a user mistake.
"""

from typing import Optional


class RosterGatewayError(Exception):
    """Base class for all gateway errors."""


class ConfigurationError(RosterGatewayError):
    """A required setting is missing; the code path depending on it is disabled."""


class FetchError(RosterGatewayError):
    """The upstream directory could not produce a usable answer. Never cached."""

    kind = "fetch"


class DirectoryTimeoutError(FetchError):
    kind = "timeout"


class DirectoryTransportError(FetchError):
    kind = "transport"


class DirectoryStatusError(FetchError):
    kind = "status"

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Directory returned HTTP {status_code}: {body[:200]}")


class DirectoryResponseError(FetchError):
    kind = "malformed"

    def __init__(self, message: str, upstream_message: Optional[str] = None):
        self.upstream_message = upstream_message
        super().__init__(message)
