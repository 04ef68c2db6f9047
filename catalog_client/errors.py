"""Error taxonomy shared by the transport, codec and client operations."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure classifications."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    INVALID_IDENTIFIER = "invalid_identifier"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"


_TERMINAL_KINDS = frozenset(
    {ErrorKind.UNAUTHORIZED, ErrorKind.FORBIDDEN, ErrorKind.NOT_FOUND}
)


def is_terminal(kind: ErrorKind) -> bool:
    """Return ``True`` when a failure of ``kind`` must not be retried."""
    return kind in _TERMINAL_KINDS


class CatalogError(RuntimeError):
    """Base class for catalog client failures."""

    kind: ErrorKind = ErrorKind.PROTOCOL


class Unauthorized(CatalogError):
    """Raised when the token is missing or rejected (HTTP 401)."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "unauthorized: invalid or missing token"):
        super().__init__(message)


class Forbidden(CatalogError):
    """Raised when the token lacks permissions (HTTP 403)."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "forbidden: insufficient permissions"):
        super().__init__(message)


class NotFound(CatalogError):
    """Raised when the requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "entity not found"):
        super().__init__(message)


class RateLimited(CatalogError):
    """Raised when the catalog throttles the caller (HTTP 429)."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str = "rate limited by catalog"):
        super().__init__(message)


class Timeout(CatalogError):
    """Raised when a request fails after the caller's deadline expired."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = "request timed out"):
        super().__init__(message)


class InvalidIdentifier(CatalogError, ValueError):
    """Raised when a URN does not match any supported shape."""

    kind = ErrorKind.INVALID_IDENTIFIER


class TransportError(CatalogError):
    """Raised for network failures and unexpected HTTP statuses."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(CatalogError):
    """Raised when a 200 response cannot be turned into a payload."""

    kind = ErrorKind.PROTOCOL


class RetriesExhausted(CatalogError):
    """Raised when every attempt of a call failed with a retryable error."""

    def __init__(
        self,
        name: str,
        attempts: int,
        last_error: CatalogError,
    ) -> None:
        super().__init__(
            f"{name}: giving up after {attempts} attempt(s): {last_error}"
        )
        self.name = name
        self.attempts = attempts
        self.last_error = last_error

    @property
    def kind(self) -> ErrorKind:  # type: ignore[override]
        return self.last_error.kind


class ConfigurationError(RuntimeError):
    """Raised when the client configuration is incomplete or invalid."""
