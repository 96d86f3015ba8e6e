"""Exception hierarchy shared by the token lifecycle and the vendor client."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Tag carried by every developer API error so callers can branch on it."""

    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    VENDOR = "vendor"
    TRANSPORT = "transport"


class DeveloperApiError(RuntimeError):
    """Base error for every failure surfaced by this package."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DeveloperApiError):
    """Caller input is malformed; raised before any network call."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, *, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class UnauthorizedError(DeveloperApiError):
    """No refresh token is on record; the authorization flow must run first."""

    kind = ErrorKind.UNAUTHORIZED


class VendorError(DeveloperApiError):
    """The vendor answered, but its payload reports a failure."""

    kind = ErrorKind.VENDOR

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class TransportError(DeveloperApiError):
    """The round trip failed or returned something that is not a vendor payload."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "DeveloperApiError",
    "ErrorKind",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "VendorError",
]
