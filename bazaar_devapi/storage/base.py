"""
Storage contract for the Cafe Bazaar credential triple.

Any object providing these coroutines can back the token lifecycle; the
in-memory store is the default and the SQLite store shows a durable variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol, runtime_checkable

from bazaar_devapi.core.errors import ValidationError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class StoredToken:
    """Snapshot of the credential triple; replaced wholesale on every write."""

    access_token: str = ""
    refresh_token: str = ""
    expires_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        if not self.access_token or self.expires_at is None:
            return True
        return self.expires_at <= now


@runtime_checkable
class TokenStore(Protocol):
    """Process-shared holder of the access token, refresh token and expiry."""

    async def get_access_token(self) -> str:
        ...

    async def get_refresh_token(self) -> str:
        ...

    async def is_access_token_expired(self) -> bool:
        ...

    async def save(self, access_token: str, expires_in: timedelta, refresh_token: str) -> None:
        ...

    async def renew(self, access_token: str, expires_in: timedelta) -> None:
        ...


def validate_token_write(
    access_token: str,
    expires_in: timedelta,
    refresh_token: Optional[str] = None,
    *,
    require_refresh_token: bool = False,
) -> None:
    """Shared argument checks for ``save`` and ``renew``."""
    if not access_token:
        raise ValidationError("Access token must not be empty.", fields=("access_token",))
    if expires_in <= timedelta(0):
        raise ValidationError("Token lifetime has already elapsed.", fields=("expires_in",))
    if require_refresh_token and not refresh_token:
        raise ValidationError("Refresh token must not be empty.", fields=("refresh_token",))


__all__ = [
    "Clock",
    "StoredToken",
    "TokenStore",
    "utc_now",
    "validate_token_write",
]
