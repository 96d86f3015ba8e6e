"""In-memory token store used by default."""

from __future__ import annotations

import threading
from datetime import timedelta

from bazaar_devapi.storage.base import Clock, StoredToken, utc_now, validate_token_write


class InMemoryTokenStore:
    """Holds one credential triple for the lifetime of the process."""

    def __init__(self, *, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._token = StoredToken()

    def snapshot(self) -> StoredToken:
        with self._lock:
            return self._token

    async def get_access_token(self) -> str:
        return self.snapshot().access_token

    async def get_refresh_token(self) -> str:
        return self.snapshot().refresh_token

    async def is_access_token_expired(self) -> bool:
        return self.snapshot().is_expired(self._clock())

    async def save(self, access_token: str, expires_in: timedelta, refresh_token: str) -> None:
        validate_token_write(
            access_token, expires_in, refresh_token, require_refresh_token=True
        )
        with self._lock:
            self._token = StoredToken(
                access_token=access_token,
                refresh_token=refresh_token,
                expires_at=self._clock() + expires_in,
            )

    async def renew(self, access_token: str, expires_in: timedelta) -> None:
        validate_token_write(access_token, expires_in)
        with self._lock:
            self._token = StoredToken(
                access_token=access_token,
                refresh_token=self._token.refresh_token,
                expires_at=self._clock() + expires_in,
            )


__all__ = ["InMemoryTokenStore"]
