"""SQLite-backed token store keeping the credential triple encrypted at rest."""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

from bazaar_devapi.services.token_cipher import TokenCipherService
from bazaar_devapi.storage.base import Clock, StoredToken, utc_now, validate_token_write

logger = logging.getLogger(__name__)


class SQLiteTokenStore:
    """Persist a single credential triple row in a local SQLite database."""

    def __init__(
        self,
        db_path: str,
        *,
        cipher: TokenCipherService,
        clock: Clock = utc_now,
    ) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._cipher = cipher
        self._clock = clock
        self._lock = threading.Lock()
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS bazaar_tokens (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    access_token TEXT NOT NULL,
                    refresh_token TEXT NOT NULL,
                    expires_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )

    def _load(self) -> StoredToken:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT access_token, refresh_token, expires_at FROM bazaar_tokens WHERE id = 1"
            ).fetchone()
        if not row:
            return StoredToken()
        expires_at = datetime.fromisoformat(row["expires_at"])
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return StoredToken(
            access_token=self._cipher.decrypt(row["access_token"]),
            refresh_token=self._cipher.decrypt(row["refresh_token"]),
            expires_at=expires_at,
        )

    def _write(self, access_token: str, refresh_token: str, expires_at: datetime) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO bazaar_tokens (id, access_token, refresh_token, expires_at, updated_at)
                VALUES (1, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    access_token = excluded.access_token,
                    refresh_token = excluded.refresh_token,
                    expires_at = excluded.expires_at,
                    updated_at = excluded.updated_at
                """,
                (
                    self._cipher.encrypt(access_token),
                    self._cipher.encrypt(refresh_token),
                    expires_at.isoformat(),
                    self._clock().isoformat(),
                ),
            )

    def snapshot(self) -> StoredToken:
        with self._lock:
            return self._load()

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
            self._write(access_token, refresh_token, self._clock() + expires_in)
        logger.debug("Persisted Cafe Bazaar credentials to %s", self._db_path)

    async def renew(self, access_token: str, expires_in: timedelta) -> None:
        validate_token_write(access_token, expires_in)
        with self._lock:
            current = self._load()
            self._write(access_token, current.refresh_token, self._clock() + expires_in)


__all__ = ["SQLiteTokenStore"]
