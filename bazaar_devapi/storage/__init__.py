"""Token store contract and implementations."""

from .base import StoredToken, TokenStore, validate_token_write
from .memory import InMemoryTokenStore
from .sqlite import SQLiteTokenStore

__all__ = [
    "InMemoryTokenStore",
    "SQLiteTokenStore",
    "StoredToken",
    "TokenStore",
    "validate_token_write",
]
