"""
Factory functions providing the process-wide token store, vendor client and
services as FastAPI dependencies.
"""

import logging
from functools import lru_cache

from bazaar_devapi.clients import DeveloperApiClient
from bazaar_devapi.dependencies.config import get_app_settings
from bazaar_devapi.services import (
    AuthorizationFlowCoordinator,
    DeveloperService,
    TokenCipherService,
    TokenRenewalGuard,
)
from bazaar_devapi.storage import InMemoryTokenStore, SQLiteTokenStore, TokenStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for durable token storage."""
    settings = get_app_settings()
    secret = settings.storage.token_encryption_secret or settings.bazaar.client_secret
    return TokenCipherService(secret=secret)


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the single token store shared by every request in the process."""
    storage = get_app_settings().storage
    if storage.token_store_backend == "sqlite":
        logger.info("Using SQLite token store at %s", storage.token_store_path)
        return SQLiteTokenStore(
            storage.token_store_path,
            cipher=get_token_cipher_service(),
        )
    return InMemoryTokenStore()


@lru_cache()
def get_developer_api_client() -> DeveloperApiClient:
    """Provide the Cafe Bazaar HTTP client."""
    return DeveloperApiClient(get_app_settings().bazaar)


@lru_cache()
def get_token_renewal_guard() -> TokenRenewalGuard:
    return TokenRenewalGuard(
        get_app_settings().bazaar,
        get_developer_api_client(),
        get_token_store(),
    )


@lru_cache()
def get_authorization_coordinator() -> AuthorizationFlowCoordinator:
    """Provide the authorization-code flow coordinator."""
    return AuthorizationFlowCoordinator(
        get_app_settings().bazaar,
        get_developer_api_client(),
        get_token_store(),
    )


@lru_cache()
def get_developer_service() -> DeveloperService:
    """Provide purchase and subscription operations."""
    return DeveloperService(
        get_developer_api_client(),
        get_token_store(),
        get_token_renewal_guard(),
    )


__all__ = [
    "get_authorization_coordinator",
    "get_developer_api_client",
    "get_developer_service",
    "get_token_cipher_service",
    "get_token_renewal_guard",
    "get_token_store",
]
