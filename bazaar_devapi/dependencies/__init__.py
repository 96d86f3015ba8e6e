"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_authorization_coordinator,
    get_developer_api_client,
    get_developer_service,
    get_token_cipher_service,
    get_token_renewal_guard,
    get_token_store,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_app_settings",
    "get_authorization_coordinator",
    "get_developer_api_client",
    "get_developer_service",
    "get_token_cipher_service",
    "get_token_renewal_guard",
    "get_token_store",
]
