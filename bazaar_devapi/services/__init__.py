"""Service layer exports."""

from .authorization import AuthorizationFlowCoordinator, resolve_redirect_uri
from .developer import DeveloperService
from .token_cipher import TokenCipherService
from .token_renewal import TokenRenewalGuard

__all__ = [
    "AuthorizationFlowCoordinator",
    "DeveloperService",
    "TokenCipherService",
    "TokenRenewalGuard",
    "resolve_redirect_uri",
]
