"""Public schema exports."""

from .requests import (
    BazaarRequest,
    CancelSubscriptionRequest,
    ObtainTokenRequest,
    RenewTokenRequest,
    ValidatePurchaseRequest,
    ValidateSubscriptionRequest,
)
from .results import (
    BazaarResult,
    CancelSubscriptionResult,
    ObtainTokenResult,
    RenewTokenResult,
    ValidatePurchaseResult,
    ValidateSubscriptionResult,
)

__all__ = [
    "BazaarRequest",
    "BazaarResult",
    "CancelSubscriptionRequest",
    "CancelSubscriptionResult",
    "ObtainTokenRequest",
    "ObtainTokenResult",
    "RenewTokenRequest",
    "RenewTokenResult",
    "ValidatePurchaseRequest",
    "ValidatePurchaseResult",
    "ValidateSubscriptionRequest",
    "ValidateSubscriptionResult",
]
