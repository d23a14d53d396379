# Core storefront infrastructure

from .config import Settings, get_settings, configure_logging
from .errors import StorefrontError, ValidationError, ServiceError, ConflictError
from .events import EventBus, PurchaseCompleted
from .identity import IdentityProvider, StaticIdentity, StoredIdentity

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "StorefrontError",
    "ValidationError",
    "ServiceError",
    "ConflictError",
    "EventBus",
    "PurchaseCompleted",
    "IdentityProvider",
    "StaticIdentity",
    "StoredIdentity",
]
