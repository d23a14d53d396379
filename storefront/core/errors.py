"""Storefront error taxonomy"""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for storefront errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Request rejected locally, before any network call"""
    pass


class ServiceError(StorefrontError):
    """Non-success response or transport failure from a remote service"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConflictError(ServiceError):
    """Server-detected stock insufficiency at commit time"""
    pass
