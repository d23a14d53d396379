"""
Storefront

Client-side cart and checkout engine that keeps local inventory and
order caches consistent with a remote source of truth.
"""

from .shop import Storefront

__all__ = ["Storefront"]
