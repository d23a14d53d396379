"""
Inventory Service

In-memory reference implementation of the inventory and order
services the storefront talks to.
"""

from .main import create_app

__all__ = ["create_app"]
