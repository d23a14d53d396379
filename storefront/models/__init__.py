# Storefront wire models

from .product import Product, ProductCreate, ProductUpdate
from .purchase import (
    Purchase,
    PurchaseLineItem,
    ProductSnapshot,
    PurchaseRequest,
    PurchaseItemRequest,
)

__all__ = [
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "Purchase",
    "PurchaseLineItem",
    "ProductSnapshot",
    "PurchaseRequest",
    "PurchaseItemRequest",
]
