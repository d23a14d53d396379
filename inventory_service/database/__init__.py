# Database modules

from .products import ProductDatabase, SEED_PRODUCTS
from .purchases import (
    PurchaseDatabase,
    InsufficientStockError,
    UnknownProductError,
    IdempotencyMismatchError,
)

__all__ = [
    "ProductDatabase",
    "SEED_PRODUCTS",
    "PurchaseDatabase",
    "InsufficientStockError",
    "UnknownProductError",
    "IdempotencyMismatchError",
]
