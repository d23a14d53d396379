"""
Stock constraint validator

Pure predicates over live stock. Both the cart increment gate and any
stock-state display read from here so they never disagree.
"""

from enum import Enum
from typing import Optional

from ..models.product import Product

LOW_STOCK_THRESHOLD = 10


class StockLevel(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW = "low"
    AVAILABLE = "available"


def can_increment(product: Optional[Product], current_qty: int) -> bool:
    """True iff one more unit of product may be added on top of current_qty"""
    if product is None:
        return False
    return product.available_quantity > 0 and current_qty < product.available_quantity


def stock_level(product: Optional[Product]) -> StockLevel:
    """Classify a product's stock; an unknown product reads as out of stock"""
    if product is None or product.available_quantity <= 0:
        return StockLevel.OUT_OF_STOCK
    if product.available_quantity < LOW_STOCK_THRESHOLD:
        return StockLevel.LOW
    return StockLevel.AVAILABLE
