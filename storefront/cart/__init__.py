# Cart and stock rules

from .stock import StockLevel, LOW_STOCK_THRESHOLD, can_increment, stock_level
from .manager import CartManager, CartLine

__all__ = [
    "StockLevel",
    "LOW_STOCK_THRESHOLD",
    "can_increment",
    "stock_level",
    "CartManager",
    "CartLine",
]
