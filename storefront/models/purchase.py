"""Purchase models"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import WireModel


class ProductSnapshot(WireModel):
    """Product details frozen at purchase time"""
    id: int
    name: str
    batch: str
    price: float


class PurchaseLineItem(WireModel):
    """Line of a committed purchase"""
    id: Optional[int] = None
    product_id: int
    quantity: int = Field(gt=0)
    product: ProductSnapshot

    @property
    def line_total(self) -> float:
        return self.quantity * self.product.price


class Purchase(WireModel):
    """Committed purchase; total is computed by the order service"""
    id: int
    client_id: str
    total: float
    created_at: datetime
    items: list[PurchaseLineItem] = []

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class PurchaseItemRequest(WireModel):
    """Requested line: product and quantity only, never a price"""
    product_id: int
    quantity: int = Field(gt=0)


class PurchaseRequest(WireModel):
    """Purchase submission sent to the order service"""
    client_id: str
    items: list[PurchaseItemRequest]
