"""Purchase storage with atomic stock commit"""

import asyncio
from datetime import datetime
from typing import Optional

from storefront.models.purchase import (
    Purchase,
    PurchaseLineItem,
    ProductSnapshot,
    PurchaseRequest,
)

from .products import ProductDatabase


class UnknownProductError(Exception):
    """A requested product does not exist"""
    pass


class InsufficientStockError(Exception):
    """A requested quantity exceeds the available stock"""
    pass


class IdempotencyMismatchError(Exception):
    """A key was reused by the same client with a different request"""
    pass


class PurchaseDatabase:
    """
    In-memory purchase storage.

    commit_purchase checks and decrements stock for every line under a
    single lock, so of two purchases contending for the last unit
    exactly one succeeds.
    """

    def __init__(self, product_db: ProductDatabase):
        self.product_db = product_db
        self.purchases: dict[int, Purchase] = {}
        # (client_id, key) -> (original request, purchase id)
        self.idempotency_keys: dict[tuple[str, str], tuple[PurchaseRequest, int]] = {}
        self._next_id = 1
        self._next_item_id = 1
        self._lock = asyncio.Lock()

    def get_purchase(self, purchase_id: int) -> Optional[Purchase]:
        """Get a purchase by ID"""
        return self.purchases.get(purchase_id)

    def list_purchases(self) -> list[Purchase]:
        """List purchases, newest first"""
        return sorted(self.purchases.values(), key=lambda p: (p.created_at, p.id), reverse=True)

    async def commit_purchase(
        self,
        request: PurchaseRequest,
        idempotency_key: Optional[str] = None,
    ) -> Purchase:
        """
        Validate stock, decrement it and record the purchase.

        Keys are scoped per client. A key seen before for the same client
        and request returns the purchase committed under it.

        Raises:
            UnknownProductError: a line references a missing product
            InsufficientStockError: a line asks for more than is available
            IdempotencyMismatchError: the key was used before with another request
        """
        async with self._lock:
            scoped_key = (request.client_id, idempotency_key) if idempotency_key else None
            if scoped_key in self.idempotency_keys:
                original, purchase_id = self.idempotency_keys[scoped_key]
                if original != request:
                    raise IdempotencyMismatchError(
                        "Idempotency key already used with a different request"
                    )
                return self.purchases[purchase_id]

            products = []
            for item in request.items:
                product = self.product_db.get_product(item.product_id)
                if not product:
                    raise UnknownProductError(f"Product {item.product_id} not found")
                if product.available_quantity < item.quantity:
                    raise InsufficientStockError(f"Insufficient stock for {product.name}")
                products.append(product)

            line_items = []
            for item, product in zip(request.items, products):
                self.product_db.update_stock(product.id, -item.quantity)
                line_items.append(
                    PurchaseLineItem(
                        id=self._next_item_id,
                        product_id=product.id,
                        quantity=item.quantity,
                        product=ProductSnapshot(
                            id=product.id,
                            name=product.name,
                            batch=product.batch,
                            price=product.price,
                        ),
                    )
                )
                self._next_item_id += 1

            purchase = Purchase(
                id=self._next_id,
                client_id=request.client_id,
                total=round(sum(line.line_total for line in line_items), 2),
                created_at=datetime.utcnow(),
                items=line_items,
            )
            self._next_id += 1
            self.purchases[purchase.id] = purchase
            if scoped_key:
                self.idempotency_keys[scoped_key] = (request, purchase.id)
            return purchase
