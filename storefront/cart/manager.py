"""
Cart manager

Ephemeral, in-memory selection of products for the active session.

Quantity capping is a policy, not an error: an increment that would
exceed the stock ceiling is a silent no-op. Lines are validated against
the *current* cached product (via the product lookup), never against a
quantity frozen at add time. A product that vanishes from the cache
keeps its line, which can no longer grow but can still be removed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..models.product import Product
from .stock import can_increment

logger = logging.getLogger(__name__)

ProductLookup = Callable[[int], Optional[Product]]


@dataclass
class CartLine:
    """One product plus the quantity selected for purchase"""
    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def line_total(self) -> float:
        return self.quantity * self.product.price


class CartManager:
    """Owns the product -> quantity selection"""

    def __init__(self, product_lookup: Optional[ProductLookup] = None):
        """
        Args:
            product_lookup: Resolves a product id against the live inventory
                cache. Without one, the product passed to add_line is
                taken as current.
        """
        self._lines: dict[int, CartLine] = {}
        self._lookup = product_lookup
        self.revision = 0

    # ==================== Queries ====================

    def _resolve(self, line: CartLine) -> Optional[Product]:
        """Current product for a line, refreshing its last-known copy; None if gone"""
        if self._lookup is None:
            return line.product
        current = self._lookup(line.product_id)
        if current is not None:
            line.product = current
        return current

    def lines(self) -> list[CartLine]:
        """Snapshot of the cart lines with the freshest known product data"""
        result = []
        for line in self._lines.values():
            self._resolve(line)
            result.append(CartLine(product=line.product, quantity=line.quantity))
        return result

    def quantity_of(self, product_id: int) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line else 0

    def can_add(self, product_id: int) -> bool:
        """Whether add_line would grow this product's line"""
        line = self._lines.get(product_id)
        if line is not None:
            return can_increment(self._resolve(line), line.quantity)
        return can_increment(self._lookup(product_id) if self._lookup else None, 0)

    def missing_products(self) -> list[int]:
        """Ids of lines whose product is no longer in the inventory cache"""
        return [pid for pid, line in self._lines.items() if self._resolve(line) is None]

    def total(self) -> float:
        """Sum of quantity x price, recomputed on every call"""
        total = 0.0
        for line in self._lines.values():
            self._resolve(line)
            total += line.line_total
        return total

    def count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: int) -> bool:
        return product_id in self._lines

    # ==================== Mutations ====================

    def add_line(self, product: Product) -> bool:
        """
        Add one unit of product.

        Returns False, changing nothing, when the stock ceiling is reached
        or the product is unknown to the inventory cache.
        """
        line = self._lines.get(product.id)
        current_qty = line.quantity if line else 0
        current = self._lookup(product.id) if self._lookup else product

        if not can_increment(current, current_qty):
            logger.debug(f"Add capped for product {product.id} at quantity {current_qty}")
            return False

        if line:
            line.product = current
            line.quantity += 1
        else:
            self._lines[product.id] = CartLine(product=current, quantity=1)
        self._touch()
        return True

    def remove_one(self, product_id: int) -> None:
        """Remove one unit; a line reaching zero is deleted"""
        line = self._lines.get(product_id)
        if not line:
            return
        if line.quantity > 1:
            line.quantity -= 1
        else:
            del self._lines[product_id]
        self._touch()

    def remove_quantity(self, product_id: int, quantity: int) -> None:
        """Remove up to quantity units; a line reaching zero is deleted"""
        line = self._lines.get(product_id)
        if not line or quantity <= 0:
            return
        if line.quantity > quantity:
            line.quantity -= quantity
        else:
            del self._lines[product_id]
        self._touch()

    def remove_line(self, product_id: int) -> None:
        """Delete a line regardless of its quantity"""
        if self._lines.pop(product_id, None) is not None:
            self._touch()

    def clear(self) -> None:
        if self._lines:
            self._lines.clear()
            self._touch()

    def reconcile(self) -> list[int]:
        """
        Clamp lines to the current cached stock.

        Lines whose stock dropped to zero are removed; lines for products
        missing from the cache are left alone. Returns the ids of the
        lines that changed.
        """
        changed = []
        for product_id, line in list(self._lines.items()):
            current = self._resolve(line)
            if current is None or line.quantity <= current.available_quantity:
                continue
            if current.available_quantity <= 0:
                del self._lines[product_id]
            else:
                line.quantity = current.available_quantity
            changed.append(product_id)

        if changed:
            logger.info(f"Cart reconciled against inventory: adjusted products {changed}")
            self._touch()
        return changed

    def _touch(self) -> None:
        self.revision += 1
