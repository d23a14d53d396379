"""
Inventory cache

Every write is submit-then-refetch: after the service accepts a
create/update/delete the whole snapshot is refetched, never patched.
Only the items are persisted, not the loading/error flags.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.errors import ServiceError
from ..models.product import Product, ProductCreate, ProductUpdate
from ..services.inventory_client import InventoryClient
from .storage import KeyValueStorage
from .synchronizer import StoreSynchronizer

logger = logging.getLogger(__name__)


@dataclass
class InventorySummary:
    total_products: int
    total_value: float
    total_quantity: int


class InventoryStore(StoreSynchronizer[Product]):
    """Last full snapshot of all products"""

    def __init__(
        self,
        client: InventoryClient,
        storage: Optional[KeyValueStorage] = None,
        name: str = "products-storage",
    ):
        super().__init__(
            name=name,
            fetcher=client.list,
            model=Product,
            storage=storage,
            persist_flags=False,
            error_message="Error fetching products",
        )
        self._client = client

    @property
    def products(self) -> list[Product]:
        return self.items

    def get_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.items if p.id == product_id), None)

    def search(self, term: str) -> list[Product]:
        """Products whose name, batch or id contains term (case-insensitive)"""
        needle = term.strip().lower()
        if not needle:
            return list(self.items)
        return [
            p for p in self.items
            if needle in p.name.lower() or needle in p.batch.lower() or needle in str(p.id)
        ]

    def summary(self) -> InventorySummary:
        return InventorySummary(
            total_products=len(self.items),
            total_value=sum(p.price * p.available_quantity for p in self.items),
            total_quantity=sum(p.available_quantity for p in self.items),
        )

    # ==================== Writes ====================

    async def create_product(self, product: ProductCreate) -> Product:
        created = await self._client.create(product)
        logger.info(f"Product {created.id} created")
        await self._reconcile()
        return created

    async def update_product(self, product_id: int, fields: ProductUpdate) -> Product:
        updated = await self._client.update(product_id, fields)
        logger.info(f"Product {product_id} updated")
        await self._reconcile()
        return updated

    async def delete_product(self, product_id: int) -> None:
        await self._client.delete(product_id)
        logger.info(f"Product {product_id} deleted")
        await self._reconcile()

    async def _reconcile(self) -> None:
        # The write already committed; a failed refetch stays recorded on the cache
        try:
            await self.fetch_all()
        except ServiceError as exc:
            logger.warning(f"Inventory refetch after write failed: {exc.message}")
