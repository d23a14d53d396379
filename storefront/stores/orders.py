"""Order history cache; persists its full state including flags"""

from dataclasses import dataclass
from typing import Optional

from ..models.purchase import Purchase
from ..services.order_client import OrderClient
from .storage import KeyValueStorage
from .synchronizer import StoreSynchronizer


@dataclass
class OrderSummary:
    total_purchases: int
    total_sales: float
    total_items_sold: int


class OrderStore(StoreSynchronizer[Purchase]):
    """Last full snapshot of all purchases"""

    def __init__(
        self,
        client: OrderClient,
        storage: Optional[KeyValueStorage] = None,
        name: str = "purchase-storage",
    ):
        super().__init__(
            name=name,
            fetcher=client.list,
            model=Purchase,
            storage=storage,
            persist_flags=True,
            error_message="Error fetching purchases",
        )

    @property
    def purchases(self) -> list[Purchase]:
        return self.items

    def get_purchase(self, purchase_id: int) -> Optional[Purchase]:
        return next((p for p in self.items if p.id == purchase_id), None)

    def search(self, term: str) -> list[Purchase]:
        """Purchases matching id, client id, or any line's product name or batch"""
        needle = term.strip().lower()
        if not needle:
            return list(self.items)

        def matches(purchase: Purchase) -> bool:
            if needle in str(purchase.id) or needle in purchase.client_id.lower():
                return True
            return any(
                needle in item.product.name.lower() or needle in item.product.batch.lower()
                for item in purchase.items
            )

        return [p for p in self.items if matches(p)]

    def summary(self) -> OrderSummary:
        return OrderSummary(
            total_purchases=len(self.items),
            total_sales=sum(p.total for p in self.items),
            total_items_sold=sum(p.item_count for p in self.items),
        )
