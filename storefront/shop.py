"""
Storefront

Composition root: owns both caches, the cart and the checkout flow,
and wires the one deliberate coupling between the caches (a committed
purchase refetches the inventory).
"""

import asyncio
import logging
import uuid
from typing import Optional

import httpx

from .cart.manager import CartManager
from .cart.stock import StockLevel, stock_level
from .checkout.confirmation import PurchaseConfirmation
from .checkout.orchestrator import PurchaseOrchestrator
from .core.config import Settings, get_settings
from .core.errors import ServiceError
from .core.events import EventBus, PurchaseCompleted
from .core.identity import IdentityProvider, StoredIdentity
from .models.purchase import Purchase
from .services.inventory_client import InventoryClient
from .services.order_client import OrderClient
from .stores.inventory import InventoryStore
from .stores.orders import OrderStore
from .stores.storage import JsonFileStorage, KeyValueStorage

logger = logging.getLogger(__name__)


class Storefront:
    """
    Shopping session over the inventory and order services.

    Usage:
        shop = Storefront.from_settings()
        await shop.start()

        shop.add_to_cart(product_id)
        purchase = await shop.checkout()
    """

    def __init__(
        self,
        inventory: InventoryStore,
        orders: OrderStore,
        orchestrator: PurchaseOrchestrator,
        identity: IdentityProvider,
        events: EventBus,
        confirmation: Optional[PurchaseConfirmation] = None,
    ):
        self.inventory = inventory
        self.orders = orders
        self.orchestrator = orchestrator
        self.identity = identity
        self.events = events
        self.confirmation = confirmation or PurchaseConfirmation()
        self.cart = CartManager(product_lookup=inventory.get_product)

        self._pending_key: Optional[str] = None
        self._pending_revision: Optional[int] = None
        self._closers: list = []

        self._unsubscribers = [
            events.subscribe(PurchaseCompleted, self._on_purchase_completed),
            inventory.subscribe(lambda _products: self.cart.reconcile()),
        ]

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        storage: Optional[KeyValueStorage] = None,
        identity: Optional[IdentityProvider] = None,
    ) -> "Storefront":
        """Build a storefront and its collaborators from settings"""
        settings = settings or get_settings()
        storage = storage or JsonFileStorage(settings.storage_path)
        # Without a client passed in, the inventory client owns one and lends it out
        inventory_client = InventoryClient(
            settings.api_base_url,
            http_client=http_client,
            timeout=settings.request_timeout,
            path=settings.products_path,
        )
        order_client = OrderClient(
            settings.api_base_url,
            http_client=inventory_client.http_client,
            path=settings.purchases_path,
        )
        events = EventBus()

        shop = cls(
            inventory=InventoryStore(inventory_client, storage, name=settings.inventory_cache_key),
            orders=OrderStore(order_client, storage, name=settings.orders_cache_key),
            orchestrator=PurchaseOrchestrator(order_client, events),
            identity=identity or StoredIdentity(storage),
            events=events,
            confirmation=PurchaseConfirmation(timeout=settings.confirmation_timeout),
        )
        shop._closers.extend([order_client.close, inventory_client.close])
        return shop

    async def start(self) -> None:
        """Seed both caches from storage, then refetch them"""
        self.inventory.load()
        self.orders.load()
        results = await asyncio.gather(
            self.inventory.fetch_all(),
            self.orders.fetch_all(),
            return_exceptions=True,
        )
        for store, result in zip((self.inventory, self.orders), results):
            if isinstance(result, ServiceError):
                logger.warning(f"Initial fetch of {store.name} failed: {result.message}")
            elif isinstance(result, BaseException):
                raise result

    async def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self.confirmation.dismiss()
        for closer in self._closers:
            await closer()

    # ==================== Cart ====================

    def add_to_cart(self, product_id: int) -> bool:
        """Add one unit of a cached product; False when capped or unknown"""
        product = self.inventory.get_product(product_id)
        if product is None:
            return False
        return self.cart.add_line(product)

    def stock_level(self, product_id: int) -> StockLevel:
        return stock_level(self.inventory.get_product(product_id))

    # ==================== Checkout ====================

    async def checkout(self) -> Purchase:
        """
        Purchase the cart contents.

        On success the cart is emptied, both caches have been refetched and
        the confirmation is shown. On failure the error propagates and the
        cart is left intact for a manual retry, which reuses the same
        idempotency key as long as the cart was not changed in between.
        """
        lines = self.cart.lines()
        revision = self.cart.revision
        purchase = await self.orchestrator.submit_purchase(
            lines,
            self.identity.client_id,
            idempotency_key=self._idempotency_key(),
        )
        if self.cart.revision == revision:
            self.cart.clear()
        else:
            # The cart changed while the purchase was in flight; keep what was not bought
            for line in lines:
                self.cart.remove_quantity(line.product_id, line.quantity)
        self._pending_key = None
        self._pending_revision = None
        self.confirmation.show(purchase)
        return purchase

    def _idempotency_key(self) -> str:
        if self._pending_key is None or self._pending_revision != self.cart.revision:
            self._pending_key = uuid.uuid4().hex
            self._pending_revision = self.cart.revision
        return self._pending_key

    async def _on_purchase_completed(self, event: PurchaseCompleted) -> None:
        logger.info(f"Purchase {event.purchase.id} completed, refreshing caches")
        for store in (self.inventory, self.orders):
            try:
                await store.fetch_all()
            except ServiceError as exc:
                logger.warning(f"Refetch of {store.name} after purchase failed: {exc.message}")
