"""Shared fixtures for the storefront tests"""

from datetime import date
from typing import Callable, Optional

import httpx

from inventory_service import create_app
from storefront.core.config import Settings
from storefront.core.identity import StaticIdentity
from storefront.models.product import Product, ProductCreate
from storefront.shop import Storefront
from storefront.stores.storage import MemoryStorage

BASE_URL = "http://inventory.test"


def make_product(
    product_id: int = 1,
    price: float = 10.0,
    available_quantity: int = 3,
    name: Optional[str] = None,
    batch: Optional[str] = None,
) -> Product:
    return Product(
        id=product_id,
        batch=batch or f"LOT-{product_id:03d}",
        name=name or f"Product {product_id}",
        price=price,
        available_quantity=available_quantity,
        entry_date=date(2024, 1, 1),
    )


def seeded_app(*products: ProductCreate):
    """Service app holding exactly the given products (ids from 1)"""
    app = create_app(seed=False)
    for product in products:
        app.state.product_db.create_product(product)
    return app


def product_create(name: str, price: float, available_quantity: int) -> ProductCreate:
    return ProductCreate(
        batch=f"LOT-{name.upper()}",
        name=name,
        price=price,
        available_quantity=available_quantity,
    )


class RequestLog:
    """httpx event hook recording (method, path) of every request"""

    def __init__(self):
        self.requests: list[tuple[str, str]] = []

    async def __call__(self, request: httpx.Request) -> None:
        self.requests.append((request.method, request.url.path))

    def count(self, method: str, path: str) -> int:
        return sum(1 for entry in self.requests if entry == (method, path))


def service_client(app, log: Optional[Callable] = None) -> httpx.AsyncClient:
    """HTTP client routed in-process to the service app"""
    hooks = {"request": [log]} if log else {}
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url=BASE_URL,
        event_hooks=hooks,
    )


def build_storefront(
    http_client: httpx.AsyncClient,
    client_id: Optional[str] = "client-1",
    confirmation_timeout: float = 5.0,
    storage: Optional[MemoryStorage] = None,
) -> Storefront:
    settings = Settings(api_base_url=BASE_URL, confirmation_timeout=confirmation_timeout)
    return Storefront.from_settings(
        settings,
        http_client=http_client,
        storage=storage or MemoryStorage(),
        identity=StaticIdentity(client_id),
    )
