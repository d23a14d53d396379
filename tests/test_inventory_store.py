import json
import unittest

import httpx

from storefront.core.errors import ServiceError
from storefront.models.product import ProductCreate, ProductUpdate
from storefront.services.inventory_client import InventoryClient
from storefront.stores.inventory import InventoryStore
from storefront.stores.storage import MemoryStorage
from storefront.stores.synchronizer import CacheStatus
from tests.helpers import BASE_URL, RequestLog, product_create, seeded_app, service_client


class InventoryStoreTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.app = seeded_app(
            product_create("tea", 4.5, 20),
            product_create("cocoa", 2.0, 5),
        )
        self.log = RequestLog()
        self.http = service_client(self.app, self.log)
        self.storage = MemoryStorage()
        self.store = InventoryStore(InventoryClient(BASE_URL, http_client=self.http), self.storage)

    async def asyncTearDown(self):
        await self.http.aclose()

    async def test_fetch_all(self):
        products = await self.store.fetch_all()
        self.assertEqual([p.name for p in products], ["tea", "cocoa"])
        self.assertEqual(self.store.get_product(2).available_quantity, 5)
        self.assertIsNone(self.store.get_product(99))

    async def test_create_then_refetch(self):
        await self.store.fetch_all()
        created = await self.store.create_product(
            ProductCreate(batch="LOT-H", name="honey", price=9, available_quantity=2)
        )
        self.assertEqual(self.log.count("POST", "/products"), 1)
        self.assertEqual(self.log.count("GET", "/products"), 2)
        self.assertEqual(self.store.get_product(created.id).name, "honey")

    async def test_update_then_refetch(self):
        await self.store.fetch_all()
        await self.store.update_product(1, ProductUpdate(price=5.25))
        self.assertEqual(self.store.get_product(1).price, 5.25)
        self.assertEqual(self.store.get_product(1).available_quantity, 20)
        self.assertEqual(self.log.count("GET", "/products"), 2)

    async def test_delete_then_refetch(self):
        await self.store.fetch_all()
        await self.store.delete_product(1)
        self.assertIsNone(self.store.get_product(1))
        self.assertEqual(len(self.store.products), 1)

    async def test_failed_write_propagates_without_refetch(self):
        await self.store.fetch_all()
        with self.assertRaises(ServiceError) as ctx:
            await self.store.update_product(99, ProductUpdate(price=1))
        self.assertEqual(ctx.exception.message, "Product not found")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(self.log.count("GET", "/products"), 1)

    async def test_snapshot_persisted_without_flags(self):
        await self.store.fetch_all()
        state = json.loads(self.storage.get_item("products-storage"))["state"]
        self.assertEqual(set(state), {"items"})
        self.assertEqual(len(state["items"]), 2)

    async def test_search_and_summary(self):
        await self.store.fetch_all()
        self.assertEqual([p.name for p in self.store.search("CoC")], ["cocoa"])
        self.assertEqual([p.name for p in self.store.search("lot-tea")], ["tea"])
        self.assertEqual([p.id for p in self.store.search("2")], [2])
        self.assertEqual(len(self.store.search("  ")), 2)

        summary = self.store.summary()
        self.assertEqual(summary.total_products, 2)
        self.assertEqual(summary.total_quantity, 25)
        self.assertAlmostEqual(summary.total_value, 20 * 4.5 + 5 * 2.0)


class RefetchFailureTests(unittest.IsolatedAsyncioTestCase):
    async def test_write_succeeds_when_refetch_fails(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(201, json={
                    "id": 1, "batch": "B", "name": "n", "price": 1, "availableQuantity": 1,
                })
            return httpx.Response(503, json={"message": "Inventory unavailable"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            store = InventoryStore(InventoryClient(BASE_URL, http_client=http))
            created = await store.create_product(
                ProductCreate(batch="B", name="n", price=1, available_quantity=1)
            )

        self.assertEqual(created.id, 1)
        self.assertEqual(store.status, CacheStatus.FAILED)
        self.assertEqual(store.error, "Inventory unavailable")

    async def test_malformed_refetch_marks_cache_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(201, json={
                    "id": 1, "batch": "B", "name": "n", "price": 1, "availableQuantity": 1,
                })
            return httpx.Response(200, json=[{"id": "oops"}])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            store = InventoryStore(InventoryClient(BASE_URL, http_client=http))
            created = await store.create_product(
                ProductCreate(batch="B", name="n", price=1, available_quantity=1)
            )

        self.assertEqual(created.id, 1)
        self.assertEqual(store.status, CacheStatus.FAILED)
        self.assertEqual(store.error, "Error fetching products")

    async def test_non_list_listing_is_service_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"items": []})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with self.assertRaises(ServiceError) as ctx:
                await InventoryClient(BASE_URL, http_client=http).list()
        self.assertEqual(ctx.exception.message, "Error fetching products")


if __name__ == "__main__":
    unittest.main()
