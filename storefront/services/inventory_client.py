"""Inventory service client"""

from typing import Optional

import httpx

from ..models.product import Product, ProductCreate, ProductUpdate
from .api_client import ApiClient


class InventoryClient(ApiClient):
    """Client for the remote inventory service"""

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        path: str = "/products",
    ):
        super().__init__(base_url, http_client=http_client, timeout=timeout)
        self.path = path

    async def list(self) -> list[Product]:
        """List every product"""
        message = "Error fetching products"
        data = await self._request("GET", self.path, error_message=message)
        return self._decode_list(Product, data, message)

    async def create(self, product: ProductCreate) -> Product:
        """Create a product"""
        data = await self._request(
            "POST",
            self.path,
            body=product.to_wire(),
            error_message="Error adding product",
        )
        return self._decode(Product, data, "Error adding product")

    async def update(self, product_id: int, fields: ProductUpdate) -> Product:
        """Update the given fields of a product"""
        data = await self._request(
            "PUT",
            f"{self.path}/{product_id}",
            body=fields.to_wire(exclude_unset=True),
            error_message="Error updating product",
        )
        return self._decode(Product, data, "Error updating product")

    async def delete(self, product_id: int) -> None:
        """Delete a product"""
        await self._request(
            "DELETE",
            f"{self.path}/{product_id}",
            error_message="Error deleting product",
        )
