"""Order service client"""

from typing import Optional

import httpx

from ..models.purchase import Purchase, PurchaseRequest
from .api_client import ApiClient


class OrderClient(ApiClient):
    """Client for the remote order service"""

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        path: str = "/purchases",
    ):
        super().__init__(base_url, http_client=http_client, timeout=timeout)
        self.path = path

    async def list(self) -> list[Purchase]:
        """List purchases, each with its line items"""
        message = "Error fetching purchases"
        data = await self._request("GET", self.path, error_message=message)
        return self._decode_list(Purchase, data, message)

    async def create(
        self,
        request: PurchaseRequest,
        idempotency_key: Optional[str] = None,
    ) -> Purchase:
        """
        Submit a purchase.

        The service computes the total; a repeated idempotency key
        returns the purchase already committed under it.
        """
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        data = await self._request(
            "POST",
            self.path,
            body=request.to_wire(),
            headers=headers,
            error_message="Error creating purchase",
        )
        return self._decode(Purchase, data, "Error creating purchase")
