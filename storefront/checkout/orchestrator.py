"""
Purchase orchestrator

Turns cart lines into a purchase request and submits it to the order
service. The request carries product ids and quantities only; prices
and the total are always computed by the service.

On success a PurchaseCompleted event is published so the owner of the
inventory cache can refetch. On failure the error propagates unchanged
and nothing is retried.
"""

import logging
from typing import Optional, Sequence

from ..cart.manager import CartLine
from ..core.errors import ValidationError
from ..core.events import EventBus, PurchaseCompleted
from ..models.purchase import Purchase, PurchaseItemRequest, PurchaseRequest
from ..services.order_client import OrderClient

logger = logging.getLogger(__name__)


class PurchaseOrchestrator:
    """Submits carts as purchases"""

    def __init__(self, client: OrderClient, events: Optional[EventBus] = None):
        self._client = client
        self._events = events

    @staticmethod
    def build_request(lines: Sequence[CartLine], client_id: Optional[str]) -> PurchaseRequest:
        """Validate cart lines locally and build the wire request"""
        if not lines:
            raise ValidationError("Cart is empty")
        if not client_id:
            raise ValidationError("No authenticated client")

        seen = set()
        items = []
        for line in lines:
            if line.quantity < 1:
                raise ValidationError(f"Invalid quantity {line.quantity} for product {line.product_id}")
            if line.product_id in seen:
                raise ValidationError(f"Duplicate line for product {line.product_id}")
            seen.add(line.product_id)
            items.append(PurchaseItemRequest(product_id=line.product_id, quantity=line.quantity))

        return PurchaseRequest(client_id=client_id, items=items)

    async def submit_purchase(
        self,
        lines: Sequence[CartLine],
        client_id: Optional[str],
        idempotency_key: Optional[str] = None,
    ) -> Purchase:
        """
        Submit a purchase for the given lines.

        Raises:
            ValidationError: empty cart or malformed lines, before any network call
            ConflictError: the service found insufficient stock at commit
            ServiceError: any other rejection or transport failure
        """
        request = self.build_request(lines, client_id)
        logger.info(
            f"Submitting purchase for client {client_id}: "
            f"{len(request.items)} lines, {sum(i.quantity for i in request.items)} units"
        )

        purchase = await self._client.create(request, idempotency_key=idempotency_key)
        logger.info(f"Purchase {purchase.id} committed: total {purchase.total}")

        if self._events is not None:
            await self._events.publish(PurchaseCompleted(purchase=purchase))
        return purchase
