"""
In-process event bus

Decouples the purchase flow from whoever owns the inventory cache:
the orchestrator publishes, the composition root subscribes.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Type

from ..models.purchase import Purchase

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True)
class PurchaseCompleted:
    """Emitted once the order service has committed a purchase"""
    purchase: Purchase


class EventBus:
    """Async publish/subscribe keyed by event type"""

    def __init__(self):
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type, handler: Handler) -> Callable[[], None]:
        """Register a handler; returns a callable that unsubscribes it"""
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    async def publish(self, event: Any) -> None:
        """
        Deliver an event to every subscriber, in subscription order.

        A failing handler is logged and does not stop delivery to the
        others, nor does it reach the publisher.
        """
        for handler in list(self._handlers[type(event)]):
            try:
                await handler(event)
            except Exception:
                logger.exception(f"Handler {handler!r} failed for {type(event).__name__}")
