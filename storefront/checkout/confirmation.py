"""Transient purchase confirmation"""

import asyncio
import logging
from typing import Optional

from ..models.purchase import Purchase

logger = logging.getLogger(__name__)


class PurchaseConfirmation:
    """
    Holds the last committed purchase for display.

    Dismisses itself once, timeout seconds after being shown, unless
    dismissed earlier. Must be shown from within a running event loop.
    """

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout
        self.purchase: Optional[Purchase] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def visible(self) -> bool:
        return self.purchase is not None

    def show(self, purchase: Purchase) -> None:
        self._cancel()
        self.purchase = purchase
        self._handle = asyncio.get_running_loop().call_later(self.timeout, self._expire)

    def dismiss(self) -> None:
        self._cancel()
        self.purchase = None

    def _expire(self) -> None:
        self._handle = None
        if self.purchase is not None:
            logger.debug(f"Confirmation for purchase {self.purchase.id} expired")
        self.purchase = None

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
