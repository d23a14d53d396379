# Remote service clients

from .api_client import ApiClient
from .inventory_client import InventoryClient
from .order_client import OrderClient

__all__ = ["ApiClient", "InventoryClient", "OrderClient"]
