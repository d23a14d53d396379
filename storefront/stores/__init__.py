# Client-side caches

from .storage import KeyValueStorage, MemoryStorage, JsonFileStorage
from .synchronizer import StoreSynchronizer, CacheStatus, SNAPSHOT_VERSION
from .inventory import InventoryStore, InventorySummary
from .orders import OrderStore, OrderSummary

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "StoreSynchronizer",
    "CacheStatus",
    "SNAPSHOT_VERSION",
    "InventoryStore",
    "InventorySummary",
    "OrderStore",
    "OrderSummary",
]
