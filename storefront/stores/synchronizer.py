"""
Store synchronizer

Generic fetch / replace / persist cache over a remote listing endpoint.

States: IDLE -> LOADING -> READY | FAILED. A failed fetch keeps the
previous snapshot readable. Every successful fetch replaces the whole
snapshot; nothing is ever patched in place. Each fetch takes a sequence
number and only the most recently started one may apply its result.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, Type, TypeVar

from pydantic import ValidationError as ModelValidationError

from ..core.errors import StorefrontError
from ..models.base import WireModel
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=WireModel)

SNAPSHOT_VERSION = 1


class CacheStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class StoreSynchronizer(Generic[T]):
    """Cache holding the last authoritative snapshot of a remote collection"""

    def __init__(
        self,
        name: str,
        fetcher: Callable[[], Awaitable[list[T]]],
        model: Type[T],
        storage: Optional[KeyValueStorage] = None,
        persist_flags: bool = False,
        error_message: str = "Error fetching data",
    ):
        """
        Args:
            name: Cache name, also the storage key
            fetcher: Coroutine function returning the full remote listing
            model: Item model used to restore persisted snapshots
            storage: Durable store; None disables persistence
            persist_flags: Persist status and error along with the items
            error_message: Fallback message for failures without one
        """
        self.name = name
        self._fetcher = fetcher
        self._model = model
        self._storage = storage
        self._persist_flags = persist_flags
        self._error_message = error_message

        self.items: list[T] = []
        self.status = CacheStatus.IDLE
        self.error: Optional[str] = None
        self.last_synced_at: Optional[datetime] = None

        self._sequence = 0
        self._listeners: list[Callable[[list[T]], None]] = []

    @property
    def loading(self) -> bool:
        return self.status == CacheStatus.LOADING

    def subscribe(self, listener: Callable[[list[T]], None]) -> Callable[[], None]:
        """Call listener with the new items after every snapshot replacement"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def fetch_all(self) -> list[T]:
        """
        Refetch the whole collection and replace the snapshot.

        Raises whatever the fetcher raised, after recording it. A response
        overtaken by a later fetch is discarded and the current snapshot
        is returned instead.
        """
        self._sequence += 1
        sequence = self._sequence

        self.status = CacheStatus.LOADING
        self.error = None
        self._persist()
        logger.debug(f"[{self.name}] fetch #{sequence} started")

        try:
            items = await self._fetcher()
        except Exception as exc:
            if sequence != self._sequence:
                logger.warning(f"[{self.name}] superseded fetch #{sequence} failed: {exc}")
                raise
            self.status = CacheStatus.FAILED
            self.error = exc.message if isinstance(exc, StorefrontError) else self._error_message
            self._persist()
            logger.error(f"[{self.name}] fetch #{sequence} failed: {self.error}")
            raise

        if sequence != self._sequence:
            logger.warning(
                f"[{self.name}] discarding response of fetch #{sequence}, "
                f"superseded by #{self._sequence}"
            )
            return list(self.items)

        self._replace(items)
        logger.debug(f"[{self.name}] fetch #{sequence} ready with {len(self.items)} items")
        return list(self.items)

    def _replace(self, items: list[T]) -> None:
        self.items = list(items)
        self.status = CacheStatus.READY
        self.error = None
        self.last_synced_at = datetime.utcnow()
        self._persist()
        for listener in list(self._listeners):
            listener(list(self.items))

    def clear(self) -> None:
        """Drop the snapshot"""
        self.items = []
        self._persist()

    def clear_error(self) -> None:
        self.error = None
        if self.status == CacheStatus.FAILED:
            self.status = CacheStatus.READY if self.last_synced_at else CacheStatus.IDLE
        self._persist()

    # ==================== Persistence ====================

    def _state(self) -> dict:
        state: dict = {"items": [item.to_wire() for item in self.items]}
        if self._persist_flags:
            state["status"] = self.status.value
            state["error"] = self.error
        return state

    def _persist(self) -> None:
        if self._storage is None:
            return
        payload = {"version": SNAPSHOT_VERSION, "state": self._state()}
        self._storage.set_item(self.name, json.dumps(payload))

    def load(self) -> bool:
        """
        Seed the cache from durable storage.

        Meant to run once at startup, before the first fetch resolves.
        Returns True when a snapshot was restored.
        """
        if self._storage is None:
            return False
        raw = self._storage.get_item(self.name)
        if raw is None:
            return False

        try:
            payload = json.loads(raw)
            if payload.get("version") != SNAPSHOT_VERSION:
                logger.warning(
                    f"[{self.name}] ignoring snapshot with version {payload.get('version')!r}"
                )
                return False
            state = payload["state"]
            items = [self._model.model_validate(item) for item in state.get("items", [])]
            status = CacheStatus(state.get("status", CacheStatus.IDLE.value))
        except (ValueError, KeyError, TypeError, AttributeError, ModelValidationError) as exc:
            logger.warning(f"[{self.name}] ignoring unreadable snapshot: {exc}")
            return False

        self.items = items
        if self._persist_flags:
            # No fetch survives a restart
            self.status = CacheStatus.IDLE if status == CacheStatus.LOADING else status
            self.error = state.get("error")
        logger.info(f"[{self.name}] restored {len(items)} items from storage")
        return True
