"""
Durable key-value storage

Holds serialized cache snapshots keyed by cache name. Values are
overwritten wholesale on every write.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """String key -> string value store"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass


class MemoryStorage(KeyValueStorage):
    """Non-durable storage, for tests and throwaway sessions"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """
    Storage backed by a single JSON file.

    The whole file is rewritten on each change through a temporary file
    and os.replace, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str):
        self.path = path
        self._items: Optional[dict[str, str]] = None

    def _load(self) -> dict[str, str]:
        if self._items is None:
            self._items = {}
            if os.path.exists(self.path):
                try:
                    with open(self.path, "r", encoding="utf-8") as f:
                        data = json.load(f)
                    if isinstance(data, dict):
                        self._items = {str(k): v for k, v in data.items() if isinstance(v, str)}
                except (OSError, ValueError) as exc:
                    logger.warning(f"Ignoring unreadable storage file {self.path}: {exc}")
        return self._items

    def _flush(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._load(), f)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        self._load()[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._load().pop(key, None) is not None:
            self._flush()
