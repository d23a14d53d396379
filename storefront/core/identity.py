"""
Identity collaborator

Supplies the authenticated client's identifier, used only to stamp
purchase submissions.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..stores.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    """Source of the current client id"""

    @property
    @abstractmethod
    def client_id(self) -> Optional[str]:
        pass


class StaticIdentity(IdentityProvider):
    """Fixed client id, e.g. for service accounts and tests"""

    def __init__(self, client_id: Optional[str]):
        self._client_id = client_id

    @property
    def client_id(self) -> Optional[str]:
        return self._client_id


class StoredIdentity(IdentityProvider):
    """Reads the logged-in user record written by the auth flow"""

    def __init__(self, storage: KeyValueStorage, key: str = "user"):
        self._storage = storage
        self._key = key

    @property
    def client_id(self) -> Optional[str]:
        raw = self._storage.get_item(self._key)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except ValueError:
            logger.warning(f"Stored user record under '{self._key}' is not valid JSON")
            return None
        if not isinstance(user, dict) or user.get("id") is None:
            return None
        return str(user["id"])
