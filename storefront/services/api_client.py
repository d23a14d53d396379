"""
API Client

Shared HTTP plumbing for the inventory and order service clients.
Maps non-success responses and transport failures onto the
storefront error taxonomy.
"""

import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as ModelValidationError

from ..core.errors import ServiceError, ConflictError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ApiClient:
    """
    Base client for the remote services.

    Either owns its httpx.AsyncClient or borrows one passed in, so the
    inventory and order clients can share a connection pool.
    """

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize API client.

        Args:
            base_url: Base URL of the remote API
            http_client: Existing client to reuse; closing stays with its owner
            timeout: Request timeout when a client is created here
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client if this instance created it"""
        if self._owns_client:
            await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        headers: Optional[dict[str, str]] = None,
        error_message: str = "Request failed",
    ) -> Any:
        """Make an HTTP request and decode the JSON response"""
        url = f"{self.base_url}{path}"
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=request_headers,
                json=body,
            )
        except httpx.HTTPError as exc:
            logger.error(f"{method} {url} failed: {exc!r}")
            raise ServiceError(error_message) from exc

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            message = self._extract_message(response) or error_message
            if response.status_code == 409:
                raise ConflictError(message, status_code=response.status_code)
            raise ServiceError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error(f"{method} {url} returned a non-JSON body: {response.text[:200]!r}")
            raise ServiceError(error_message, status_code=response.status_code) from exc

    @staticmethod
    def _decode(model: Type[M], data: Any, error_message: str) -> M:
        """Validate one response payload against model"""
        try:
            return model.model_validate(data)
        except ModelValidationError as exc:
            logger.error(f"Malformed {model.__name__} in response: {exc}")
            raise ServiceError(error_message) from exc

    def _decode_list(self, model: Type[M], data: Any, error_message: str) -> list[M]:
        """Validate a listing payload; anything but a JSON array is malformed"""
        if data is None:
            return []
        if not isinstance(data, list):
            logger.error(f"Expected a list of {model.__name__}, got {type(data).__name__}")
            raise ServiceError(error_message)
        return [self._decode(model, item, error_message) for item in data]

    @staticmethod
    def _extract_message(response: httpx.Response) -> Optional[str]:
        """Pull the human-readable message out of an error body"""
        try:
            payload = response.json()
        except ValueError:
            return None

        if not isinstance(payload, dict):
            return None
        for key in ("message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
        return None
