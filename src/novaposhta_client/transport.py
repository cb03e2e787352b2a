"""HTTP transport backed by httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from novaposhta_client.config import DEFAULT_ENDPOINT
from novaposhta_client.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpxTransport:
    """POSTs JSON bodies to a single endpoint.

    Network failures, non-2xx answers and unparsable JSON are raised as
    ``TransportError``. Nothing is retried.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = await self._client.post(self.endpoint, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to {self.endpoint} failed: {exc}"
            ) from exc
        if response.is_error:
            raise TransportError(
                f"Carrier answered HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def post_json(self, payload: dict[str, Any]) -> Any:
        response = await self._post(payload)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                "Carrier response is not valid JSON",
                status_code=response.status_code,
            ) from exc

    async def post_bytes(self, payload: dict[str, Any]) -> bytes:
        response = await self._post(payload)
        logger.debug(
            "Received %d bytes (%s)",
            len(response.content),
            response.headers.get("content-type", "unknown"),
        )
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
