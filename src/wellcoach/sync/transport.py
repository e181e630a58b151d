"""Remote write transports."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from wellcoach.exceptions import SyncTransportError


class HttpTransport:
    """POSTs each payload as JSON to ``<endpoint>/<storage_key>``.

    Usable directly as a SyncManager transport. Network errors and non-2xx
    responses raise SyncTransportError.

    Args:
        endpoint: Base URL of the sync service
        timeout: Request timeout in seconds
        client: Preconfigured AsyncClient (tests pass one with a mock transport)
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __call__(self, key: str, data: Any) -> None:
        url = f"{self.endpoint}/{key}"
        try:
            response = await self._client.post(url, json=data)
        except httpx.HTTPError as exc:
            raise SyncTransportError(key, f"Request to {url} did not complete: {exc}") from exc

        if response.is_error:
            raise SyncTransportError(
                key,
                f"Sync service answered {response.status_code} for {key}",
                status_code=response.status_code,
            )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
