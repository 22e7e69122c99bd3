import asyncio
import logging
from typing import Any, Mapping

import httpx

from ledgerlink.core.errors import CancellationError, TransportError
from ledgerlink.core.helpers.abort import AbortSignal
from ledgerlink.core.ports.serializer import Serializer
from ledgerlink.core.ports.transport import RpcTransport
from ledgerlink.infra.http_headers import assert_is_allowed_http_request_headers, normalize_headers
from ledgerlink.infra.json_serializer import JsonSerializer


class HttpTransport(RpcTransport):
    """
    Sends JSON-RPC payloads as HTTP POST requests using httpx.

    The payload is turned into the request body by the configured
    Serializer (JSON by default) and the response body is turned back
    into a Python object by the same Serializer.

    Failures are reported as:
    - CancellationError when the caller's AbortSignal aborts, including
      while the request is in flight
    - TransportError for network errors, non-2xx responses, and bodies
      that cannot be deserialized

    The transport never retries. Connection pooling, limits and timeouts
    belong to the httpx client, which may be injected.
    """
    def __init__(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        serializer: Serializer | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        assert_is_allowed_http_request_headers(headers)

        self._url = url
        self._headers = {
            **normalize_headers(headers),
            "accept": "application/json",
            "content-type": "application/json; charset=utf-8",
        }
        self._serializer = serializer or JsonSerializer()
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self._logger = logging.getLogger("infra.http_transport")

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __call__(self, *, payload: Any, signal: AbortSignal | None = None) -> Any:
        if signal is None:
            return await self._send(payload)

        signal.throw_if_aborted()
        task = asyncio.ensure_future(self._send(payload))
        remove = signal.add_listener(lambda _: task.cancel())

        try:
            return await task
        except asyncio.CancelledError:
            if signal.aborted:
                self._logger.debug(f"Request to {self._url} aborted")
                raise CancellationError(signal.reason) from None
            raise
        finally:
            remove()

    async def _send(self, payload: Any) -> Any:
        body = self._serializer.serialize(payload)

        try:
            response = await self._client.post(self._url, content=body, headers=self._headers)
        except httpx.HTTPError as ex:
            self._logger.warning(f"Request to {self._url} failed: {ex}")
            raise TransportError(f"HTTP request to {self._url} failed: {ex}") from ex

        if not response.is_success:
            raise TransportError(
                f"HTTP error ({response.status_code}): {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            return self._serializer.deserialize(response.content)
        except ValueError as ex:
            raise TransportError(
                f"Invalid response body from {self._url}: {ex}",
                status_code=response.status_code,
            ) from ex
