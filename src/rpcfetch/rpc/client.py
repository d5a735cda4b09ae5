"""HTTP client for JSON-RPC style calls.

``create_request(base_url)`` returns an awaitable callable. Every call
resolves to an ``RpcResult`` or ``RpcError``; transport, HTTP, parse and
schema failures are all folded into ``RpcError`` with the request's id.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from types import TracebackType
from typing import Literal

import httpx
from loguru import logger

from rpcfetch.rpc.request import CallLike, build_headers, build_url, to_envelope
from rpcfetch.rpc.response import classify_response, unexpected_error
from rpcfetch.rpc.types import RpcRequest, RpcResponse

Credentials = Literal["omit", "same-origin", "include"]

# Methods that carry no request body.
BODYLESS_METHODS = frozenset({"GET", "HEAD", "DELETE"})


@dataclass(frozen=True)
class RequestOptions:
    """Transport configuration fixed at construction time.

    ``credentials="omit"`` keeps ``cookies`` off the wire. Every call URL
    sits under the base URL, so ``"same-origin"`` and ``"include"`` both
    send them. A caller-supplied ``client`` keeps its own cookie jar and
    is never closed here.
    """

    credentials: Credentials = "same-origin"
    cookies: Mapping[str, str] | None = None
    headers: Mapping[str, str] | None = None
    timeout: float | None = None
    transport: httpx.AsyncBaseTransport | None = None
    client: httpx.AsyncClient | None = None


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class Request:
    """Callable bound to a base URL.

    Use as an async context manager to share one ``httpx.AsyncClient``
    across calls; otherwise each call opens and closes its own.
    """

    def __init__(self, base_url: str, options: RequestOptions | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.options = options or RequestOptions()
        self._client: httpx.AsyncClient | None = self.options.client

    def _build_client(self) -> httpx.AsyncClient:
        cookies = None if self.options.credentials == "omit" else self.options.cookies
        return httpx.AsyncClient(
            cookies=dict(cookies) if cookies else None,
            timeout=self.options.timeout,
            follow_redirects=True,
            transport=self.options.transport,
        )

    async def __aenter__(self) -> Request:
        if self._client is None:
            self._client = self._build_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the client this instance owns, if any."""
        if self._client is not None and self._client is not self.options.client:
            await self._client.aclose()
        self._client = self.options.client

    async def _send(self, http_method: str, envelope: RpcRequest, headers: dict[str, str]) -> httpx.Response:
        url = build_url(self.base_url, envelope.method)
        content = None if http_method in BODYLESS_METHODS else envelope.to_json()

        if self._client is not None:
            return await self._client.request(http_method, url, headers=headers, content=content)

        async with self._build_client() as client:
            return await client.request(http_method, url, headers=headers, content=content)

    async def __call__(
        self,
        call: CallLike,
        *,
        http_method: str = "POST",
        headers: Mapping[str, str] | None = None,
    ) -> RpcResponse:
        """Send one call and return its normalized response."""
        envelope = to_envelope(call)
        request_id = envelope.id
        http_method = http_method.upper()
        merged_headers = build_headers(request_id, {**(self.options.headers or {}), **(headers or {})})

        logger.debug("rpc.call.start id={} method={} http_method={}", request_id, envelope.method, http_method)
        try:
            response = await self._send(http_method, envelope, merged_headers)
        except Exception as exc:
            logger.warning("rpc.call.transport_error id={} error={}", request_id, _describe(exc))
            return unexpected_error(request_id, _describe(exc), traceback.format_exc())

        result = classify_response(request_id, response)
        logger.debug("rpc.call.done id={} status={} ok={}", request_id, response.status_code, result.ok)
        return result


def create_request(base_url: str, options: RequestOptions | None = None) -> Request:
    """Bind a base URL and transport options, returning the call function."""
    return Request(base_url, options)


__all__ = [
    "BODYLESS_METHODS",
    "Credentials",
    "Request",
    "RequestOptions",
    "create_request",
]
