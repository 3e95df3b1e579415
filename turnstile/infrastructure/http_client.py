"""Shared async HTTP client with configurable timeout and TLS trust store."""

from __future__ import annotations

import ssl
from typing import Any, Literal, Optional

import certifi
import httpx

TLSBackend = Literal["bundled", "native"]


def build_ssl_context(backend: TLSBackend = "bundled") -> ssl.SSLContext:
    """Return an SSL context trusting either certifi's bundle or the OS store."""
    if backend == "bundled":
        return ssl.create_default_context(cafile=certifi.where())
    if backend == "native":
        return ssl.create_default_context()
    raise ValueError(f"Unknown TLS backend: {backend!r}")


class HttpClient:
    """Thin async wrapper around httpx.AsyncClient with a configurable timeout.

    Pass ``transport`` to replace the network layer entirely (a proxy-aware
    transport, or ``httpx.MockTransport`` in tests); ``tls_backend`` is then
    ignored.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        *,
        tls_backend: TLSBackend = "bundled",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if transport is not None:
            self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        else:
            self._client = httpx.AsyncClient(
                timeout=timeout,
                verify=build_ssl_context(tls_backend),
            )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.post(url, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
