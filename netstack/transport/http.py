"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

HTTP transport (default).
"""

from __future__ import annotations

import time
from typing import Dict, Optional

import httpx

from netstack.core.endpoint import RequestDescriptor
from netstack.logging_config import get_logger
from netstack.transport.base import BaseTransport, TransportResponse

logger = get_logger(__name__)


class HttpTransport(BaseTransport):
    """Default HTTP transport using ``httpx.AsyncClient``.

    Args:
        timeout: Request timeout in seconds.
        follow_redirects: Whether redirects are followed.
        raise_for_status: Raise on 4xx/5xx so they surface as transport
            errors instead of being decoded.
        headers: Headers sent with every request. Descriptor headers win.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        follow_redirects: bool = True,
        raise_for_status: bool = False,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._raise_for_status = raise_for_status
        self._headers = dict(headers or {})
        self._client: Optional[httpx.AsyncClient] = None
        self._connected = True

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=self._follow_redirects,
            )
            self._connected = True
        return self._client

    async def send(self, request: RequestDescriptor) -> TransportResponse:
        client = self._ensure_client()
        start = time.monotonic()

        resp = await client.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
        )
        elapsed = (time.monotonic() - start) * 1000

        if self._raise_for_status:
            resp.raise_for_status()

        return TransportResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            body=resp.content or None,
            elapsed_ms=round(elapsed, 2),
        )

    def close(self) -> None:
        """Drop the client. Open pooled connections are not closed; use ``aclose``."""
        if self._client is not None:
            if not self._client.is_closed:
                logger.warning(
                    "http_client_dropped_without_aclose",
                    detail="pooled connections are left to the garbage collector; await aclose() instead",
                )
            self._client = None
        self._connected = False

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
