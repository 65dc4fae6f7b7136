"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Mock transport for local testing.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from netstack.core.endpoint import RequestDescriptor
from netstack.transport.base import BaseTransport, TransportResponse

MockedOutcome = Union[TransportResponse, BaseException]


class MockTransport(BaseTransport):
    """In-memory mock transport for unit tests.

    Args:
        responses: Mapping from ``(method, url)`` tuples to a
            ``TransportResponse`` to return or an exception to raise.

    Example::

        transport = MockTransport({
            ("GET", "http://api.test/users"): TransportResponse(200, body=b"[]"),
            ("GET", "http://api.test/down"): httpx.ConnectError("refused"),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], MockedOutcome]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], MockedOutcome] = dict(responses or {})
        self._sent: List[RequestDescriptor] = []

    def add(self, method: str, url: str, outcome: MockedOutcome) -> None:
        """Register the outcome for ``(method, url)``."""
        self._responses[(method.upper(), url)] = outcome

    async def send(self, request: RequestDescriptor) -> TransportResponse:
        self._sent.append(request)
        key = (request.method.upper(), request.url)
        if key in self._responses:
            outcome = self._responses[key]
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        return TransportResponse(
            status_code=404,
            headers={},
            body=b'{"error": "not mocked"}',
            elapsed_ms=0.0,
        )

    def close(self) -> None:
        self._responses.clear()
        self._sent.clear()

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def sent_requests(self) -> List[RequestDescriptor]:
        """All requests that have been sent through this transport."""
        return list(self._sent)
