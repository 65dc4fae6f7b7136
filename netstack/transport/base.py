"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Transport base class and data structures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

from netstack.core.endpoint import RequestDescriptor


@dataclass
class TransportResponse:
    """Raw response returned by a transport.

    ``body`` is ``None`` when the server sent no bytes.
    """
    status_code: Optional[int] = None
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    elapsed_ms: float = 0.0


class BaseTransport(ABC):
    """Abstract base for all transports.

    ``send`` completes exactly once per call, either returning a response
    or raising the exception that describes the transport failure.
    """

    @abstractmethod
    async def send(self, request: RequestDescriptor) -> TransportResponse:
        """Send a request and return the response."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release transport resources."""
        ...

    async def aclose(self) -> None:
        """Release transport resources from async code."""
        self.close()

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the transport is in a usable state."""
        ...
