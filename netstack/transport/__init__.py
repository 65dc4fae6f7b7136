"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Transports.
"""

from netstack.transport.base import BaseTransport, TransportResponse
from netstack.transport.http import HttpTransport
from netstack.transport.mock import MockTransport

__all__ = [
    "BaseTransport",
    "TransportResponse",
    "HttpTransport",
    "MockTransport",
]
