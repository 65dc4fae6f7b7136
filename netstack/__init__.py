"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Netstack - clean and simple client-side networking stack.

Quick start::

    from netstack import Webservice
    from netstack.users import User, UserEndpoint

    async def main():
        async with Webservice() as webservice:
            result = await webservice.fetch(UserEndpoint.Get(user_id=10), User)
            print(result.unwrap())
"""

from netstack._version import __version__
from netstack.core import (
    ActivityTracker,
    Decoder,
    DeliveryContext,
    DirectoryMockSource,
    Endpoint,
    EventLoopDelivery,
    Failure,
    HookRegistry,
    InMemoryMockSource,
    InlineDelivery,
    MockSource,
    RequestDescriptor,
    Result,
    ResultCallback,
    Success,
)
from netstack.core.webservice import Webservice, WebserviceBuilder
from netstack.exceptions import (
    DataMissingError,
    DecodeError,
    ErrorKind,
    InvalidRequestError,
    MockUnavailableError,
    NetstackError,
    RequestError,
    TransportError,
)
from netstack.transport import BaseTransport, HttpTransport, MockTransport, TransportResponse

__all__ = [
    "__version__",
    # pipeline
    "Webservice",
    "WebserviceBuilder",
    "Endpoint",
    "RequestDescriptor",
    "Decoder",
    "ActivityTracker",
    "HookRegistry",
    # results
    "Result",
    "ResultCallback",
    "Success",
    "Failure",
    "ErrorKind",
    # collaborators
    "DeliveryContext",
    "EventLoopDelivery",
    "InlineDelivery",
    "MockSource",
    "InMemoryMockSource",
    "DirectoryMockSource",
    "BaseTransport",
    "HttpTransport",
    "MockTransport",
    "TransportResponse",
    # errors
    "NetstackError",
    "RequestError",
    "InvalidRequestError",
    "TransportError",
    "DataMissingError",
    "MockUnavailableError",
    "DecodeError",
]
