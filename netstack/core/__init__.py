"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Request pipeline building blocks.
"""

from netstack.core.activity import ActivityTracker
from netstack.core.decoder import Decoder
from netstack.core.delivery import DeliveryContext, EventLoopDelivery, InlineDelivery
from netstack.core.endpoint import Endpoint, RequestDescriptor
from netstack.core.hooks import HookRegistry
from netstack.core.mock_source import DirectoryMockSource, InMemoryMockSource, MockSource
from netstack.core.result import Failure, Result, ResultCallback, Success

__all__ = [
    "ActivityTracker",
    "Decoder",
    "DeliveryContext",
    "EventLoopDelivery",
    "InlineDelivery",
    "Endpoint",
    "RequestDescriptor",
    "HookRegistry",
    "DirectoryMockSource",
    "InMemoryMockSource",
    "MockSource",
    "Failure",
    "Result",
    "ResultCallback",
    "Success",
]
