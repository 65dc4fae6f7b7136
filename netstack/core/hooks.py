"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Webservice Lifecycle Hook Registry.

Lets callers observe and augment the request pipeline without subclassing
the Webservice.

Available hooks:
- on_before_request: Fired before a descriptor is handed to the transport
- on_after_response: Fired when the transport returns a response
- on_failure: Fired for every classified request failure
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List

from netstack.core.endpoint import RequestDescriptor
from netstack.exceptions import RequestError
from netstack.logging_config import get_logger

if TYPE_CHECKING:
    from netstack.transport.base import TransportResponse

logger = get_logger(__name__)


BeforeRequestCallback = Callable[[RequestDescriptor], RequestDescriptor]
AfterResponseCallback = Callable[[RequestDescriptor, "TransportResponse"], None]
FailureCallback = Callable[[RequestError], None]


class HookRegistry:
    """
    Manages lifecycle hooks for a Webservice.

    Multiple callbacks per hook are supported and executed in registration
    order. A hook that raises is logged and skipped; it never changes the
    outcome delivered to the request callback.
    """

    def __init__(self) -> None:
        self._before_request: List[BeforeRequestCallback] = []
        self._after_response: List[AfterResponseCallback] = []
        self._failure: List[FailureCallback] = []

    # -- Registration --------------------------------------------------------
    #
    # Each method returns the callback so it can be used as a decorator:
    #
    #     @webservice.hooks.on_failure
    #     def report(error): ...

    def on_before_request(self, callback: BeforeRequestCallback) -> BeforeRequestCallback:
        """Run ``callback`` on every live descriptor before it is sent.

        The callback **must** return a ``RequestDescriptor``, either the one
        it received or a modified copy (``dataclasses.replace``).
        """
        self._before_request.append(callback)
        logger.debug("hook_registered", hook="before_request")
        return callback

    def on_after_response(self, callback: AfterResponseCallback) -> AfterResponseCallback:
        """Run ``callback(descriptor, response)`` when the transport answers."""
        self._after_response.append(callback)
        logger.debug("hook_registered", hook="after_response")
        return callback

    def on_failure(self, callback: FailureCallback) -> FailureCallback:
        self._failure.append(callback)
        logger.debug("hook_registered", hook="failure")
        return callback

    # -- Firing (Webservice only) --------------------------------------------

    def fire_before_request(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        """Thread ``descriptor`` through the before-request callbacks."""
        current = descriptor
        for cb in self._before_request:
            try:
                rewritten = cb(current)
            except Exception as exc:
                logger.error(f"before_request hook failed: {exc}", exc_info=True)
                continue
            if not isinstance(rewritten, RequestDescriptor):
                logger.warning(
                    "before_request hook returned no descriptor",
                    returned=type(rewritten).__name__,
                )
                continue
            current = rewritten
        return current

    def fire_after_response(
        self, descriptor: RequestDescriptor, response: "TransportResponse"
    ) -> None:
        for cb in self._after_response:
            try:
                cb(descriptor, response)
            except Exception as exc:
                logger.error(f"after_response hook failed: {exc}", exc_info=True)

    def fire_failure(self, error: RequestError) -> None:
        for cb in self._failure:
            try:
                cb(error)
            except Exception as exc:
                logger.error(f"failure hook failed: {exc}", kind=error.kind.value, exc_info=True)
