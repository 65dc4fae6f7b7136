"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Webservice & Builder.

The Webservice drives one request from endpoint to callback::

    build descriptor -> activity up -> transport -> activity down
        -> classify -> decode -> deliver

Every outcome, including every failure, ends as exactly one ``Result``
handed to the caller's callback on the configured delivery context.
Nothing is retried and nothing is raised past the Webservice.

Quick start::

    async def main():
        webservice = Webservice()
        webservice.request(UserEndpoint.All(), list[User], print)

Tests swap the collaborators::

    webservice = (
        WebserviceBuilder()
        .set_transport(MockTransport({...}))
        .set_mock_source(InMemoryMockSource({"users.json": b"[]"}))
        .set_delivery(InlineDelivery())
        .build()
    )
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import Future
from typing import Any, Optional, Type, TypeVar, Union

from netstack.config.settings import NetstackConfig
from netstack.core.activity import ActivityTracker
from netstack.core.decoder import Decoder
from netstack.core.delivery import DeliveryContext, EventLoopDelivery
from netstack.core.endpoint import Endpoint, RequestDescriptor
from netstack.core.hooks import HookRegistry
from netstack.core.mock_source import DirectoryMockSource, InMemoryMockSource, MockSource
from netstack.core.result import Failure, Result, ResultCallback
from netstack.exceptions import (
    DataMissingError,
    InvalidRequestError,
    MockUnavailableError,
    RequestError,
    TransportError,
)
from netstack.logging_config import (
    get_logger,
    log_request_completion,
    log_request_dispatch,
    log_request_failure,
    request_context,
)
from netstack.transport.base import BaseTransport, TransportResponse
from netstack.transport.http import HttpTransport

logger = get_logger(__name__)

T = TypeVar("T")

PendingRequest = Union["asyncio.Task[Result[Any]]", "Future[Result[Any]]"]


class Webservice:
    """Request pipeline for declarative endpoints.

    All collaborators are injected; anything omitted gets a default.

    Args:
        transport: Issues live requests. Defaults to :class:`HttpTransport`.
        decoder: Converts response bytes into typed values.
        activity: In-flight request tracker. Pass a shared tracker to drive
            one indicator from several Webservices.
        delivery: Where result callbacks run. Defaults to the event loop the
            first request is issued on.
        mock_source: Source of recorded payloads for :meth:`mock_request`.
        hooks: Lifecycle hooks.
        loop: Loop live requests run on when :meth:`request` is called
            from a thread without a running loop.
    """

    def __init__(
        self,
        transport: Optional[BaseTransport] = None,
        decoder: Optional[Decoder] = None,
        activity: Optional[ActivityTracker] = None,
        delivery: Optional[DeliveryContext] = None,
        mock_source: Optional[MockSource] = None,
        hooks: Optional[HookRegistry] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._transport = transport or HttpTransport()
        self._decoder = decoder or Decoder()
        self._activity = activity or ActivityTracker()
        self._delivery = delivery or EventLoopDelivery(loop)
        self._mock_source = mock_source or InMemoryMockSource()
        self._hooks = hooks or HookRegistry()
        self._loop = loop
        logger.debug(
            "Webservice initialized",
            transport=type(self._transport).__name__,
            delivery=type(self._delivery).__name__,
            mock_source=type(self._mock_source).__name__,
        )

    @classmethod
    def from_config(cls, config: NetstackConfig, **overrides: Any) -> "Webservice":
        """Assemble a Webservice from loaded configuration.

        Args:
            config: Loaded configuration
            **overrides: Collaborators that replace the configured ones

        Returns:
            Configured Webservice
        """
        transport = overrides.pop("transport", None) or HttpTransport(
            timeout=config.transport.timeout,
            follow_redirects=config.transport.follow_redirects,
            raise_for_status=config.transport.raise_for_status,
            headers=config.transport.headers,
        )
        mock_source = overrides.pop("mock_source", None)
        if mock_source is None:
            if config.mocks.directory:
                mock_source = DirectoryMockSource(config.mocks.directory)
            else:
                mock_source = InMemoryMockSource()
        return cls(transport=transport, mock_source=mock_source, **overrides)

    # -- Collaborators -----------------------------------------------------

    @property
    def activity(self) -> ActivityTracker:
        return self._activity

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    @property
    def mock_source(self) -> MockSource:
        return self._mock_source

    # -- Live requests -----------------------------------------------------

    def request(
        self,
        endpoint: Endpoint,
        result_type: Type[T],
        callback: ResultCallback[T],
    ) -> Optional[PendingRequest]:
        """Issue a live request and deliver the decoded result to ``callback``.

        Returns immediately after scheduling. The callback runs exactly once
        on the delivery context, after the activity counter has been
        decremented.

        Args:
            endpoint: Endpoint to call
            result_type: Type the response body decodes into
            callback: Receives ``Success(value)`` or ``Failure(error)``

        Without a bound loop (``loop=`` at construction) or a running loop
        nothing can be scheduled; the callback then receives a
        ``TRANSPORT_ERROR`` failure and no request reaches the network.
        Synchronous callers should bind a loop.

        Returns:
            The scheduled task (or thread-safe future when called off-loop),
            resolving to the same ``Result``; ``None`` when the request
            failed before dispatch.
        """
        try:
            descriptor = self._prepare(endpoint)
        except InvalidRequestError as exc:
            self._deliver(callback, self._fail(exc))
            return None

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        loop = self._loop if self._loop is not None and not self._loop.is_closed() else running
        if loop is None:
            error = TransportError(
                f"{descriptor.method} {descriptor.url}: no event loop to run the request on"
            )
            self._deliver(callback, self._fail(error))
            return None

        self._activity.increment()
        coro = self._run(descriptor, result_type, callback)
        if loop is running:
            return running.create_task(coro)
        return asyncio.run_coroutine_threadsafe(coro, loop)

    async def fetch(self, endpoint: Endpoint, result_type: Type[T]) -> Result[T]:
        """Awaitable form of :meth:`request` returning the ``Result``."""
        try:
            descriptor = self._prepare(endpoint)
        except InvalidRequestError as exc:
            return self._fail(exc)

        self._activity.increment()
        return await self._perform(descriptor, result_type)

    async def _run(
        self,
        descriptor: RequestDescriptor,
        result_type: Type[T],
        callback: ResultCallback[T],
    ) -> Result[T]:
        result = await self._perform(descriptor, result_type)
        self._deliver(callback, result)
        return result

    def _prepare(self, endpoint: Endpoint) -> RequestDescriptor:
        try:
            descriptor = endpoint.build_request()
        except InvalidRequestError:
            raise
        except Exception as exc:
            raise InvalidRequestError(
                f"{type(endpoint).__name__}: failed to build request: {exc}", cause=exc
            ) from exc
        return self._hooks.fire_before_request(descriptor)

    async def _perform(self, descriptor: RequestDescriptor, result_type: Type[T]) -> Result[T]:
        """Transport round trip for an already counted request.

        Always releases the activity count and always returns a ``Result``.
        """
        with request_context():
            start = time.monotonic()
            response: Optional[TransportResponse] = None
            error: Optional[Exception] = None
            try:
                log_request_dispatch(logger, descriptor.method, descriptor.url)
                response = await self._transport.send(descriptor)
            except Exception as exc:
                error = exc
            finally:
                self._activity.decrement()
            duration_ms = round((time.monotonic() - start) * 1000, 2)

            try:
                return self._classify(descriptor, response, error, duration_ms, result_type)
            except Exception as exc:
                logger.error(f"Unexpected error in request pipeline: {exc}", exc_info=True)
                return self._fail(
                    TransportError(
                        f"{descriptor.method} {descriptor.url}: unexpected error: {exc!r}",
                        cause=exc,
                    )
                )

    def _classify(
        self,
        descriptor: RequestDescriptor,
        response: Optional[TransportResponse],
        error: Optional[Exception],
        duration_ms: float,
        result_type: Type[T],
    ) -> Result[T]:
        if error is not None:
            return self._fail(
                TransportError(f"{descriptor.method} {descriptor.url} failed: {error}", cause=error),
                duration_ms=duration_ms,
            )

        if response is None:
            return self._fail(
                DataMissingError(f"{descriptor.method} {descriptor.url} returned no response"),
                duration_ms=duration_ms,
            )

        log_request_completion(
            logger,
            descriptor.method,
            descriptor.url,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        self._hooks.fire_after_response(descriptor, response)

        if not response.body:
            return self._fail(
                DataMissingError(
                    f"{descriptor.method} {descriptor.url} returned no data "
                    f"(status {response.status_code})"
                )
            )

        return self._decode(response.body, result_type)

    # -- Mocked requests ---------------------------------------------------

    def mock_request(
        self,
        endpoint: Endpoint,
        result_type: Type[T],
        callback: ResultCallback[T],
    ) -> None:
        """Decode the endpoint's mock payload and deliver it to ``callback``.

        Never touches the activity counter. From the decode step onward the
        outcome is indistinguishable from a live response.
        """
        self._deliver(callback, self._mocked(endpoint, result_type))

    async def fetch_mock(self, endpoint: Endpoint, result_type: Type[T]) -> Result[T]:
        """Awaitable form of :meth:`mock_request` returning the ``Result``."""
        return self._mocked(endpoint, result_type)

    def _mocked(self, endpoint: Endpoint, result_type: Type[T]) -> Result[T]:
        try:
            return self._mocked_result(endpoint, result_type)
        except Exception as exc:
            logger.error(f"Unexpected error in mock pipeline: {exc}", exc_info=True)
            return self._fail(
                MockUnavailableError(
                    f"{type(endpoint).__name__}: unexpected error: {exc!r}", cause=exc
                )
            )

    def _mocked_result(self, endpoint: Endpoint, result_type: Type[T]) -> Result[T]:
        name = type(endpoint).__name__
        try:
            payload = endpoint.mock_payload(self._mock_source)
        except Exception as exc:
            return self._fail(
                MockUnavailableError(f"{name}: mock lookup failed: {exc}", cause=exc)
            )

        if payload is None:
            return self._fail(
                MockUnavailableError(
                    f"{name}: no mock payload registered for '{endpoint.mock_resource}'"
                )
            )

        log_request_dispatch(logger, endpoint.method, endpoint.mock_resource or name, mocked=True)
        return self._decode(payload, result_type)

    # -- Shared steps ------------------------------------------------------

    def _decode(self, data: bytes, result_type: Type[T], **context: Any) -> Result[T]:
        result = self._decoder.decode(data, result_type)
        if isinstance(result, Failure):
            return self._fail(result.error, **context)
        return result

    def _fail(self, error: RequestError, **context: Any) -> Failure:
        log_request_failure(logger, error.kind.value, str(error), cause=error.cause, **context)
        self._hooks.fire_failure(error)
        return Failure(error)

    def _deliver(self, callback: ResultCallback[T], result: Result[T]) -> None:
        def invoke() -> None:
            try:
                callback(result)
            except Exception as exc:
                logger.error(f"Result callback raised: {exc}", exc_info=True)

        try:
            self._delivery.schedule(invoke)
        except Exception as exc:
            logger.error(f"Failed to schedule result delivery: {exc}", exc_info=True)

    # -- Lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Release transport resources.

        Prefer :meth:`aclose` from async code; a synchronous close cannot
        shut down an async connection pool.
        """
        self._transport.close()
        logger.debug("Webservice closed")

    async def aclose(self) -> None:
        """Release transport resources from async code."""
        await self._transport.aclose()
        logger.debug("Webservice closed")

    async def __aenter__(self) -> "Webservice":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


class WebserviceBuilder:
    """Fluent builder for Webservice configuration.

    Example::

        webservice = (
            WebserviceBuilder()
            .set_transport(HttpTransport(timeout=5))
            .set_mock_source(DirectoryMockSource("fixtures"))
            .build()
        )
    """

    def __init__(self) -> None:
        self._transport: Optional[BaseTransport] = None
        self._decoder: Optional[Decoder] = None
        self._activity: Optional[ActivityTracker] = None
        self._delivery: Optional[DeliveryContext] = None
        self._mock_source: Optional[MockSource] = None
        self._hooks: Optional[HookRegistry] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def set_transport(self, transport: BaseTransport) -> "WebserviceBuilder":
        """Override the default HTTP transport."""
        self._transport = transport
        return self

    def set_decoder(self, decoder: Decoder) -> "WebserviceBuilder":
        self._decoder = decoder
        return self

    def set_activity_tracker(self, activity: ActivityTracker) -> "WebserviceBuilder":
        """Share an existing activity tracker."""
        self._activity = activity
        return self

    def set_delivery(self, delivery: DeliveryContext) -> "WebserviceBuilder":
        self._delivery = delivery
        return self

    def set_mock_source(self, source: MockSource) -> "WebserviceBuilder":
        self._mock_source = source
        return self

    def set_hooks(self, hooks: HookRegistry) -> "WebserviceBuilder":
        self._hooks = hooks
        return self

    def set_loop(self, loop: asyncio.AbstractEventLoop) -> "WebserviceBuilder":
        """Bind live requests and delivery to ``loop``."""
        self._loop = loop
        return self

    def build(self) -> Webservice:
        """Construct the Webservice."""
        webservice = Webservice(
            transport=self._transport,
            decoder=self._decoder,
            activity=self._activity,
            delivery=self._delivery,
            mock_source=self._mock_source,
            hooks=self._hooks,
            loop=self._loop,
        )
        logger.debug("WebserviceBuilder: built webservice")
        return webservice
