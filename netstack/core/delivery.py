"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Callback delivery contexts.

A delivery context decides where result callbacks run. The Webservice hands
every callback to its context instead of calling it directly, so the
threading policy is configuration rather than a hard-coded assumption.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

from netstack.logging_config import get_logger

logger = get_logger(__name__)


class DeliveryContext(ABC):
    """Abstract base for callback schedulers."""

    @abstractmethod
    def schedule(self, fn: Callable[[], None]) -> None:
        """Arrange for ``fn`` to run on this context."""
        ...


class InlineDelivery(DeliveryContext):
    """Runs callbacks immediately on the calling thread."""

    def schedule(self, fn: Callable[[], None]) -> None:
        fn()


class EventLoopDelivery(DeliveryContext):
    """Runs callbacks on an asyncio event loop.

    Uses ``call_soon_threadsafe`` so scheduling from worker threads is safe.
    An unbound context attaches to the first running loop it sees. With no
    loop available at all, callbacks run inline.

    Args:
        loop: Loop to deliver on. Defaults to the running loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    def _resolve_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None and not self._loop.is_closed():
            return self._loop
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            return None
        return self._loop

    def schedule(self, fn: Callable[[], None]) -> None:
        loop = self._resolve_loop()
        if loop is None:
            logger.debug("No event loop available, delivering inline")
            fn()
            return
        loop.call_soon_threadsafe(fn)
