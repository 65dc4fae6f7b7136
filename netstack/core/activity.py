"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Network activity tracking.

Counts in-flight live requests and announces the binary "network busy"
state to observers. Observers only hear about transitions (idle to active
and active to idle) so overlapping requests never cause the indicator to
flicker.
"""

from __future__ import annotations

import threading
from typing import Callable, List

from netstack.logging_config import get_logger, log_activity_transition

logger = get_logger(__name__)

ActivityObserver = Callable[[bool], None]


class ActivityTracker:
    """
    Thread-safe in-flight request counter.

    Counter mutation, transition detection and observer notification all
    happen under one re-entrant lock, so two concurrent decrements from 1
    cannot both announce the idle transition and notifications are seen in
    the order the transitions happened.
    """

    def __init__(self) -> None:
        self._count = 0
        self._active = False
        self._observers: List[ActivityObserver] = []
        self._lock = threading.RLock()

    @property
    def count(self) -> int:
        """Current number of in-flight requests."""
        with self._lock:
            return self._count

    @property
    def is_active(self) -> bool:
        """Last announced activity state."""
        with self._lock:
            return self._active

    def observe(self, callback: ActivityObserver) -> Callable[[], None]:
        """
        Register a callback for future activity transitions.

        The current state is not replayed.

        Args:
            callback: Called with ``True`` on idle to active and ``False``
                on active to idle

        Returns:
            A callable that removes the observer
        """
        with self._lock:
            self._observers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def increment(self) -> None:
        with self._lock:
            self._count += 1
            if self._count == 1 and not self._active:
                self._transition(True)

    def decrement(self) -> None:
        with self._lock:
            if self._count == 0:
                logger.warning(
                    "activity_underflow",
                    event_type="activity_underflow",
                    in_flight=0,
                )
                return
            self._count -= 1
            if self._count == 0 and self._active:
                self._transition(False)

    def _transition(self, active: bool) -> None:
        self._active = active
        log_activity_transition(logger, active=active, in_flight=self._count)
        for observer in list(self._observers):
            try:
                observer(active)
            except Exception as exc:
                logger.error(f"Activity observer error: {exc}", exc_info=True)
