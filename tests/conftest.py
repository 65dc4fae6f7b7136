"""
Pytest configuration and shared fixtures for Netstack tests.
"""

import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

from netstack.core.activity import ActivityTracker
from netstack.core.delivery import InlineDelivery
from netstack.core.mock_source import InMemoryMockSource
from netstack.core.webservice import Webservice
from netstack.transport.mock import MockTransport


USERS_PAYLOAD = b'[{"id":2,"username":"u2","email":"e2"}]'
USER_PAYLOAD = b'{"id":3,"username":"u3","email":"e3"}'


class RecordingCallback:
    """Result callback that remembers every invocation."""

    def __init__(self, activity: ActivityTracker = None):
        self.results: List = []
        self.in_flight_at_delivery: List[int] = []
        self._activity = activity

    def __call__(self, result) -> None:
        self.results.append(result)
        if self._activity is not None:
            self.in_flight_at_delivery.append(self._activity.count)

    @property
    def calls(self) -> int:
        return len(self.results)

    @property
    def result(self):
        assert len(self.results) == 1, f"expected exactly one delivery, got {len(self.results)}"
        return self.results[0]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def activity() -> ActivityTracker:
    return ActivityTracker()


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def mock_source() -> InMemoryMockSource:
    """Mock source holding only the users list fixture."""
    return InMemoryMockSource({"users.json": USERS_PAYLOAD})


@pytest.fixture
def webservice(transport, activity, mock_source) -> Webservice:
    """Webservice wired to in-memory collaborators with inline delivery."""
    return Webservice(
        transport=transport,
        activity=activity,
        delivery=InlineDelivery(),
        mock_source=mock_source,
    )


@pytest.fixture
def callback(activity) -> RecordingCallback:
    return RecordingCallback(activity)


@pytest.fixture
def make_callback(activity):
    """Factory for extra recording callbacks bound to the shared tracker."""

    def factory(tracker: ActivityTracker = activity) -> RecordingCallback:
        return RecordingCallback(tracker)

    return factory
