"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Mock payload sources.

A mock source answers ``load(resource)`` synchronously with the recorded
bytes, or ``None`` when nothing is registered. Absence is a legal outcome,
never an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from netstack.logging_config import get_logger

logger = get_logger(__name__)


class MockSource(ABC):
    """Abstract base for mock payload lookups."""

    @abstractmethod
    def load(self, resource: str) -> Optional[bytes]:
        """Return the payload registered under ``resource``, if any."""
        ...


class InMemoryMockSource(MockSource):
    """In-memory mock source for unit tests.

    Args:
        payloads: Mapping from resource names (``"users.json"``) to bytes
            or text.

    Example::

        source = InMemoryMockSource({
            "user.json": b'{"id": 3, "username": "u3", "email": "e3"}',
        })
    """

    def __init__(self, payloads: Optional[Dict[str, Union[bytes, str]]] = None) -> None:
        self._payloads: Dict[str, bytes] = {}
        for resource, payload in (payloads or {}).items():
            self.register(resource, payload)

    def register(self, resource: str, payload: Union[bytes, str]) -> None:
        """Register or replace the payload for ``resource``."""
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self._payloads[resource] = payload

    def unregister(self, resource: str) -> None:
        self._payloads.pop(resource, None)

    def load(self, resource: str) -> Optional[bytes]:
        return self._payloads.get(resource)


class DirectoryMockSource(MockSource):
    """Reads mock payloads from files in a directory.

    Resource names are resolved relative to ``directory`` and may not
    escape it.

    Args:
        directory: Directory holding recorded responses (``users.json``,
            ``user.json``, ...).
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self._directory = Path(directory).expanduser().resolve()

    @property
    def directory(self) -> Path:
        return self._directory

    def load(self, resource: str) -> Optional[bytes]:
        candidate = (self._directory / resource).resolve()
        try:
            candidate.relative_to(self._directory)
        except ValueError:
            logger.warning(
                "mock_resource_outside_directory",
                resource=resource,
                directory=str(self._directory),
            )
            return None

        if not candidate.is_file():
            logger.debug("mock_resource_missing", resource=resource)
            return None

        try:
            return candidate.read_bytes()
        except OSError as exc:
            logger.warning(f"Failed to read mock resource '{resource}': {exc}")
            return None
