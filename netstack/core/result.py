"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Typed request outcome.

A ``Result`` is exactly one of ``Success(value)`` or ``Failure(error)``.
Failures carry a ``RequestError`` whose ``kind`` classifies the failure and
whose ``cause`` keeps the original exception for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from netstack.exceptions import ErrorKind, RequestError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome holding the decoded value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Return the decoded value."""
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed outcome holding the classified error."""

    error: RequestError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        """Failure classification."""
        return self.error.kind

    def unwrap(self):
        """Raise the carried error."""
        raise self.error


Result = Union[Success[T], Failure]

ResultCallback = Callable[[Result[T]], None]
