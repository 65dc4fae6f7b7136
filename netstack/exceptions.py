"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Exception hierarchy for Netstack.

All custom exceptions inherit from NetstackError base class. Request
failures are not raised past the Webservice boundary; they travel inside
a ``Failure`` result, so every ``RequestError`` carries its ``ErrorKind``
and the original cause.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed taxonomy of request failures."""

    INVALID_REQUEST = "invalid_request"
    TRANSPORT_ERROR = "transport_error"
    DATA_MISSING = "data_missing"
    MOCK_UNAVAILABLE = "mock_unavailable"
    DECODE_ERROR = "decode_error"


class NetstackError(Exception):
    """Base exception for all Netstack errors."""
    pass


# Request Errors
class RequestError(NetstackError):
    """
    Base exception for request pipeline failures.

    Attributes:
        kind: The failure classification
        cause: The underlying exception, if any
    """

    kind: ErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause


class InvalidRequestError(RequestError):
    """Raised when an endpoint cannot be turned into a request descriptor."""
    kind = ErrorKind.INVALID_REQUEST


class TransportError(RequestError):
    """Raised when the transport reports a network or protocol failure."""
    kind = ErrorKind.TRANSPORT_ERROR


class DataMissingError(RequestError):
    """Raised when the transport returned neither a body nor an error."""
    kind = ErrorKind.DATA_MISSING


class MockUnavailableError(RequestError):
    """Raised when no mock payload is registered for an endpoint."""
    kind = ErrorKind.MOCK_UNAVAILABLE


class DecodeError(RequestError):
    """
    Raised when a response body cannot be converted to the target type.

    Attributes:
        malformed: True when the bytes are not well-formed JSON, False when
            they are well-formed but do not satisfy the target shape
    """
    kind = ErrorKind.DECODE_ERROR

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        malformed: bool = False,
    ):
        super().__init__(message, cause)
        self.malformed = malformed


# Configuration Errors
class ConfigurationError(NetstackError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
