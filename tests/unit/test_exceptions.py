"""
Unit tests for exception hierarchy.
"""

import pytest

from netstack.exceptions import (
    ConfigurationError,
    DataMissingError,
    DecodeError,
    ErrorKind,
    InvalidConfigurationError,
    InvalidRequestError,
    MockUnavailableError,
    NetstackError,
    RequestError,
    TransportError,
)


class TestExceptionHierarchy:
    """Test that exception hierarchy is correctly defined."""

    def test_base_exception(self):
        """Test that NetstackError is the base exception."""
        error = NetstackError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    def test_request_errors_inherit_from_base(self):
        assert issubclass(RequestError, NetstackError)
        for cls in (InvalidRequestError, TransportError, DataMissingError, MockUnavailableError, DecodeError):
            assert issubclass(cls, RequestError)

    def test_configuration_errors_inherit_from_base(self):
        assert issubclass(ConfigurationError, NetstackError)
        assert issubclass(InvalidConfigurationError, ConfigurationError)


class TestRequestErrors:
    @pytest.mark.parametrize(
        "cls, kind",
        [
            (InvalidRequestError, ErrorKind.INVALID_REQUEST),
            (TransportError, ErrorKind.TRANSPORT_ERROR),
            (DataMissingError, ErrorKind.DATA_MISSING),
            (MockUnavailableError, ErrorKind.MOCK_UNAVAILABLE),
            (DecodeError, ErrorKind.DECODE_ERROR),
        ],
    )
    def test_each_error_has_its_kind(self, cls, kind):
        assert cls("boom").kind is kind

    def test_kinds_are_closed(self):
        assert len(ErrorKind) == 5
        assert ErrorKind.DATA_MISSING == "data_missing"

    def test_cause_is_preserved(self):
        cause = ConnectionResetError("reset by peer")
        error = TransportError("GET http://example.com failed", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_cause_defaults_to_none(self):
        error = DataMissingError("no data")
        assert error.cause is None
        assert error.__cause__ is None

    def test_decode_error_malformed_flag(self):
        assert DecodeError("shape").malformed is False
        assert DecodeError("bytes", malformed=True).malformed is True

    def test_raising_request_error(self):
        """Test raising and catching request errors through the base."""
        with pytest.raises(RequestError) as exc_info:
            raise MockUnavailableError("no mock for 'user.json'")
        assert exc_info.value.kind is ErrorKind.MOCK_UNAVAILABLE
        assert "user.json" in str(exc_info.value)
