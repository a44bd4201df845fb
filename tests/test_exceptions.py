"""
Unit tests for custom exceptions.

Tests the exception hierarchy to ensure proper error handling
and cause tracking.
"""

import pytest

from c_http_uri.exceptions import (
    HTTPUriError,
    ParseError,
    InvalidScheme,
    InvalidPortRange,
    PathContainsDelimiter,
    InvalidInputType,
    ProtocolError,
)


class TestHTTPUriError:
    """Test base HTTPUriError class."""

    def test_basic_creation(self) -> None:
        """Test creating basic HTTPUriError."""
        error = HTTPUriError("Test error message")
        assert str(error) == "Test error message"
        assert error.message == "Test error message"
        assert error.cause is None

    def test_with_cause(self) -> None:
        """Test creating HTTPUriError with cause."""
        original_error = ValueError("Original error")
        error = HTTPUriError("Test error message", cause=original_error)
        assert error.cause == original_error


class TestParseError:
    """Test ParseError and its subclasses."""

    def test_basic_creation(self) -> None:
        """Test creating basic ParseError."""
        error = ParseError("bad URI")
        assert error.message == "Parse error: bad URI"
        assert isinstance(error, ValueError)

    def test_invalid_scheme(self) -> None:
        """Test InvalidScheme keeps the rejected scheme."""
        error = InvalidScheme("ftp")
        assert error.scheme == "ftp"
        assert 'Unsupported scheme "ftp"' in str(error)

    def test_invalid_port_range(self) -> None:
        """Test InvalidPortRange keeps the rejected port."""
        error = InvalidPortRange(70000)
        assert error.port == 70000
        assert "70000" in str(error)

    def test_path_contains_delimiter(self) -> None:
        """Test PathContainsDelimiter names the offending delimiter."""
        query_error = PathContainsDelimiter("path", "?")
        fragment_error = PathContainsDelimiter("query", "#")
        assert "must not contain a query string" in str(query_error)
        assert "must not contain a URI fragment" in str(fragment_error)
        assert fragment_error.component == "query"
        assert fragment_error.delimiter == "#"

    def test_invalid_input_type(self) -> None:
        """Test InvalidInputType is also a TypeError."""
        error = InvalidInputType("host", 42)
        assert isinstance(error, TypeError)
        assert error.value == 42
        assert "host must be a string; received int" in str(error)


class TestProtocolError:
    """Test ProtocolError class."""

    def test_with_cause(self) -> None:
        """Test creating ProtocolError with cause."""
        original_error = ValueError("Missing Host")
        error = ProtocolError("Invalid request", cause=original_error)
        assert "Protocol error: Invalid request" in str(error)
        assert error.cause == original_error


class TestExceptionHierarchy:
    """Test exception hierarchy and inheritance."""

    def test_inheritance(self) -> None:
        """Test that all exceptions inherit from HTTPUriError."""
        for cls in (ParseError, InvalidScheme, InvalidPortRange,
                    PathContainsDelimiter, InvalidInputType, ProtocolError):
            assert issubclass(cls, HTTPUriError)

    def test_builder_errors_are_parse_errors(self) -> None:
        """Test that every builder error can be caught as ParseError."""
        for cls in (InvalidScheme, InvalidPortRange, PathContainsDelimiter, InvalidInputType):
            assert issubclass(cls, ParseError)

    def test_exception_raising(self) -> None:
        """Test that exceptions can be raised and caught properly."""
        with pytest.raises(ParseError) as exc_info:
            raise InvalidPortRange(0)

        assert exc_info.value.port == 0
