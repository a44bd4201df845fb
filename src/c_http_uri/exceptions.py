"""
Custom exceptions for c_http_uri.

This module defines the exception hierarchy used throughout
the library. Only URI construction raises; environment resolution
degrades to empty components instead.
"""

from typing import Any, Optional


class HTTPUriError(Exception):
    """Base exception for all c_http_uri errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ParseError(HTTPUriError, ValueError):
    """Raised when a URI string or URI component cannot be accepted."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Parse error: {message}", cause)


class InvalidScheme(ParseError):
    """Raised for schemes other than "", "http" or "https"."""

    def __init__(self, scheme: str) -> None:
        super().__init__(
            f'Unsupported scheme "{scheme}"; must be one of an empty string, "http", or "https"'
        )
        self.scheme = scheme


class InvalidPortRange(ParseError):
    """Raised when a port falls outside the TCP/UDP range."""

    def __init__(self, port: int) -> None:
        super().__init__(f'Invalid port "{port}" specified; must be a valid TCP/UDP port')
        self.port = port


class PathContainsDelimiter(ParseError):
    """Raised when a path or query embeds a "?" or "#" delimiter."""

    def __init__(self, component: str, delimiter: str) -> None:
        what = "a query string" if delimiter == "?" else "a URI fragment"
        super().__init__(f"Invalid {component} provided; must not contain {what}")
        self.component = component
        self.delimiter = delimiter


class InvalidInputType(ParseError, TypeError):
    """Raised when a component of the wrong type is supplied."""

    def __init__(self, component: str, value: Any, expected: str = "a string") -> None:
        super().__init__(
            f"{component} must be {expected}; received {type(value).__name__}"
        )
        self.component = component
        self.value = value


class ProtocolError(HTTPUriError):
    """Raised when a request cannot be expressed as an HTTP/1.1 message."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Protocol error: {message}", cause)
