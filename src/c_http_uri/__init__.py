"""
c_http_uri - Request URI resolution for HTTP servers

An immutable URI value type and the logic that rebuilds the URI a
client requested from a CGI/WSGI server environment, including
reverse-proxy headers, IIS rewrite variables and misreported IPv6 hosts.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .uri import Uri, parse_uri
from .ports import is_non_standard_port
from .headers import HeaderMap, get_header_value, normalize_headers
from .resolver import EnvironmentUriResolver, resolve_request_uri
from .server_request import ServerRequest, ServerRequestFactory
from .exceptions import (
    HTTPUriError,
    ParseError,
    InvalidScheme,
    InvalidPortRange,
    PathContainsDelimiter,
    InvalidInputType,
    ProtocolError,
)

__all__ = [
    "Uri",
    "parse_uri",
    "is_non_standard_port",
    "HeaderMap",
    "get_header_value",
    "normalize_headers",
    "EnvironmentUriResolver",
    "resolve_request_uri",
    "ServerRequest",
    "ServerRequestFactory",
    "HTTPUriError",
    "ParseError",
    "InvalidScheme",
    "InvalidPortRange",
    "PathContainsDelimiter",
    "InvalidInputType",
    "ProtocolError",
]
