"""
Server-side request construction for c_http_uri.

This module builds an immutable ServerRequest from a CGI/WSGI
environment: headers through normalize_headers(), the URI through
EnvironmentUriResolver, and query/cookie parameters through the
standard library parsers.
"""

import logging
from dataclasses import dataclass, field, replace
from http.cookies import CookieError, SimpleCookie
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Tuple
from urllib.parse import parse_qs

import h11

from .exceptions import ProtocolError
from .headers import HeaderMap, get_header_value, normalize_headers
from .resolver import EnvironmentUriResolver, _default_resolver
from .uri import Uri

logger = logging.getLogger(__name__)

Params = Dict[str, Any]


@dataclass(frozen=True)
class ServerRequest:
    """
    Immutable server request representation.

    Holds everything known about an incoming request. Once created, the
    request cannot be modified - any changes must create a new
    ServerRequest instance.
    """

    method: str = "GET"
    uri: Uri = field(default_factory=Uri)
    headers: HeaderMap = field(default_factory=dict)
    server_params: Mapping[str, Any] = field(default_factory=dict)
    query_params: Params = field(default_factory=dict)
    body_params: Params = field(default_factory=dict)
    cookie_params: Dict[str, str] = field(default_factory=dict)
    file_params: Params = field(default_factory=dict)
    attributes: Params = field(default_factory=dict)
    body: Optional[BinaryIO] = None
    protocol_version: str = "1.1"

    def __post_init__(self) -> None:
        """Validate request data after initialization."""
        if not isinstance(self.method, str):
            raise ValueError("method must be str")

        if not isinstance(self.uri, Uri):
            raise ValueError("uri must be a Uri")

        if not isinstance(self.headers, dict):
            raise ValueError("headers must be a dict")

        object.__setattr__(self, "method", self.method.upper())

    def with_method(self, method: str) -> "ServerRequest":
        """Create a new request with a different method."""
        return replace(self, method=method)

    def with_uri(self, uri: Uri) -> "ServerRequest":
        """Create a new request with a different URI."""
        return replace(self, uri=uri)

    def with_query_params(self, query: Params) -> "ServerRequest":
        return replace(self, query_params=dict(query))

    def with_body_params(self, params: Params) -> "ServerRequest":
        return replace(self, body_params=dict(params))

    def with_cookie_params(self, cookies: Dict[str, str]) -> "ServerRequest":
        return replace(self, cookie_params=dict(cookies))

    def with_attributes(self, attributes: Params) -> "ServerRequest":
        return replace(self, attributes=dict(attributes))

    def with_attribute(self, name: str, value: Any) -> "ServerRequest":
        """Create a new request with one attribute added or replaced."""
        attributes = dict(self.attributes)
        attributes[name] = value
        return replace(self, attributes=attributes)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value by name (case-insensitive), lists comma-joined."""
        return get_header_value(name, self.headers, default)

    def get_header_lines(self, name: str) -> List[str]:
        """Get every value of a header as a list."""
        name_lower = name.lower()
        for header_name, value in self.headers.items():
            if header_name.lower() == name_lower:
                return list(value) if isinstance(value, (list, tuple)) else [value]
        return []

    def has_header(self, name: str) -> bool:
        """Check if a header exists (case-insensitive)."""
        return self.get_header(name) is not None

    @property
    def request_target(self) -> str:
        """Get the origin-form target, path plus query."""
        if self.uri.query:
            return f"{self.uri.path}?{self.uri.query}"
        return self.uri.path

    def to_h11(self) -> h11.Request:
        """
        Convert to an h11 Request event, e.g. for forwarding upstream.

        A Host header is synthesised from the URI authority when the
        request carries none.

        Raises:
            ProtocolError: If h11 rejects the method, target or headers
        """
        headers: List[Tuple[str, str]] = []
        for name, value in self.headers.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            headers.extend((name, item) for item in values)

        if not self.has_header("host") and self.uri.authority:
            headers.insert(0, ("host", self.uri.authority))

        try:
            return h11.Request(
                method=self.method,
                target=self.request_target,
                headers=headers,
                http_version=self.protocol_version,
            )
        except (h11.LocalProtocolError, UnicodeEncodeError) as e:
            raise ProtocolError(f"cannot express request as HTTP/1.1: {e}", cause=e) from e


class ServerRequestFactory:
    """Builds ServerRequest instances from a server environment."""

    DEFAULT_METHOD = "GET"
    DEFAULT_PROTOCOL_VERSION = "1.1"

    @staticmethod
    def get(key: str, values: Mapping[str, Any], default: Any = None) -> Any:
        """Access a value in a mapping, returning a default value if not found."""
        if key in values:
            return values[key]
        return default

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, Any],
        query: Optional[Params] = None,
        body: Optional[Params] = None,
        cookies: Optional[Dict[str, str]] = None,
        files: Optional[Params] = None,
        resolver: Optional[EnvironmentUriResolver] = None,
    ) -> ServerRequest:
        """
        Create a ServerRequest from a server environment.

        Args:
            environ: CGI/WSGI style variables
            query: Query parameters; parsed from QUERY_STRING if omitted
            body: Parsed body parameters
            cookies: Cookies; parsed from HTTP_COOKIE if omitted
            files: Uploaded file descriptors
            resolver: URI resolver to use instead of the default one

        Returns:
            New ServerRequest instance
        """
        resolver = resolver or _default_resolver
        headers = normalize_headers(environ)
        uri = resolver.resolve(environ, headers)

        if query is None:
            query = cls.parse_query(cls.get("QUERY_STRING", environ, ""))

        if cookies is None:
            cookies = cls.parse_cookies(cls.get("HTTP_COOKIE", environ, ""))

        request = ServerRequest(
            method=cls.get("REQUEST_METHOD", environ, cls.DEFAULT_METHOD),
            uri=uri,
            headers=headers,
            server_params=environ,
            query_params=query,
            body_params=body or {},
            cookie_params=cookies,
            file_params=files or {},
            body=cls.get("wsgi.input", environ),
            protocol_version=cls.parse_protocol_version(cls.get("SERVER_PROTOCOL", environ)),
        )

        logger.debug(f"Built server request {request.method} {request.uri}")
        return request

    @staticmethod
    def parse_query(query_string: str) -> Dict[str, List[str]]:
        return parse_qs(query_string.lstrip("?"), keep_blank_values=True)

    @staticmethod
    def parse_cookies(cookie_header: str) -> Dict[str, str]:
        """Parse a Cookie header, ignoring it entirely if malformed."""
        if not cookie_header:
            return {}

        cookie = SimpleCookie()
        try:
            cookie.load(cookie_header)
        except CookieError as e:
            logger.warning(f"Ignoring malformed Cookie header: {e}")
            return {}

        return {name: morsel.value for name, morsel in cookie.items()}

    @classmethod
    def parse_protocol_version(cls, server_protocol: Optional[str]) -> str:
        """Turn "HTTP/1.0" into "1.0"."""
        if not server_protocol or "/" not in server_protocol:
            return cls.DEFAULT_PROTOCOL_VERSION
        return server_protocol.split("/", 1)[1]
