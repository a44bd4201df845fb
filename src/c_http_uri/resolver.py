"""
Request URI resolution for c_http_uri.

This module rebuilds the URI a client asked for from a CGI/WSGI style
environment and the headers extracted from it. Resolution never raises:
missing or broken variables produce empty components instead.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .headers import HeaderValue, get_header_value
from .uri import MAX_PORT, MIN_PORT, Uri

logger = logging.getLogger(__name__)

_HOST_PORT_RE = re.compile(r":(\d+)$")
_IPV6_HOST_RE = re.compile(r"^\[[0-9a-fA-F:]+\]$")
_SCHEME_AUTHORITY_RE = re.compile(r"^[^/:]+://[^/]+")


@dataclass
class HostPortAccumulator:
    """Host and port collected while resolving a single request."""

    host: str = ""
    port: Optional[int] = None


def strip_query_string(path: str) -> str:
    """Drop everything from the first "?" onward."""
    return path.split("?", 1)[0]


def resolve_request_target(environ: Mapping[str, Any], default_path: str = "/") -> str:
    """
    Find the request target the client sent.

    IIS rewrites win when flagged, then X-Original-URL over X-Rewrite-URL
    over REQUEST_URI, then ORIG_PATH_INFO. Any scheme and authority
    prefix is removed; the query string is kept.
    """
    unencoded_url = environ.get("UNENCODED_URL", "")
    if str(environ.get("IIS_WasUrlRewritten")) == "1" and unencoded_url:
        logger.debug("Using UNENCODED_URL from IIS rewrite")
        return _SCHEME_AUTHORITY_RE.sub("", unencoded_url)

    request_uri = environ.get("REQUEST_URI")

    for key in ("HTTP_X_REWRITE_URL", "HTTP_X_ORIGINAL_URL"):
        if environ.get(key) is not None:
            logger.debug(f"Request target overridden by {key}")
            request_uri = environ[key]

    if request_uri is None:
        request_uri = environ.get("ORIG_PATH_INFO") or default_path

    return _SCHEME_AUTHORITY_RE.sub("", request_uri)


def _valid_port(value: Any) -> Optional[int]:
    try:
        port = int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric port {value!r}")
        return None

    if not MIN_PORT <= port <= MAX_PORT:
        logger.debug(f"Ignoring out of range port {port}")
        return None

    return port


class EnvironmentUriResolver:
    """
    Resolves the request URI from a server environment.

    Instances only hold configuration and can be shared between threads.
    """

    DEFAULT_SCHEME = "http"
    DEFAULT_PATH = "/"
    IPV6_DEFAULT_PORT = 80

    def __init__(
        self,
        default_scheme: Optional[str] = None,
        default_path: Optional[str] = None,
        ipv6_default_port: Optional[int] = None,
    ):
        """
        Initialize the resolver.

        Args:
            default_scheme: Scheme used when nothing signals HTTPS
            default_path: Path used when the environment carries none
            ipv6_default_port: Port assumed while correcting IPv6 hosts

        Raises:
            InvalidScheme: If default_scheme is not "http" or "https"
        """
        self._default_scheme = Uri().with_scheme(default_scheme or self.DEFAULT_SCHEME).scheme
        self._default_path = default_path or self.DEFAULT_PATH
        self._ipv6_default_port = ipv6_default_port or self.IPV6_DEFAULT_PORT

    def resolve(self, environ: Mapping[str, Any], headers: Mapping[str, HeaderValue]) -> Uri:
        """
        Resolve the URI of the current request.

        Args:
            environ: CGI/WSGI style variables
            headers: Header map, usually from normalize_headers()

        Returns:
            Uri with scheme, host, port, path and query set
        """
        scheme = self.resolve_scheme(environ, headers)
        accumulator = self.resolve_host_and_port(environ, headers)
        path = self.resolve_path(environ)
        query = self.resolve_query(environ)

        uri = Uri.from_components(
            scheme=scheme,
            host=accumulator.host,
            port=accumulator.port,
            path=path,
            query=query,
        )
        logger.debug(f"Resolved request URI {uri}")
        return uri

    def resolve_scheme(self, environ: Mapping[str, Any], headers: Mapping[str, HeaderValue]) -> str:
        https = environ.get("HTTPS")
        if https and https != "off":
            return "https"

        forwarded_proto = get_header_value("x-forwarded-proto", headers) or ""
        if forwarded_proto.lower() == "https":
            return "https"

        return self._default_scheme

    def resolve_host_and_port(
        self,
        environ: Mapping[str, Any],
        headers: Mapping[str, HeaderValue],
    ) -> HostPortAccumulator:
        """
        Resolve host and port.

        A Host header replaces the environment entirely. Otherwise
        SERVER_NAME and SERVER_PORT are used, with a correction for IPv6
        literals some clients report with a hextet in the port position.
        """
        accumulator = HostPortAccumulator()

        host_header = get_header_value("host", headers)
        if host_header:
            self._host_and_port_from_header(accumulator, host_header)
            return accumulator

        server_name = environ.get("SERVER_NAME")
        if server_name is None:
            logger.debug("No Host header or SERVER_NAME; host left empty")
            return accumulator

        accumulator.host = str(server_name)
        if environ.get("SERVER_PORT") is not None:
            accumulator.port = _valid_port(environ["SERVER_PORT"])

        if environ.get("SERVER_ADDR") is None or not _IPV6_HOST_RE.match(accumulator.host):
            return accumulator

        self._correct_ipv6_host_and_port(accumulator, str(environ["SERVER_ADDR"]))
        return accumulator

    def resolve_path(self, environ: Mapping[str, Any]) -> str:
        path = strip_query_string(resolve_request_target(environ, self._default_path))
        # Fragments are never sent by clients
        return path.split("#", 1)[0]

    def resolve_query(self, environ: Mapping[str, Any]) -> str:
        query = environ.get("QUERY_STRING")
        if not query:
            return ""

        if query.startswith("?"):
            query = query[1:]

        return query.split("#", 1)[0]

    def _host_and_port_from_header(self, accumulator: HostPortAccumulator, host: str) -> None:
        accumulator.host = host
        accumulator.port = None

        # works for reg-name, IPv4 and bracketed IPv6
        match = _HOST_PORT_RE.search(host)
        if match:
            accumulator.host = host[: match.start()]
            accumulator.port = _valid_port(match.group(1))

        logger.debug(f"Host taken from Host header: {accumulator.host!r} port={accumulator.port}")

    def _correct_ipv6_host_and_port(self, accumulator: HostPortAccumulator, server_addr: str) -> None:
        accumulator.host = f"[{server_addr}]"
        accumulator.port = accumulator.port or self._ipv6_default_port

        last_hextet = accumulator.host[accumulator.host.rfind(":") + 1:]
        if f"{accumulator.port}]" == last_hextet:
            # the address's last hextet was read as the port
            accumulator.port = None

        logger.debug(f"Corrected IPv6 host to {accumulator.host!r} port={accumulator.port}")


_default_resolver = EnvironmentUriResolver()


def resolve_request_uri(environ: Mapping[str, Any], headers: Mapping[str, HeaderValue]) -> Uri:
    """Resolve the request URI with the default resolver settings."""
    return _default_resolver.resolve(environ, headers)
