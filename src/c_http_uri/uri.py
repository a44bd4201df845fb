"""
URI value type for c_http_uri.

This module defines the immutable Uri class together with its parser
and serializer. Like the rest of the library, values never change once
created - every with_* method returns a new instance.
"""

import re
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, Union
from urllib.parse import SplitResult, urlsplit

from typing_extensions import Final

from .exceptions import (
    InvalidInputType,
    InvalidPortRange,
    InvalidScheme,
    ParseError,
    PathContainsDelimiter,
)
from .ports import is_non_standard_port

ALLOWED_SCHEMES: Final = frozenset({"", "http", "https"})
MIN_PORT: Final = 1
MAX_PORT: Final = 65535

_STRING_FIELDS = ("scheme", "user_info", "host", "raw_path", "query", "fragment")

# "host:port" without a scheme, which urlsplit reads as scheme "host"
_SCHEMELESS_AUTHORITY_RE = re.compile(r"^[^/:?#]+:\d+(?=[/?#]|$)")


@dataclass(frozen=True, eq=False)
class Uri:
    """
    Immutable URI value.

    The stored path may be empty; the ``path`` property exposes "/" in
    that case. Equality and hashing follow the exposed view, so
    ``Uri()`` and ``Uri(raw_path="/")`` compare equal.
    """

    scheme: str = ""
    user_info: str = ""
    host: str = ""
    port: Optional[int] = None
    raw_path: str = ""
    query: str = ""
    fragment: str = ""

    def __post_init__(self) -> None:
        """Validate components after initialization."""
        for name in _STRING_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidInputType(name, value)

        if self.scheme not in ALLOWED_SCHEMES:
            raise InvalidScheme(self.scheme)

        if self.port is not None:
            if isinstance(self.port, bool) or not isinstance(self.port, int):
                raise InvalidInputType("port", self.port, "an integer")
            if not MIN_PORT <= self.port <= MAX_PORT:
                raise InvalidPortRange(self.port)

        for delimiter in ("?", "#"):
            if delimiter in self.raw_path:
                raise PathContainsDelimiter("path", delimiter)

        if "#" in self.query:
            raise PathContainsDelimiter("query", "#")

    @classmethod
    def parse(cls, text: str) -> "Uri":
        """
        Create a Uri from its string form.

        Args:
            text: URI string; an empty string yields an empty Uri

        Returns:
            New Uri instance

        Raises:
            InvalidInputType: If text is not a string
            ParseError: If the string cannot be split into URI components
        """
        if not isinstance(text, str):
            raise InvalidInputType("URI", text)

        if not text:
            return cls()

        parts = _split(text)
        if parts.scheme not in ALLOWED_SCHEMES and _SCHEMELESS_AUTHORITY_RE.match(text):
            parts = _split("//" + text)

        user_info, host, port = _split_netloc(parts.netloc)

        return cls(
            scheme=parts.scheme,
            user_info=user_info,
            host=host,
            port=port,
            raw_path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
        )

    @classmethod
    def from_components(
        cls,
        scheme: str = "",
        user_info: str = "",
        host: str = "",
        port: Optional[int] = None,
        path: str = "",
        query: str = "",
        fragment: str = "",
    ) -> "Uri":
        """Build a Uri by running every component through its builder."""
        return (
            cls()
            .with_scheme(scheme)
            .with_user_info(user_info)
            .with_host(host)
            .with_port(port)
            .with_path(path)
            .with_query(query)
            .with_fragment(fragment)
        )

    @property
    def path(self) -> str:
        """Get the path, "/" when none is stored."""
        return self.raw_path or "/"

    @property
    def authority(self) -> str:
        """Get the ``[user-info@]host[:port]`` portion, "" without a host."""
        if not self.host:
            return ""

        authority = self.host
        if self.user_info:
            authority = f"{self.user_info}@{authority}"

        if self.port is not None and is_non_standard_port(self.scheme, self.host, self.port):
            authority = f"{authority}:{self.port}"

        return authority

    def with_scheme(self, scheme: str) -> "Uri":
        """Create a new Uri with a different scheme."""
        if not isinstance(scheme, str):
            raise InvalidInputType("scheme", scheme)

        scheme = scheme.lower()
        if scheme.endswith("://"):
            scheme = scheme[:-3]

        if scheme not in ALLOWED_SCHEMES:
            raise InvalidScheme(scheme)

        return replace(self, scheme=scheme)

    def with_user_info(self, user: str, password: Optional[str] = None) -> "Uri":
        """Create a new Uri with different user information."""
        if not isinstance(user, str):
            raise InvalidInputType("user", user)

        info = user
        if password:
            info = f"{info}:{password}"

        return replace(self, user_info=info)

    def with_host(self, host: str) -> "Uri":
        """Create a new Uri with a different host."""
        if not isinstance(host, str):
            raise InvalidInputType("host", host)
        return replace(self, host=host)

    def with_port(self, port: Union[int, str, None]) -> "Uri":
        """
        Create a new Uri with a different port.

        Args:
            port: Port number or integer string; None removes the port

        Raises:
            InvalidInputType: If port is neither an integer nor a digit string
            InvalidPortRange: If port is outside 1-65535
        """
        if port is None:
            return replace(self, port=None)

        if isinstance(port, str) and port.isdecimal():
            port = int(port)

        if isinstance(port, bool) or not isinstance(port, int):
            raise InvalidInputType("port", port, "an integer or integer string")

        if not MIN_PORT <= port <= MAX_PORT:
            raise InvalidPortRange(port)

        return replace(self, port=port)

    def with_path(self, path: str) -> "Uri":
        """Create a new Uri with a different path, rooting it if needed."""
        if not isinstance(path, str):
            raise InvalidInputType("path", path)

        for delimiter in ("?", "#"):
            if delimiter in path:
                raise PathContainsDelimiter("path", delimiter)

        if path and not path.startswith("/"):
            path = "/" + path

        return replace(self, raw_path=path)

    def with_query(self, query: str) -> "Uri":
        """Create a new Uri with a different query string."""
        if not isinstance(query, str):
            raise InvalidInputType("query", query)

        if "#" in query:
            raise PathContainsDelimiter("query", "#")

        if query.startswith("?"):
            query = query[1:]

        return replace(self, query=query)

    def with_fragment(self, fragment: str) -> "Uri":
        """Create a new Uri with a different fragment."""
        if not isinstance(fragment, str):
            raise InvalidInputType("fragment", fragment)

        if fragment.startswith("#"):
            fragment = fragment[1:]

        return replace(self, fragment=fragment)

    def _key(self) -> Tuple[Any, ...]:
        return (
            self.scheme,
            self.user_info,
            self.host,
            self.port,
            self.path,
            self.query,
            self.fragment,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Uri):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        """
        Render the URI.

        "://" follows any non-empty scheme, even when the authority is
        empty.
        """
        uri = ""

        if self.scheme:
            uri += f"{self.scheme}://"

        uri += self.authority
        uri += self.path

        if self.query:
            uri += f"?{self.query}"

        if self.fragment:
            uri += f"#{self.fragment}"

        return uri


def parse_uri(text: str) -> Uri:
    """Parse a URI string into a Uri."""
    return Uri.parse(text)


def _split(text: str) -> SplitResult:
    try:
        return urlsplit(text)
    except ValueError as e:
        raise ParseError(f'Unable to parse URI "{text}"', cause=e) from e


def _split_netloc(netloc: str) -> Tuple[str, str, Optional[int]]:
    """
    Split a network location into user info, host and port.

    Hosts keep their case and IPv6 literals keep their brackets.
    """
    user_info, _, hostport = netloc.rpartition("@")
    user, _, password = user_info.partition(":")
    if password:
        user_info = f"{user}:{password}"
    else:
        user_info = user

    host = hostport
    port: Optional[int] = None

    if ":" in hostport and not hostport.endswith("]"):
        host, _, port_text = hostport.rpartition(":")
        if port_text:
            if not port_text.isdecimal():
                raise ParseError(f'Invalid port "{port_text}" in "{netloc}"')
            port = int(port_text)
            if not MIN_PORT <= port <= MAX_PORT:
                raise InvalidPortRange(port)

    return user_info, host, port
