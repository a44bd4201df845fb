"""
Header extraction from a server environment.

CGI and WSGI servers pass request headers as ``HTTP_*`` variables, with
``CONTENT_TYPE``, ``CONTENT_LENGTH`` and friends lacking the prefix. This
module turns those variables into a lower-case, hyphenated header map.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from typing_extensions import TypeAlias

HeaderValue: TypeAlias = Union[str, List[str]]
HeaderMap: TypeAlias = Dict[str, HeaderValue]

# Cookies travel through their own channel, see ServerRequest.cookie_params
COOKIE_PREFIX = "HTTP_COOKIE"
HTTP_PREFIX = "HTTP_"
CONTENT_PREFIX = "CONTENT_"


def normalize_headers(environ: Mapping[str, Any]) -> HeaderMap:
    """
    Extract request headers from a server environment.

    Args:
        environ: CGI/WSGI style variables

    Returns:
        Mapping of lower-case header names to their values
    """
    headers: HeaderMap = {}

    for key, value in environ.items():
        if key.startswith(COOKIE_PREFIX):
            continue

        if not value:
            continue

        if key.startswith(HTTP_PREFIX):
            name = key[len(HTTP_PREFIX):].replace("_", " ")
            name = name.title().replace(" ", "-")
            headers[name.lower()] = _header_value(value)
            continue

        if key.startswith(CONTENT_PREFIX):
            suffix = key[len(CONTENT_PREFIX):]
            name = "Content-" + (suffix if suffix == "MD5" else suffix.capitalize())
            headers[name.lower()] = _header_value(value)

    return headers


def get_header_value(
    name: str,
    headers: Mapping[str, HeaderValue],
    default: Optional[str] = None,
) -> Optional[str]:
    """
    Get a header value by name (case-insensitive).

    Multi-valued headers are joined with ", ".
    """
    name_lower = name.lower()
    for header_name, value in headers.items():
        if header_name.lower() == name_lower:
            if isinstance(value, (list, tuple)):
                return ", ".join(value)
            return value

    return default


def _header_value(value: Any) -> HeaderValue:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value)
