"""
Port rendering policy.

Decides whether a port has to appear in a URI authority, given the
scheme's implicit default.
"""

from typing import Dict, Optional

DEFAULT_PORTS: Dict[str, int] = {
    "http": 80,
    "https": 443,
}


def is_non_standard_port(scheme: str, host: str, port: Optional[int]) -> bool:
    """
    Check whether ``port`` must be rendered for ``scheme``.

    Without a scheme there is no implicit default, so any port counts
    as non-standard. Without a host or a port there is nothing to render.

    Args:
        scheme: URI scheme ("", "http" or "https")
        host: URI host, empty when absent
        port: URI port, None when absent

    Returns:
        True if the port has to be written out explicitly
    """
    if not scheme:
        return True

    if not host or not port:
        return False

    default = DEFAULT_PORTS.get(scheme)
    return default is not None and port != default
