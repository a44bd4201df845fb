"""
Unit tests for the port rendering policy.
"""

import pytest

from c_http_uri.ports import is_non_standard_port


class TestIsNonStandardPort:
    """Test is_non_standard_port function."""

    def test_no_scheme_always_renders(self) -> None:
        """Test that a scheme-less URI renders any port."""
        assert is_non_standard_port("", "example.com", 80) is True
        assert is_non_standard_port("", "example.com", 443) is True

    def test_no_host_or_port(self) -> None:
        """Test that nothing is rendered without host or port."""
        assert is_non_standard_port("http", "", 8080) is False
        assert is_non_standard_port("http", "example.com", None) is False

    @pytest.mark.parametrize("scheme,port", [("http", 80), ("https", 443)])
    def test_standard_ports(self, scheme: str, port: int) -> None:
        """Test that default ports are suppressed."""
        assert is_non_standard_port(scheme, "example.com", port) is False

    @pytest.mark.parametrize("scheme,port", [("http", 443), ("http", 8080), ("https", 80), ("https", 8443)])
    def test_non_standard_ports(self, scheme: str, port: int) -> None:
        """Test that other ports are rendered."""
        assert is_non_standard_port(scheme, "example.com", port) is True
