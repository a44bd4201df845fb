"""
Pytest configuration for c_http_uri tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import io

import pytest


@pytest.fixture
def sample_environ():
    """WSGI environment for a typical proxied request."""
    return {
        "REQUEST_METHOD": "post",
        "REQUEST_URI": "/api/v1/items?page=2&sort=",
        "QUERY_STRING": "page=2&sort=",
        "SERVER_NAME": "internal.local",
        "SERVER_PORT": "8000",
        "SERVER_PROTOCOL": "HTTP/1.1",
        "HTTP_HOST": "api.example.com",
        "HTTP_X_FORWARDED_PROTO": "https",
        "HTTP_X_FORWARDED_FOR": "203.0.113.7",
        "HTTP_COOKIE": "session=abc123; theme=dark",
        "CONTENT_TYPE": "application/json",
        "CONTENT_LENGTH": "17",
        "wsgi.input": io.BytesIO(b'{"name": "item"}'),
    }


@pytest.fixture
def ipv6_environ():
    """Environment where the client misreported an IPv6 literal."""
    return {
        "SERVER_ADDR": "FE80::0202:B3FF:FE1E:8329",
        "SERVER_NAME": "[FE80::0202:B3FF:FE1E:8329]",
        "SERVER_PORT": "8329",
        "REQUEST_URI": "/",
    }


@pytest.fixture
def iis_environ():
    """Environment produced by IIS with URL Rewrite."""
    return {
        "IIS_WasUrlRewritten": "1",
        "UNENCODED_URL": "/foo//bar?x=1",
        "REQUEST_URI": "/foo/bar?x=1",
        "HTTP_X_ORIGINAL_URL": "/original",
        "QUERY_STRING": "x=1",
        "SERVER_NAME": "example.com",
    }
