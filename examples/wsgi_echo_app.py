"""
WSGI echo application using c_http_uri.

This example demonstrates how to rebuild the URI a client asked for
behind a reverse proxy, and print what the server saw.
"""

import logging
from wsgiref.simple_server import make_server

from c_http_uri import ServerRequestFactory

# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


def application(environ, start_response):
    """Echo the resolved request back to the client."""
    request = ServerRequestFactory.from_environ(environ)

    lines = [
        f"method: {request.method}",
        f"uri: {request.uri}",
        f"host: {request.uri.host}",
        f"port: {request.uri.port}",
        f"path: {request.uri.path}",
        f"query: {request.query_params}",
        f"cookies: {request.cookie_params}",
    ]
    lines.extend(f"header {name}: {value}" for name, value in request.headers.items())
    body = "\n".join(lines).encode("utf-8") + b"\n"

    start_response("200 OK", [
        ("Content-Type", "text/plain; charset=utf-8"),
        ("Content-Length", str(len(body))),
    ])
    return [body]


def main():
    """Serve the echo application on localhost:8000."""
    with make_server("127.0.0.1", 8000, application) as server:
        logger.info("Serving on http://127.0.0.1:8000/ (try curl -H 'X-Forwarded-Proto: https')")
        server.serve_forever()


if __name__ == "__main__":
    main()
