"""Synthetic request construction.

This module turns a declarative `RequestSpec` into a `SyntheticRequest`
ready to be handed to the handler under test. The request is never sent
over a socket: it carries the method, the resolved URL, the headers, and
a single-read body stream, and can render itself as a WSGI environ.
"""

import sys
from io import BytesIO
from typing import TYPE_CHECKING
from urllib.parse import unquote_to_bytes, urljoin, urlsplit

from pytest_handlertest.errors import RequestBuildError
from pytest_handlertest.models import DEFAULT_BASE_URL

if TYPE_CHECKING:
    from typing import Any, BinaryIO

    from pytest_handlertest.schema import RequestSpec

DEFAULT_METHOD = 'GET'
DEFAULT_TARGET = '/'

HEADER_SEPARATOR = ': '

#: Address reported as the peer of every synthetic request (TEST-NET-1).
REMOTE_ADDR = '192.0.2.1'
REMOTE_PORT = '1234'

DEFAULT_PORTS = {
    'http': 80,
    'https': 443,
}

#: Headers with dedicated WSGI environ keys (no `HTTP_` prefix).
CGI_HEADERS = frozenset({
    'Content-Length',
    'Content-Type',
})


def canonical_header_key(key: str) -> str:
    """Return the canonical form of a header name.

    The first letter and any letter following a hyphen are upper-cased,
    the rest are lower-cased: `content-TYPE` becomes `Content-Type`.
    """
    return '-'.join(part.capitalize() for part in key.strip().split('-'))


def parse_header(header: str) -> tuple[str, str]:
    """Split a `Key: Value` header string on the first separator.

    Args:
        header: Raw header string.

    Returns:
        The canonical header key and its value.

    Raises:
        RequestBuildError: If the string has no `": "` separator.
    """
    key, separator, value = header.partition(HEADER_SEPARATOR)
    if not separator or not key.strip():
        raise RequestBuildError(
            f'Header {header!r} has invalid format (expected `Key: Value`)',
        )

    return canonical_header_key(key), value


class SyntheticRequest:
    """In-process request bound for a single handler invocation.

    Attributes:
        method: HTTP method.
        url: Absolute request URL.
        target: Request target as sent on the request line.
        headers: Mapping of canonical header keys to values.
        body: Single-read body stream, or `None` when there is no body.
        content_length: Length of the body in bytes.
    """

    def __init__(self, method: str, url: str, *,
                 target: str | None = None,
                 headers: dict[str, str] | None = None,
                 body: 'BinaryIO | None' = None,
                 content_length: int = 0) -> None:
        """Initialize a synthetic request.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            target: Request target; derived from `url` when omitted.
            headers: Canonical header mapping.
            body: Body stream, consumed at most once by the handler.
            content_length: Length of the body in bytes.
        """
        self.method = method
        self.url = url

        if target is None:
            parts = urlsplit(url)
            target = parts.path or DEFAULT_TARGET
            if parts.query:
                target += f'?{parts.query}'
        self.target = target

        self.headers = headers or {}
        self.body = body
        self.content_length = content_length

    def __repr__(self) -> str:
        """String representation."""
        return f'<{type(self).__name__} {self.method} {self.url}>'

    def environ(self) -> dict[str, 'Any']:
        """Render the request as a PEP 3333 WSGI environ.

        The body stream itself is placed into `wsgi.input`, so reading
        it through the environ consumes the request body.

        Returns:
            A new WSGI environ dictionary.
        """
        parts = urlsplit(self.url)
        path, _, query = self.target.partition('?')

        environ: dict[str, Any] = {
            'REQUEST_METHOD': self.method,
            'SCRIPT_NAME': '',
            'PATH_INFO': unquote_to_bytes(path).decode('latin-1'),
            'QUERY_STRING': query,
            'SERVER_NAME': parts.hostname or '',
            'SERVER_PORT': f'{parts.port or DEFAULT_PORTS.get(parts.scheme, 80)}',
            'SERVER_PROTOCOL': 'HTTP/1.1',
            'REMOTE_ADDR': REMOTE_ADDR,
            'REMOTE_PORT': REMOTE_PORT,
            'HTTP_HOST': parts.netloc,
            'wsgi.version': (1, 0),
            'wsgi.url_scheme': parts.scheme,
            'wsgi.input': self.body if self.body is not None else BytesIO(),
            'wsgi.errors': sys.stderr,
            'wsgi.multithread': False,
            'wsgi.multiprocess': False,
            'wsgi.run_once': True,
        }

        if self.content_length:
            environ['CONTENT_LENGTH'] = f'{self.content_length}'

        for key, value in self.headers.items():
            name = key.upper().replace('-', '_')
            if key not in CGI_HEADERS:
                name = f'HTTP_{name}'
            environ[name] = value

        return environ


def resolve_url(url: str, base_url: str = DEFAULT_BASE_URL) -> tuple[str, str]:
    """Resolve a request URL against the synthetic base.

    Args:
        url: Absolute URL, path-only target, or an empty string.
        base_url: Base used for path-only targets.

    Returns:
        The absolute URL and the request target.

    Raises:
        RequestBuildError: If the URL is neither an absolute HTTP(S) URL
            nor a path-only target, or cannot be parsed.
    """
    target = url or DEFAULT_TARGET

    try:
        parts = urlsplit(target)
        if parts.scheme:
            if parts.scheme not in DEFAULT_PORTS or not parts.hostname:
                raise RequestBuildError(f'URL {url!r} must be an absolute HTTP(S) URL or a path')
            _ = parts.port
            resolved = target
            target = parts.path or DEFAULT_TARGET
            if parts.query:
                target += f'?{parts.query}'
        elif target.startswith('/') and not target.startswith('//'):
            resolved = urljoin(base_url, target)
            _ = urlsplit(resolved).port
        else:
            raise RequestBuildError(f'URL {url!r} must be an absolute HTTP(S) URL or a path')

    except ValueError as base:
        raise RequestBuildError(f'URL {url!r} cannot be parsed: {base}') from base

    return resolved, target


def build_request(spec: 'RequestSpec', *,
                  base_url: str = DEFAULT_BASE_URL) -> SyntheticRequest:
    """Build a synthetic request from a request spec.

    Args:
        spec: Declarative request description.
        base_url: Base used for path-only request URLs.

    Returns:
        A request carrying a fresh single-read body stream.

    Raises:
        RequestBuildError: On a malformed header or an unusable URL.
    """
    url, target = resolve_url(spec.url, base_url)

    headers: dict[str, str] = {}
    for header in spec.headers:
        key, value = parse_header(header)
        headers[key] = value

    body = None
    content_length = 0
    if spec.body:
        content = spec.body.encode('utf-8')
        body = BytesIO(content)
        content_length = len(content)

    return SyntheticRequest(
        spec.method or DEFAULT_METHOD,
        url,
        target=target,
        headers=headers,
        body=body,
        content_length=content_length,
    )
