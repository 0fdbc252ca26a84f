"""Handler invocation.

A handler is any callable accepting a synthetic request and a response
recorder; it reports its response only through the recorder. WSGI
applications are adapted to this calling convention by `WSGIHandler`.

Invocation is a plain blocking call without timeout: a handler that
never returns stalls the run.
"""

from collections.abc import Callable
from pkgutil import resolve_name
from typing import TYPE_CHECKING

from pytest_handlertest.errors import HandlerError, HandlerResolveError
from pytest_handlertest.recorder import ResponseRecorder
from pytest_handlertest.request import SyntheticRequest, canonical_header_key

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType
    from typing import Any

if TYPE_CHECKING:
    from pytest_handlertest.models import Interface

#: Handler under test. Side effects are observed through the recorder.
type Handler = Callable[[SyntheticRequest, ResponseRecorder], None]

#: WSGI application as defined by PEP 3333.
type WSGIApplication = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]

type ExcInfo = tuple[type[BaseException], BaseException, TracebackType]


def parse_status(status: str) -> int:
    """Extract the numeric code from a WSGI status line such as `404 Not Found`."""
    code, _, _ = status.strip().partition(' ')
    if not code.isdigit():
        raise ValueError(f'Invalid WSGI status line {status!r}')

    return int(code)


class WSGIHandler:
    """Adapter running a WSGI application as a handler.

    The status line passed to `start_response` becomes the recorded
    code, the response headers are recorded, and both the returned body
    iterable and the legacy `write` callable feed the recorder body.
    """

    def __init__(self, app: WSGIApplication) -> None:
        """Wrap a WSGI application.

        Args:
            app: WSGI application callable.
        """
        self.app = app

    def __repr__(self) -> str:
        """String representation."""
        return f'{type(self).__name__}({self.app!r})'

    def __call__(self, request: SyntheticRequest, response: ResponseRecorder) -> None:
        """Run the application against the request.

        Args:
            request: Synthetic request.
            response: Recorder receiving the status, headers, and body.

        Raises:
            RuntimeError: If the application never calls `start_response`.
        """
        pending: list[int] = []

        def commit() -> None:
            if pending and not response.wrote_header:
                response.write_header(pending[-1])

        def write(data: bytes) -> None:
            commit()
            response.write(data)

        def start_response(status: str, headers: list[tuple[str, str]],
                           exc_info: 'ExcInfo | None' = None) -> Callable[[bytes], None]:
            if exc_info is not None:
                if response.wrote_header:
                    raise exc_info[1].with_traceback(exc_info[2])
            elif pending:
                raise RuntimeError('start_response called twice without exc_info')

            pending.append(parse_status(status))

            response.headers.clear()
            for key, value in headers:
                response.headers[canonical_header_key(key)] = value

            return write

        result = self.app(request.environ(), start_response)
        try:
            for chunk in result:
                if chunk:
                    write(chunk)
        finally:
            if hasattr(result, 'close'):
                result.close()

        if not pending:
            raise RuntimeError('WSGI application did not call start_response')

        commit()


def resolve_handler(reference: str, interface: 'Interface' = 'wsgi') -> Handler:
    """Import a handler from a `module:attribute` reference.

    Args:
        reference: Dotted import reference, such as `app.main:application`.
        interface: `wsgi` to wrap the object into `WSGIHandler`,
            `native` to use it as a handler directly.

    Returns:
        A handler ready for invocation.

    Raises:
        HandlerResolveError: If the reference cannot be imported or does
            not point at a callable.
    """
    try:
        target = resolve_name(reference)

    except (ImportError, AttributeError, ValueError) as base:
        raise HandlerResolveError(f'Cannot import handler {reference!r}: {base}') from base

    if not callable(target):
        raise HandlerResolveError(f'Handler {reference!r} is not callable')

    if interface == 'wsgi':
        return WSGIHandler(target)

    return target


def invoke(handler: Handler, request: SyntheticRequest) -> ResponseRecorder:
    """Invoke a handler against a request with a fresh recorder.

    Args:
        handler: Handler under test.
        request: Synthetic request.

    Returns:
        The recorder holding the captured status code and body.

    Raises:
        HandlerError: If the handler raises an exception.
    """
    response = ResponseRecorder()

    try:
        handler(request, response)

    except Exception as base:
        raise HandlerError(f'Handler raised {base!r}') from base

    return response
