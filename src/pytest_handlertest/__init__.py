"""Declarative test cases for HTTP handlers.

The `pytest_handlertest` package describes HTTP handler test cases
concisely, in code or as YAML data, and runs them in-process against
any handler or WSGI application, asserting on status and body.

Key features:
- immutable case models where unset expectations are not asserted;
- synthetic requests with single-read bodies and arbitrary headers;
- named cases reported as sub-tests, unnamed cases run inline;
- pytest integration through a fixture and YAML suite collection.
"""

from .invoker import Handler, WSGIHandler, invoke, resolve_handler
from .recorder import ResponseRecorder
from .reporting import RecordingReporter, Reporter
from .request import SyntheticRequest, build_request
from .runner import run, run_from_stream, run_from_yaml, run_suite
from .schema import Case, RequestSpec, ResponseSpec, Suite

__all__ = (
    'Case',
    'Handler',
    'RecordingReporter',
    'Reporter',
    'RequestSpec',
    'ResponseRecorder',
    'ResponseSpec',
    'Suite',
    'SyntheticRequest',
    'WSGIHandler',
    'build_request',
    'invoke',
    'resolve_handler',
    'run',
    'run_from_stream',
    'run_from_yaml',
    'run_suite',
)
