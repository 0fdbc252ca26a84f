"""Suite orchestration.

Cases run strictly in the given order, one at a time. A named case is
registered as a sub-test so its failures are attributed to it alone; an
unnamed case runs inline and its failures belong to the enclosing test.

Failures to build a request or errors raised by the handler are reported
against the case that caused them; they never stop sibling cases. Only
a suite that cannot be loaded stops the run, through `Reporter.fatal`.
"""

from functools import partial
from typing import TYPE_CHECKING

from pytest_handlertest.assertions import assert_response
from pytest_handlertest.errors import HandlerError, HandlerResolveError, RequestBuildError, SuiteLoadError
from pytest_handlertest.invoker import invoke, resolve_handler
from pytest_handlertest.loader import SuiteLoader
from pytest_handlertest.models import DEFAULT_BASE_URL
from pytest_handlertest.request import build_request

if TYPE_CHECKING:
    from io import TextIOBase
    from pathlib import Path

if TYPE_CHECKING:
    from pytest_handlertest.invoker import Handler
    from pytest_handlertest.reporting import Reporter
    from pytest_handlertest.schema import Case, Suite


def run_case(reporter: 'Reporter', handler: 'Handler', case: 'Case', *,
             base_url: str = DEFAULT_BASE_URL) -> None:
    """Build, invoke, and assert a single case against the reporter.

    Args:
        reporter: Reporter the case failures are attributed to.
        handler: Handler under test.
        case: Case to run.
        base_url: Base used for path-only request URLs.
    """
    try:
        request = build_request(case.request, base_url=base_url)
        response = invoke(handler, request)

    except (RequestBuildError, HandlerError) as error:
        reporter.report(f'{error}')
        return

    assert_response(reporter, response, case.response)


def run(reporter: 'Reporter', handler: 'Handler', *cases: 'Case',
        base_url: str = DEFAULT_BASE_URL) -> None:
    """Run cases against a handler.

    Args:
        reporter: Reporter of the enclosing test.
        handler: Handler under test.
        *cases: Cases to run, in order.
        base_url: Base used for path-only request URLs.
    """
    for case in cases:
        execute = partial(run_case, handler=handler, case=case, base_url=base_url)

        if case.name:
            reporter.subtest(case.name, execute)
        else:
            execute(reporter)


def run_suite(reporter: 'Reporter', suite: 'Suite',
              handler: 'Handler | None' = None, *,
              base_url: str | None = None) -> None:
    """Run a loaded suite.

    The handler given by the caller wins over the handler named by the
    suite, while the base URL set by the suite wins over the given one.

    Args:
        reporter: Reporter of the enclosing test.
        suite: Validated suite.
        handler: Handler under test, or `None` to use the suite handler.
        base_url: Base URL used when the suite does not set one.
    """
    if handler is None:
        if not suite.handler:
            reporter.fatal('No handler given and the suite does not name one')
            return

        try:
            handler = resolve_handler(suite.handler, suite.interface)

        except HandlerResolveError as error:
            reporter.fatal(f'{error}')
            return

    run(
        reporter,
        handler,
        *suite.cases,
        base_url=suite.base_url or base_url or DEFAULT_BASE_URL,
    )


def run_from_stream(reporter: 'Reporter', handler: 'Handler | None',
                    content: 'TextIOBase | str', *,
                    loader: SuiteLoader | None = None,
                    base_url: str | None = None) -> None:
    """Load a suite from YAML content and run it.

    If the content cannot be loaded, the failure is reported through
    `Reporter.fatal` and no case is executed.

    Args:
        reporter: Reporter of the enclosing test.
        handler: Handler under test, or `None` to use the suite handler.
        content: YAML content as a string or a text stream.
        loader: Suite loader; a default safe loader when omitted.
        base_url: Base URL used when the suite does not set one.
    """
    loader = loader or SuiteLoader()

    try:
        suite = loader.load(content)

    except SuiteLoadError as error:
        reporter.fatal(f'{error}')
        return

    run_suite(reporter, suite, handler, base_url=base_url)


def run_from_yaml(reporter: 'Reporter', handler: 'Handler | None',
                  path: 'str | Path', *,
                  loader: SuiteLoader | None = None,
                  base_url: str | None = None) -> None:
    """Load a suite from a YAML file and run it.

    If the file cannot be opened or loaded, the failure is reported
    through `Reporter.fatal` and no case is executed.

    Args:
        reporter: Reporter of the enclosing test.
        handler: Handler under test, or `None` to use the suite handler.
        path: Path to the suite file.
        loader: Suite loader; a default safe loader when omitted.
        base_url: Base URL used when the suite does not set one.
    """
    loader = loader or SuiteLoader()

    try:
        suite = loader.load_file(path)

    except SuiteLoadError as error:
        reporter.fatal(f'{error}')
        return

    run_suite(reporter, suite, handler, base_url=base_url)
