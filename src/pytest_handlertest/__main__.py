"""Command-line utilities for pytest-handlertest.

Provides JSON Schema output for suite documents and a standalone runner
executing a suite file outside of pytest.
"""

from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from click import Path as PathParam
from click import Choice, ClickException, argument, echo, group, option, secho

from pytest_handlertest.errors import HandlerResolveError, SuiteLoadError
from pytest_handlertest.invoker import resolve_handler
from pytest_handlertest.jsonschema import SchemaGenerator
from pytest_handlertest.loader import SuiteLoader
from pytest_handlertest.models import HandlerTestSettings
from pytest_handlertest.reporting import RecordingReporter
from pytest_handlertest.runner import run_suite

if TYPE_CHECKING:
    from pytest_handlertest.invoker import Handler
    from pytest_handlertest.schema import Suite

SuiteFilepath = PathParam(
    exists=False,
    dir_okay=False,
    path_type=Path,
)


def select_handler(suite: 'Suite', settings: HandlerTestSettings,
                   handler: str | None, interface: str | None) -> 'Handler | None':
    """Resolve the handler a suite runs against.

    A handler given on the command line wins over the suite handler. The
    configured default handler is used only for suites naming none.

    Args:
        suite: Loaded suite.
        settings: Configured defaults.
        handler: Handler reference given on the command line.
        interface: Interface given on the command line.

    Returns:
        The resolved handler, or `None` to use the suite handler.

    Raises:
        ClickException: If the handler cannot be resolved.
    """
    if handler is None and not suite.handler:
        handler = settings.handler

    if not handler:
        return None

    if interface is None:
        interface = settings.interface
        if 'interface' in suite.model_fields_set:
            interface = suite.interface

    try:
        return resolve_handler(handler, interface)

    except HandlerResolveError as error:
        raise ClickException(f'{error}') from error


@group(help='Command-line utilities for pytest-handlertest.')
def cli() -> None:
    """Root CLI group for pytest-handlertest tools."""
    return None


@cli.command(
    name='schema',
    help='Print the suite document JSON Schema to standard output.',
)
def print_schema() -> None:
    """Generate and print the JSON Schema."""
    echo(SchemaGenerator.make_schema())


@cli.command(
    name='run',
    help=(
        'Run a YAML suite file against a handler and print the report. '
        'Exits with status 1 if any case failed.'
    ),
)
@option(
    '-H', '--handler',
    help='Handler in `module:attribute` form. Overrides the suite handler.',
    default=None,
)
@option(
    '-i', '--interface',
    type=Choice(['wsgi', 'native']),
    help='Calling convention of the handler, overriding the suite interface.',
    default=None,
)
@option(
    '-b', '--base-url',
    help='Base for path-only request URLs when the suite does not set one.',
    default=None,
)
@option(
    '--strict/--relaxed',
    help='Turn suite warnings into errors.',
    default=None,
)
@argument('suite', type=SuiteFilepath)
def run_suite_file(suite: Path, handler: str | None, interface: str | None,
                   base_url: str | None, strict: bool | None) -> None:
    """Run a suite file.

    Args:
        suite: Path to the suite file.
        handler: Handler reference overriding the suite handler.
        interface: Handler calling convention.
        base_url: Base URL override.
        strict: Strict mode override.
    """
    settings = HandlerTestSettings()
    loader = SuiteLoader(strict=settings.strict if strict is None else strict)

    reporter = RecordingReporter()
    try:
        loaded = loader.load_file(suite)

    except SuiteLoadError as error:
        reporter.report(f'{error}')

    else:
        target = select_handler(loaded, settings, handler, interface)
        reporter.execute(partial(
            run_suite,
            suite=loaded,
            handler=target,
            base_url=base_url or settings.base_url,
        ))

    if reporter.failed:
        echo(reporter.format(), err=True)
        secho(f'FAILED {suite}', fg='red', err=True)
        raise SystemExit(1)

    secho(f'PASSED {suite}', fg='green')


if __name__ == '__main__':
    cli()
