"""Tests for the command-line utilities."""

from json import loads
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from pytest_handlertest.__main__ import cli

if TYPE_CHECKING:
    from pathlib import Path

TEST_SUITE = '''
handler: tests.apps:hello_app
cases:
  - name: greet
    request:
      url: /hello?name=Alice
    response:
      body: Hello, Alice!
'''

TEST_SUITE_FAIL = '''
- name: teapot
  request:
    url: /coffee
'''


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """Provide a CLI runner with a clean environment."""
    for name in ('HANDLER', 'INTERFACE', 'BASE_URL', 'STRICT'):
        monkeypatch.delenv(f'HANDLERTEST_{name}', raising=False)

    return CliRunner()


def test_schema(runner: CliRunner) -> None:
    """Print the suite JSON Schema."""
    result = runner.invoke(cli, ['schema'])

    assert result.exit_code == 0

    schema = loads(result.output)

    assert schema['title'] == 'pytest-handlertest'
    assert {'Case', 'RequestSpec', 'ResponseSpec', 'Suite'} <= set(schema['$defs'])
    assert 'baseUrl' in schema['$defs']['Suite']['properties']


def test_run_passing(runner: CliRunner, tmp_path: 'Path') -> None:
    """Run a passing suite naming its handler."""
    suite = tmp_path / 'suite.yaml'
    suite.write_text(TEST_SUITE)

    result = runner.invoke(cli, ['run', f'{suite}'])

    assert result.exit_code == 0
    assert f'PASSED {suite}' in result.output


def test_run_failing(runner: CliRunner, tmp_path: 'Path') -> None:
    """Print the report and exit with status 1 for a failing suite."""
    suite = tmp_path / 'suite.yaml'
    suite.write_text(TEST_SUITE_FAIL)

    result = runner.invoke(cli, [
        'run', f'{suite}',
        '--handler', 'tests.apps:teapot',
        '--interface', 'native',
    ])

    assert result.exit_code == 1
    assert 'teapot:' in result.output
    assert 'Got response code 418, expected 200' in result.output
    assert f'FAILED {suite}' in result.output


def test_run_missing_file(runner: CliRunner, tmp_path: 'Path') -> None:
    """Report a missing suite file as a failure."""
    result = runner.invoke(cli, ['run', f'{tmp_path / "missing.yaml"}'])

    assert result.exit_code == 1
    assert 'Cannot open suite' in result.output


def test_run_unresolvable_handler(runner: CliRunner, tmp_path: 'Path') -> None:
    """Exit with the resolution error for an unusable handler."""
    suite = tmp_path / 'suite.yaml'
    suite.write_text(TEST_SUITE_FAIL)

    result = runner.invoke(cli, ['run', f'{suite}', '--handler', 'tests.apps:NOT_CALLABLE'])

    assert result.exit_code == 1
    assert "Handler 'tests.apps:NOT_CALLABLE' is not callable" in result.output


def test_run_handler_from_environment(runner: CliRunner, tmp_path: 'Path',
                                      monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the handler given by the environment."""
    suite = tmp_path / 'suite.yaml'
    suite.write_text('- request:\n    url: /hello\n  response:\n    body: Hello, World!\n')

    monkeypatch.setenv('HANDLERTEST_HANDLER', 'tests.apps:hello_app')

    result = runner.invoke(cli, ['run', f'{suite}'])

    assert result.exit_code == 0


def test_run_suite_handler_wins_over_environment(runner: CliRunner, tmp_path: 'Path',
                                                 monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the suite handler when the environment names a default one."""
    suite = tmp_path / 'suite.yaml'
    suite.write_text(
        'handler: tests.apps:teapot\n'
        'interface: native\n'
        'cases:\n'
        '  - response:\n'
        '      code: 418\n'
    )

    monkeypatch.setenv('HANDLERTEST_HANDLER', 'tests.apps:hello_app')

    result = runner.invoke(cli, ['run', f'{suite}'])

    assert result.exit_code == 0
    assert f'PASSED {suite}' in result.output


def test_run_option_wins_over_suite_handler(runner: CliRunner, tmp_path: 'Path') -> None:
    """Run the handler given on the command line instead of the suite one."""
    suite = tmp_path / 'suite.yaml'
    suite.write_text(
        'handler: tests.apps:teapot\n'
        'interface: native\n'
        'cases:\n'
        '  - request:\n'
        '      url: /hello\n'
        '    response:\n'
        '      body: Hello, World!\n'
    )

    result = runner.invoke(cli, ['run', f'{suite}', '--handler', 'tests.apps:hello_app', '--interface', 'wsgi'])

    assert result.exit_code == 0
