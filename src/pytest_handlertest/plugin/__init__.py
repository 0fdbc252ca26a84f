"""Pytest plugin running declarative handler test cases.

This module integrates `pytest-handlertest` with pytest by:
- registering custom command-line options;
- resolving runtime settings and a shared `SuiteLoader`;
- collecting YAML suite files as executable test items;
- providing the `handlertest` fixture for cases written in Python.

YAML files matching the pattern `test_*.http.yml` or `test_*.http.yaml`
are automatically collected.
"""

from re import match
from typing import TYPE_CHECKING

from yaml import Loader, SafeLoader

from pytest_handlertest.loader import SuiteLoader
from pytest_handlertest.models import HandlerTestSettings

from .fixtures import HandlerTester, handlertest
from .spec import SuiteFile

if TYPE_CHECKING:
    from pathlib import Path

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.nodes import Node

__all__ = (
    'HandlerTester',
    'handlertest',
    'pytest_addoption',
    'pytest_collect_file',
    'pytest_configure',
)


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-handlertest.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('handlertest', 'declarative HTTP handler tests')
    group.addoption(
        '--handlertest-handler',
        action='store',
        dest='handlertest_handler',
        default=None,
        help=(
            'Default handler in `module:attribute` form for suite files '
            'that do not name a handler themselves.'
        ),
    )
    group.addoption(
        '--handlertest-interface',
        action='store',
        dest='handlertest_interface',
        choices=('wsgi', 'native'),
        default=None,
        help='Calling convention of the default handler.',
    )
    group.addoption(
        '--handlertest-base-url',
        action='store',
        dest='handlertest_base_url',
        default=None,
        help='Base against which path-only request URLs are resolved.',
    )
    group.addoption(
        '--handlertest-strict',
        action='store_true',
        dest='handlertest_strict',
        default=False,
        help='Turn suite warnings (such as duplicate case names) into errors.',
    )
    group.addoption(
        '--handlertest-unsafe-yaml',
        action='store_true',
        dest='handlertest_unsafe_yaml',
        default=False,
        help=(
            'Allow loading suite files using the unsafe PyYAML Loader. '
            'This enables construction of arbitrary Python objects and '
            'should only be used with trusted suite definitions.'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Configure pytest-handlertest integration.

    Environment settings are resolved first and then overridden by the
    command-line options. The result is attached to the configuration
    as `config.handlertest_settings`, next to a shared loader attached
    as `config.handlertest_loader`.

    Args:
        config: Pytest configuration object.
    """
    defaults = HandlerTestSettings()

    settings = HandlerTestSettings(
        handler=config.getoption('handlertest_handler', default=None) or defaults.handler,
        interface=config.getoption('handlertest_interface', default=None) or defaults.interface,
        base_url=config.getoption('handlertest_base_url', default=None) or defaults.base_url,
        strict=config.getoption('handlertest_strict', default=False) or defaults.strict,
    )

    loader: type[Loader | SafeLoader] = SafeLoader
    if config.getoption('handlertest_unsafe_yaml', default=False):
        loader = Loader

    config.handlertest_settings = settings  # type: ignore[attr-defined]
    config.handlertest_loader = SuiteLoader(  # type: ignore[attr-defined]
        loader,
        strict=settings.strict,
    )


def pytest_collect_file(parent: 'Node', file_path: 'Path') -> SuiteFile | None:
    """Collect YAML suite files.

    Args:
        parent: Parent pytest collection node.
        file_path: Path to the file being considered.

    Returns:
        A `SuiteFile` collector if the file matches the suite pattern,
        otherwise `None`.
    """
    if match(r'^test_.+\.http\.ya?ml$', file_path.name):
        return SuiteFile.from_parent(
            parent,
            path=file_path,
        )

    return None
