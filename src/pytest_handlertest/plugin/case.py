"""Pytest item executing a loaded suite."""

from functools import partial
from typing import TYPE_CHECKING

import pytest

from pytest_handlertest.errors import HandlerResolveError
from pytest_handlertest.invoker import resolve_handler
from pytest_handlertest.reporting import RecordingReporter
from pytest_handlertest.runner import run_suite

if TYPE_CHECKING:
    from typing import Any

if TYPE_CHECKING:
    from pytest_handlertest.invoker import Handler
    from pytest_handlertest.models import HandlerTestSettings
    from pytest_handlertest.schema import Suite


class SuiteItem(pytest.Item):
    """Pytest item running every case of one suite file in order."""

    __test__ = False

    def __init__(self, *,
                 suite: 'Suite',
                 settings: 'HandlerTestSettings',
                 **kwargs: 'Any') -> None:
        """Initialize a pytest item backed by a suite.

        Args:
            suite: Validated suite.
            settings: Runtime settings providing the default handler.
            **kwargs: Keyword pytest.Item arguments.
        """
        super().__init__(**kwargs)

        self.suite = suite
        self.settings = settings

    def default_handler(self) -> 'Handler | None':
        """Resolve the configured default handler for suites naming none.

        An interface set by the suite wins over the configured one.

        Returns:
            The default handler, or `None` to let the suite name its own.
        """
        if self.suite.handler or not self.settings.handler:
            return None

        interface = self.settings.interface
        if 'interface' in self.suite.model_fields_set:
            interface = self.suite.interface

        try:
            return resolve_handler(self.settings.handler, interface)

        except HandlerResolveError as error:
            pytest.fail(f'{error}', pytrace=False)

    def runtest(self) -> None:
        """Execute the suite and fail with the report on any mismatch."""
        reporter = RecordingReporter()
        reporter.execute(partial(
            run_suite,
            suite=self.suite,
            handler=self.default_handler(),
            base_url=self.settings.base_url,
        ))

        if reporter.failed:
            pytest.fail(reporter.format(), pytrace=False)

    def reportinfo(self) -> tuple['Any', int | None, str]:
        """Describe the item location for pytest reports."""
        return self.path, None, f'handlertest: {self.name} ({len(self.suite.cases)} cases)'
