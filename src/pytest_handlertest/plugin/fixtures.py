"""Fixture running handler test cases from Python test functions."""

from typing import TYPE_CHECKING

import pytest

from pytest_handlertest.reporting import RecordingReporter
from pytest_handlertest.runner import run, run_from_stream, run_from_yaml

if TYPE_CHECKING:
    from io import TextIOBase
    from pathlib import Path

if TYPE_CHECKING:
    from pytest_handlertest.invoker import Handler
    from pytest_handlertest.loader import SuiteLoader
    from pytest_handlertest.schema import Case


class HandlerTester:
    """Runs cases against a handler and fails the calling test on mismatch.

    Each call records its outcome with a fresh `RecordingReporter`. If
    anything failed, the test is failed with the formatted report listing
    every mismatch under the name of the case that produced it.
    """

    __test__ = False

    def __init__(self, loader: 'SuiteLoader', *, base_url: str) -> None:
        """Initialize the tester.

        Args:
            loader: Loader used for YAML suites.
            base_url: Base used for path-only request URLs.
        """
        self.loader = loader
        self.base_url = base_url

    def run(self, handler: 'Handler', *cases: 'Case') -> RecordingReporter:
        """Run cases against a handler.

        Args:
            handler: Handler under test.
            *cases: Cases to run, in order.

        Returns:
            The reporter holding the outcome.
        """
        reporter = RecordingReporter()
        reporter.execute(lambda unit: run(unit, handler, *cases, base_url=self.base_url))

        return self.check(reporter)

    def run_from_yaml(self, handler: 'Handler | None', path: 'str | Path') -> RecordingReporter:
        """Load a YAML suite file and run it.

        Args:
            handler: Handler under test, or `None` to use the suite handler.
            path: Path to the suite file.

        Returns:
            The reporter holding the outcome.
        """
        reporter = RecordingReporter()
        reporter.execute(lambda unit: run_from_yaml(
            unit,
            handler,
            path,
            loader=self.loader,
            base_url=self.base_url,
        ))

        return self.check(reporter)

    def run_from_stream(self, handler: 'Handler | None',
                        content: 'TextIOBase | str') -> RecordingReporter:
        """Load a YAML suite from a string or a stream and run it.

        Args:
            handler: Handler under test, or `None` to use the suite handler.
            content: YAML content.

        Returns:
            The reporter holding the outcome.
        """
        reporter = RecordingReporter()
        reporter.execute(lambda unit: run_from_stream(
            unit,
            handler,
            content,
            loader=self.loader,
            base_url=self.base_url,
        ))

        return self.check(reporter)

    @staticmethod
    def check(reporter: RecordingReporter) -> RecordingReporter:
        """Fail the current test if the reporter recorded any failure."""
        if reporter.failed:
            pytest.fail(reporter.format(), pytrace=False)

        return reporter


@pytest.fixture
def handlertest(pytestconfig: pytest.Config) -> HandlerTester:
    """Provide a `HandlerTester` configured from the pytest options.

    Example:
        def test_ping(handlertest):
            handlertest.run(app, Case(request={'url': '/ping'}))
    """
    return HandlerTester(
        pytestconfig.handlertest_loader,  # type: ignore[attr-defined]
        base_url=pytestconfig.handlertest_settings.base_url,  # type: ignore[attr-defined]
    )
