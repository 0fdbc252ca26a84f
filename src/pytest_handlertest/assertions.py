"""Response assertion engine."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytest_handlertest.recorder import ResponseRecorder
    from pytest_handlertest.reporting import Reporter
    from pytest_handlertest.schema import ResponseSpec


def assert_response(reporter: 'Reporter', actual: 'ResponseRecorder',
                    expected: 'ResponseSpec') -> None:
    """Compare a recorded response against the expected one.

    The status code is always checked, against `200` when no code is
    expected. The body is checked only when an expected body is set, comparing
    the recorded bytes with the UTF-8 encoding of the expected text.
    Both checks run independently, so one response may produce two
    reported mismatches.

    Args:
        reporter: Reporter receiving mismatch messages.
        actual: Recorded response.
        expected: Expected response.
    """
    expected_code = expected.effective_code
    if actual.code != expected_code:
        reporter.report(f'Got response code {actual.code}, expected {expected_code}')

    if expected.body is not None and actual.body != expected.body.encode('utf-8'):
        reporter.report(f'Got response body {actual.text!r}, expected {expected.body!r}')
