"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from pytest_handlertest.reporting import RecordingReporter

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_mock import MockerFixture, MockType

    from pytest_handlertest import ResponseRecorder, SyntheticRequest


@pytest.fixture
def reporter(mocker: 'MockerFixture') -> 'MockType':
    """Provide a mock reporter recording calls without running sub-tests.

    `subtest` returns `True` and never calls the sub-test body, so tests
    can inspect registration separately from execution.
    """
    mock = mocker.Mock(spec=RecordingReporter)
    mock.subtest.return_value = True

    return mock


@pytest.fixture
def empty_handler() -> 'Callable[[SyntheticRequest, ResponseRecorder], None]':
    """Provide a handler that writes nothing."""
    def handler(request: 'SyntheticRequest', response: 'ResponseRecorder') -> None:
        return None

    return handler


@pytest.fixture
def bad_handler() -> 'Callable[[SyntheticRequest, ResponseRecorder], None]':
    """Provide a handler that always answers `400 Bad`."""
    def handler(request: 'SyntheticRequest', response: 'ResponseRecorder') -> None:
        response.write_header(400)
        response.write(b'Bad')

    return handler


@pytest.fixture
def echo_handler() -> 'Callable[[SyntheticRequest, ResponseRecorder], None]':
    """Provide a handler echoing the method, target, and body."""
    def handler(request: 'SyntheticRequest', response: 'ResponseRecorder') -> None:
        body = request.body.read() if request.body else b''
        response.write(f'{request.method} {request.target} '.encode())
        response.write(body)

    return handler
