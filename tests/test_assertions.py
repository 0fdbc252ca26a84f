"""Tests for the response assertion engine."""

from typing import TYPE_CHECKING

import pytest

from pytest_handlertest.assertions import assert_response
from pytest_handlertest.recorder import ResponseRecorder
from pytest_handlertest.schema import ResponseSpec

if TYPE_CHECKING:
    from pytest_mock import MockType


def record(code: int, body: str = '') -> ResponseRecorder:
    """Build a recorder holding a response."""
    recorder = ResponseRecorder()
    recorder.write_header(code)
    recorder.write(body)

    return recorder


@pytest.mark.parametrize('actual, expected', (
    pytest.param(record(500, 'Hello world!'), ResponseSpec(code=500, body='Hello world!'), id='ok with body'),
    pytest.param(record(200), ResponseSpec(code=200), id='ok without body'),
    pytest.param(record(200, 'Hello world!'), ResponseSpec(), id='absent code and body'),
    pytest.param(record(200, 'Hello world!'), ResponseSpec(body='Hello world!'), id='absent code'),
    pytest.param(record(201, 'Hello world!'), ResponseSpec(code=201), id='absent body'),
    pytest.param(record(200), ResponseSpec(body=''), id='empty body not checked'),
))
def test_assert_response_passes(actual: ResponseRecorder, expected: ResponseSpec,
                                reporter: 'MockType') -> None:
    """Report nothing when the response matches."""
    assert_response(reporter, actual, expected)

    reporter.report.assert_not_called()


@pytest.mark.parametrize('actual, expected, expect_message', (
    pytest.param(
        record(500, 'Hello world!'), ResponseSpec(code=200, body='Hello world!'),
        'Got response code 500, expected 200',
        id='code mismatch',
    ),
    pytest.param(
        record(200, 'Hello world!'), ResponseSpec(code=200, body='Not hello world'),
        "Got response body 'Hello world!', expected 'Not hello world'",
        id='body mismatch',
    ),
    pytest.param(
        record(201), ResponseSpec(),
        'Got response code 201, expected 200',
        id='implicit ok',
    ),
    pytest.param(
        record(200), ResponseSpec(body='Hello'),
        "Got response body '', expected 'Hello'",
        id='empty actual body',
    ),
))
def test_assert_response_fails(actual: ResponseRecorder, expected: ResponseSpec,
                               expect_message: str, reporter: 'MockType') -> None:
    """Report one mismatch with both values."""
    assert_response(reporter, actual, expected)

    reporter.report.assert_called_once_with(expect_message)


def test_assert_response_no_short_circuit(reporter: 'MockType') -> None:
    """Report code and body mismatches independently."""
    assert_response(reporter, record(404, 'Nope'), ResponseSpec(code=200, body='Yes'))

    assert [call.args[0] for call in reporter.report.call_args_list] == [
        'Got response code 404, expected 200',
        "Got response body 'Nope', expected 'Yes'",
    ]
    reporter.fatal.assert_not_called()


def test_assert_response_compares_raw_body(reporter: 'MockType') -> None:
    """Report a body which only matches after lossy decoding."""
    actual = ResponseRecorder()
    actual.write(b'\xff')

    assert_response(reporter, actual, ResponseSpec(body='\ufffd'))

    reporter.report.assert_called_once_with("Got response body '\ufffd', expected '\ufffd'")
