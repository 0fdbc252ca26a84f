"""Tests for the recording reporter."""

from pytest_handlertest.reporting import RecordingReporter


def test_report_continues() -> None:
    """Record failures without stopping the unit."""
    steps = []

    def body(unit: RecordingReporter) -> None:
        unit.report('first')
        steps.append(1)
        unit.report('second')
        steps.append(2)

    reporter = RecordingReporter()

    assert reporter.execute(body) is False
    assert steps == [1, 2]
    assert reporter.errors == ['first', 'second']
    assert reporter.aborted is False


def test_fatal_aborts_unit() -> None:
    """Stop the unit on a fatal failure."""
    steps = []

    def body(unit: RecordingReporter) -> None:
        unit.fatal('cannot continue')
        steps.append(1)

    reporter = RecordingReporter()

    assert reporter.execute(body) is False
    assert steps == []
    assert reporter.aborted is True
    assert reporter.errors == ['cannot continue']


def test_subtest_isolation() -> None:
    """Attribute failures to the sub-test that produced them."""
    reporter = RecordingReporter()

    passed = reporter.subtest('ok', lambda unit: None)
    failed = reporter.subtest('bad', lambda unit: unit.report('mismatch'))

    assert passed is True
    assert failed is False
    assert reporter.errors == []
    assert reporter.failed is True
    assert [child.name for child in reporter.children] == ['ok', 'bad']
    assert reporter.children[0].failed is False
    assert reporter.children[1].failed is True


def test_fatal_in_subtest_continues_parent() -> None:
    """Absorb a sub-test abort in the parent unit."""
    steps = []

    def body(unit: RecordingReporter) -> None:
        unit.subtest('fatal', lambda child: child.fatal('stop'))
        steps.append(1)

    reporter = RecordingReporter()
    reporter.execute(body)

    assert steps == [1]
    assert reporter.aborted is False
    assert reporter.children[0].aborted is True


def test_failures_and_format() -> None:
    """List failures with their unit paths."""
    reporter = RecordingReporter()
    reporter.report('inline mismatch')
    reporter.subtest('outer', lambda unit: unit.subtest('inner', lambda child: child.report('a\nb')))

    assert list(reporter.failures()) == [
        ('', 'inline mismatch'),
        ('outer/inner', 'a\nb'),
    ]

    report = reporter.format().splitlines()

    assert report == [
        '<inline>:',
        '    inline mismatch',
        'outer/inner:',
        '    a',
        '    b',
    ]


def test_passing_reporter() -> None:
    """Report nothing for a passing unit."""
    reporter = RecordingReporter('root')

    assert reporter.execute(lambda unit: None) is True
    assert reporter.failed is False
    assert reporter.format() == ''
    assert repr(reporter) == "<RecordingReporter 'root' passed>"


def test_failures_follow_recording_order() -> None:
    """Interleave inline and named failures in the order they happened."""
    reporter = RecordingReporter()
    reporter.subtest('ok', lambda unit: None)
    reporter.subtest('bad', lambda unit: unit.report('named mismatch'))
    reporter.report('inline mismatch')
    reporter.subtest('worse', lambda unit: unit.report('another mismatch'))

    assert list(reporter.failures()) == [
        ('bad', 'named mismatch'),
        ('', 'inline mismatch'),
        ('worse', 'another mismatch'),
    ]
    assert reporter.format().splitlines()[:3] == [
        'bad:',
        '    named mismatch',
        '<inline>:',
    ]
