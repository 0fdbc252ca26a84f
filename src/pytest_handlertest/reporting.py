"""Reporting capability used by the assertion engine and the orchestrator.

The runner never depends on a concrete test framework: it talks to a
`Reporter` exposing three operations. `RecordingReporter` is the
implementation shipped with the library; it keeps a tree of test units
that the pytest integration and the command-line runner render.
"""

from os import linesep
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Self

UNIT_SEPARATOR = '/'
REPORT_INDENT = 4


class Reporter(Protocol):
    """Host test framework capability set."""

    def report(self, message: str) -> None:
        """Mark the current unit as failed and continue."""

    def fatal(self, message: str) -> None:
        """Mark the current unit as failed and abort the rest of its work."""

    def subtest(self, name: str, fn: 'Callable[[Self], None]') -> bool:
        """Run `fn` as an independently attributed unit; return whether it passed."""


class UnitAborted(Exception):  # noqa: N818
    """Raised by `RecordingReporter.fatal` to stop the current unit."""


class RecordingReporter:
    """Reporter recording failures as a tree of units.

    `report` records a failure and lets the unit continue. `fatal`
    records a failure and raises `UnitAborted`, which is absorbed by the
    enclosing `subtest` call or by `execute`. A failed sub-test marks
    its parent as failed without adding a failure of its own, so every
    failure is counted exactly once.

    Attributes:
        name: Unit name, `None` for the root unit.
        parent: Enclosing unit, `None` for the root unit.
        errors: Failure messages recorded directly on this unit.
        children: Sub-test units in registration order.
        entries: Messages and sub-test units interleaved in recording order.
        aborted: Whether the unit was stopped by `fatal`.
    """

    def __init__(self, name: str | None = None, *,
                 parent: 'RecordingReporter | None' = None) -> None:
        """Initialize a unit.

        Args:
            name: Unit name.
            parent: Enclosing unit.
        """
        self.name = name
        self.parent = parent

        self.errors: list[str] = []
        self.children: list[RecordingReporter] = []
        self.entries: list[str | RecordingReporter] = []
        self.aborted = False

    def __repr__(self) -> str:
        """String representation."""
        state = 'failed' if self.failed else 'passed'
        return f'<{type(self).__name__} {self.path or "<root>"!r} {state}>'

    @property
    def path(self) -> str:
        """Slash-separated names from the root down to this unit."""
        if self.parent is None:
            return self.name or ''

        if not self.parent.path:
            return self.name or ''

        return f'{self.parent.path}{UNIT_SEPARATOR}{self.name}'

    @property
    def failed(self) -> bool:
        """Whether this unit or any of its sub-tests failed."""
        return bool(self.errors) or any(child.failed for child in self.children)

    def report(self, message: str) -> None:
        """Record a failure and continue.

        Args:
            message: Failure description.
        """
        self.errors.append(message)
        self.entries.append(message)

    def fatal(self, message: str) -> None:
        """Record a failure and abort the current unit.

        Args:
            message: Failure description.

        Raises:
            UnitAborted: Always.
        """
        self.errors.append(message)
        self.entries.append(message)
        self.aborted = True

        raise UnitAborted(message)

    def subtest(self, name: str, fn: 'Callable[[RecordingReporter], None]') -> bool:
        """Run `fn` as a named sub-test.

        Args:
            name: Sub-test name.
            fn: Sub-test body receiving the sub-test unit.

        Returns:
            `True` if the sub-test passed.
        """
        child = type(self)(name, parent=self)
        self.children.append(child)
        self.entries.append(child)

        child.execute(fn)

        return not child.failed

    def execute(self, fn: 'Callable[[RecordingReporter], None]') -> bool:
        """Run `fn` against this unit, absorbing a `fatal` abort.

        Args:
            fn: Unit body.

        Returns:
            `True` if the unit passed.
        """
        try:
            fn(self)

        except UnitAborted:
            pass

        return not self.failed

    def failures(self) -> 'Iterator[tuple[str, str]]':
        """Iterate over `(unit path, message)` pairs in recording order."""
        for entry in self.entries:
            if isinstance(entry, RecordingReporter):
                yield from entry.failures()
            else:
                yield self.path, entry

    def format(self) -> str:
        """Render recorded failures as a readable report.

        Returns:
            One block per failure, headed by the unit path.
        """
        lines = []
        for path, message in self.failures():
            lines.append(f'{path or "<inline>"}:')
            lines.extend(
                f'{' ' * REPORT_INDENT}{line}'
                for line in message.splitlines()
            )

        return linesep.join(lines)
