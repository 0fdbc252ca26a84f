"""YAML suite loader.

This module reads suite definitions from YAML and validates them into
`Suite` models. Any failure to read, parse, or validate a definition is
raised as `SuiteLoadError`, which callers treat as fatal for the suite.
"""

from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING
from warnings import warn

from pydantic import ValidationError
from yaml import SafeLoader, load
from yaml.error import MarkedYAMLError, YAMLError

from pytest_handlertest.errors import ErrorContext, SuiteLoadError, SuiteWarning
from pytest_handlertest.schema import Suite

if TYPE_CHECKING:
    from io import TextIOBase

if TYPE_CHECKING:
    from yaml import BaseLoader


class SuiteLoader:
    """Loader turning YAML suite definitions into validated suites.

    Attributes:
        loader: YAML loader class used to parse documents.
        strict_mode: If True, suite issues raise `SuiteLoadError`.
            If False, they are emitted as `SuiteWarning` and loading continues.
    """

    def __init__(self, loader: type['BaseLoader'] = SafeLoader, *,
                 strict: bool = False) -> None:
        """Initialize the loader.

        Args:
            loader: YAML loader class.
            strict: Whether suite issues are errors instead of warnings.
        """
        self.loader = loader
        self.strict_mode = strict

    def load(self, content: 'TextIOBase | str', *,
             filename: str | None = None) -> Suite:
        """Parse and validate a suite definition.

        An empty document is an empty suite.

        Args:
            content: YAML content as a string or a text stream.
            filename: Name of the source, used in error messages.

        Returns:
            The validated suite.

        Raises:
            SuiteLoadError: If the content cannot be read, is not valid
                YAML, or does not match the suite schema.
        """
        try:
            document = load(content, Loader=self.loader)  # noqa: S506

        except MarkedYAMLError as base:
            raise SuiteLoadError.from_yaml_error(base, filename=filename) from base

        except YAMLError as base:
            raise SuiteLoadError(
                f'Invalid YAML: {base}',
                context=ErrorContext(filename=filename),
            ) from base

        except (OSError, UnicodeDecodeError) as base:
            raise SuiteLoadError(
                f'Cannot read suite: {base}',
                context=ErrorContext(filename=filename),
            ) from base

        if document is None:
            document = []

        try:
            suite = Suite.model_validate(document)

        except ValidationError as base:
            if isinstance(document, list):
                document = {'cases': document}
            raise SuiteLoadError.from_pydantic_error(
                base,
                data=document,
                filename=filename,
            ) from base

        self.check_names(suite, filename=filename)

        return suite

    def load_file(self, path: str | Path) -> Suite:
        """Read, parse, and validate a suite file.

        Args:
            path: Path to the suite file.

        Returns:
            The validated suite.

        Raises:
            SuiteLoadError: If the file cannot be opened or loaded.
        """
        path = Path(path)

        try:
            with path.open('rt', encoding='utf-8') as content:
                return self.load(content, filename=f'{path}')

        except OSError as base:
            raise SuiteLoadError(
                f'Cannot open suite: {base}',
                context=ErrorContext(filename=f'{path}'),
            ) from base

    def check_names(self, suite: Suite, *, filename: str | None = None) -> None:
        """Report cases sharing one name.

        Args:
            suite: Validated suite.
            filename: Name of the source, used in messages.

        Raises:
            SuiteLoadError: On duplicate names in strict mode.
        """
        counter = Counter(case.name for case in suite.cases if case.name)

        for name, count in counter.items():
            if count < 2:  # noqa: PLR2004
                continue

            message = f'Case name {name!r} is used by {count} cases'
            if self.strict_mode:
                raise SuiteLoadError(message, context=ErrorContext(filename=filename))

            warn(message, category=SuiteWarning, stacklevel=2)
