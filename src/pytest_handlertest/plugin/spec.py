"""Pytest collector for YAML suite files.

Each collected file is loaded with the shared `SuiteLoader` and turned
into a single `SuiteItem`. Cases keep their order inside the item: named
cases are reported as sub-tests within the item report, unnamed cases
are attributed to the item itself.
"""

from typing import TYPE_CHECKING

import pytest

from .case import SuiteItem

if TYPE_CHECKING:
    from collections.abc import Iterable


class SuiteFile(pytest.File):
    """Pytest file collector for suite definitions."""

    __test__ = False

    def collect(self) -> 'Iterable[SuiteItem]':
        """Load the suite file and emit its test item.

        Returns:
            Iterable with one `SuiteItem`.

        Raises:
            SuiteLoadError: If the file cannot be read or validated.
                Pytest reports it as a collection error of the file.
        """
        suite = self.config.handlertest_loader.load_file(self.path)  # type: ignore[attr-defined]

        yield SuiteItem.from_parent(
            self,
            name=self.path.name.split('.', 1)[0],
            suite=suite,
            settings=self.config.handlertest_settings,  # type: ignore[attr-defined]
        )
