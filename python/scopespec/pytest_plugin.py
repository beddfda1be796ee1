"""pytest integration: collect ``*_spec.py`` files as pytest items.

Enable it from a ``conftest.py``::

    pytest_plugins = ["scopespec.pytest_plugin"]

or on the command line with ``-p scopespec.pytest_plugin``. Every example
becomes one item named ``group::label``; pending examples are reported as
skipped.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from ._reporting import ExampleResult
from .core import SPEC_SUFFIX, execute_example, load_specifications
from .error_formatter import ErrorFormatter
from .outcomes import FAILURE, PENDING, CollectionError
from .specification import Example


class SpecExampleFailed(Exception):
    """Carries a failed :class:`ExampleResult` out of ``runtest``."""

    def __init__(self, result: ExampleResult) -> None:
        super().__init__(result.message)
        self.result = result


def pytest_collect_file(file_path: Path, parent: pytest.Collector) -> pytest.Collector | None:
    if file_path.name.endswith(SPEC_SUFFIX):
        return SpecFile.from_parent(parent, path=file_path)
    return None


class SpecFile(pytest.File):
    def collect(self) -> Iterator[pytest.Item]:
        try:
            specs = load_specifications(self.path)
        except CollectionError as exc:
            raise self.CollectError(str(exc)) from exc
        for spec in specs:
            for group in spec.groups:
                for example in group.examples:
                    name = example.label if group.label is None else f"{group.label}::{example.label}"
                    yield SpecItem.from_parent(self, name=name, group=group.label, example=example)


class SpecItem(pytest.Item):
    def __init__(self, *, group: str | None, example: Example, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.group = group
        self.example = example

    def runtest(self) -> None:
        result = execute_example(self.example, group=self.group, path=str(self.path))
        if result.status == PENDING:
            pytest.skip(result.message or "PENDING")
        if result.status == FAILURE:
            raise SpecExampleFailed(result)

    def repr_failure(self, excinfo: pytest.ExceptionInfo[BaseException], style: Any = None) -> Any:
        if isinstance(excinfo.value, SpecExampleFailed):
            return ErrorFormatter(use_colors=False).format_failure(excinfo.value.result)
        return super().repr_failure(excinfo, style=style)

    def reportinfo(self) -> tuple[Path, int | None, str]:
        return self.path, None, self.name
