"""Result and report containers returned by the runner."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .outcomes import FAILURE, PENDING, SUCCESS


@dataclass(frozen=True)
class ExampleResult:
    """Outcome of a single example."""

    group: str | None
    label: str
    status: str
    duration: float = 0.0
    message: str | None = None
    expected: Any = None
    actual: Any = None
    traceback: str | None = None
    cleanup_error: str | None = None
    path: str | None = None

    @property
    def name(self) -> str:
        if self.group is None:
            return self.label
        return f"{self.group}::{self.label}"

    @property
    def passed(self) -> bool:
        return self.status == SUCCESS


@dataclass(frozen=True)
class CollectionFailure:
    """A spec file that could not be imported."""

    path: str
    message: str


@dataclass(frozen=True)
class RunReport:
    results: tuple[ExampleResult, ...] = ()
    duration: float = 0.0
    collection_errors: tuple[CollectionFailure, ...] = field(default=())

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.status == SUCCESS)

    @property
    def failed(self) -> int:
        # Unloadable spec files count as failures so the run exits non-zero.
        return sum(1 for r in self.results if r.status == FAILURE) + len(self.collection_errors)

    @property
    def pending(self) -> int:
        return sum(1 for r in self.results if r.status == PENDING)

    def iter_groups(self) -> Iterator[tuple[str | None, list[ExampleResult]]]:
        """Yield ``(group, results)`` for each consecutive run of one group.

        Ungrouped examples on either side of a ``should`` block stay apart,
        so the sequence follows the order of the file.
        """
        key: tuple[str | None, str | None] | None = None
        bucket: list[ExampleResult] = []
        for result in self.results:
            current = (result.path, result.group)
            if bucket and current != key:
                yield key[1], bucket  # type: ignore[index]
                bucket = []
            key = current
            bucket.append(result)
        if bucket:
            yield key[1], bucket  # type: ignore[index]

    def merge(self, other: RunReport) -> RunReport:
        return RunReport(
            results=self.results + other.results,
            duration=self.duration + other.duration,
            collection_errors=self.collection_errors + other.collection_errors,
        )
