"""Registration of example groups and examples."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar, overload

from .outcomes import RegistrationError
from .scope import Scope

F = TypeVar("F", bound=Callable[..., Any])

Check = Callable[..., Any]


@dataclass(frozen=True)
class Example:
    """A named check. ``context`` is the scope type built fresh for each run."""

    label: str
    check: Check
    context: type[Scope] | None = None


@dataclass
class ExampleGroup:
    """An ordered collection of examples sharing a label."""

    label: str | None
    examples: list[Example] = field(default_factory=list)

    def add(self, example: Example) -> Example:
        if any(existing.label == example.label for existing in self.examples):
            msg = f"duplicate example {example.label!r} in group {self.label!r}"
            raise RegistrationError(msg)
        self.examples.append(example)
        return example

    @overload
    def example(self, label: str, check: Check, *, context: type[Scope] | None = None) -> Example: ...

    @overload
    def example(self, label: str, *, context: type[Scope] | None = None) -> Callable[[F], F]: ...

    def example(
        self,
        label: str,
        check: Check | None = None,
        *,
        context: type[Scope] | None = None,
    ) -> Example | Callable[[F], F]:
        """Register an example, directly or as a decorator.

        With ``context``, the check receives a fresh instance of that scope::

            @group.example("starts at one", context=Counter)
            def _(ctx):
                must(ctx.count, equal_to(1))
        """
        _check_label(label)
        if context is not None and not (isinstance(context, type) and issubclass(context, Scope)):
            msg = f"context must be a Scope subclass, got {context!r}"
            raise RegistrationError(msg)
        if check is not None:
            return self.add(Example(label, check, context))

        def decorator(func: F) -> F:
            self.add(Example(label, func, context))
            return func

        return decorator

    in_ = example


def example_group(label: str, examples: Sequence[tuple[str, Check]]) -> ExampleGroup:
    """Build a group from ``(label, check)`` pairs, keeping their order."""
    _check_label(label)
    group = ExampleGroup(label)
    for example_label, check in examples:
        group.example(example_label, check)
    return group


class Specification:
    """A titled, ordered list of example groups.

    Usage::

        spec = Specification("MyClass")

        with spec.should("My awesome class") as group:
            group.example("do something", lambda: success)

    Runners collect every module-level ``Specification`` instance.
    """

    def __init__(self, title: str | None = None) -> None:
        self.title = title
        self.groups: list[ExampleGroup] = []
        self._ungrouped: ExampleGroup | None = None

    def add_group(self, group: ExampleGroup) -> ExampleGroup:
        if group.label is not None and any(g.label == group.label for g in self.groups):
            msg = f"duplicate example group {group.label!r}"
            raise RegistrationError(msg)
        self.groups.append(group)
        return group

    @contextmanager
    def should(self, label: str) -> Iterator[ExampleGroup]:
        """Open an example group; examples registered inside keep their order."""
        _check_label(label)
        group = ExampleGroup(label)
        yield group
        self.add_group(group)

    def example(
        self,
        label: str,
        check: Check | None = None,
        *,
        context: type[Scope] | None = None,
    ) -> Any:
        """Register an example outside any ``should`` block."""
        # Consecutive ungrouped examples share one group; a ``should`` block
        # in between starts a new one so ordering is preserved.
        if self._ungrouped is None or (self.groups and self.groups[-1] is not self._ungrouped):
            self._ungrouped = self.add_group(ExampleGroup(None))
        return self._ungrouped.example(label, check, context=context)

    in_ = example

    def __iter__(self) -> Iterator[ExampleGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return sum(len(group.examples) for group in self.groups)

    def __repr__(self) -> str:
        return f"<Specification {self.title!r} groups={len(self.groups)} examples={len(self)}>"


def _check_label(label: str) -> None:
    if not isinstance(label, str) or not label.strip():
        msg = "label must be a non-empty string"
        raise RegistrationError(msg)
