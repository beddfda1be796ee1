"""Fixture scopes: fresh state for every example.

A scope is a plain class whose field declarations are copied onto every new
instance, so an example can mutate its scope freely without affecting any
other example::

    class RichContext(Scope):
        count = 1
        months = {1: "January", 2: "February"}

    class ContextWithHello(Context):
        def setup(self) -> None:
            self.hello_message = self.my_class.hello

Subclassing :class:`After` adds a cleanup hook that runs once after each
example, whether it passed or not.
"""

from __future__ import annotations

import copy
import inspect
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="Scope")


class Scope:
    """Holder of example-local state, instantiated once per example."""

    def __init__(self) -> None:
        for name, value in _declared_fields(type(self)).items():
            setattr(self, name, copy.deepcopy(value))
        self.setup()

    def setup(self) -> None:
        """Derive additional fields after the declared ones are in place."""


class After(Scope):
    """A scope with a cleanup hook invoked after every example using it."""

    def after(self) -> None:
        """Release whatever the example acquired (rows, files, ...)."""


def _declared_fields(scope_type: type) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    # Base classes first so subclasses can override a field.
    for klass in reversed(scope_type.__mro__):
        if klass is object or klass is Scope or klass is After:
            continue
        for name, value in vars(klass).items():
            if name.startswith("_"):
                continue
            if inspect.isroutine(value) or isinstance(value, (type, property, classmethod, staticmethod)):
                continue
            if hasattr(value, "__get__"):
                continue
            fields[name] = value
    return fields


@contextmanager
def fixture_scope(scope_type: type[S]) -> Iterator[tuple[S, list[BaseException]]]:
    """Build a fresh ``scope_type`` and guarantee its cleanup on exit.

    Yields the instance together with a list that receives the cleanup error,
    if any. Cleanup errors are logged and never propagate, so they cannot
    change the outcome of the example.
    """
    instance = scope_type()
    cleanup_errors: list[BaseException] = []
    logger.debug("created scope %s", scope_type.__name__)
    try:
        yield instance, cleanup_errors
    finally:
        if isinstance(instance, After):
            try:
                instance.after()
            except Exception as exc:
                logger.warning("cleanup of %s failed: %r", scope_type.__name__, exc)
                cleanup_errors.append(exc)
