"""Example outcomes and the exceptions that carry them out of a check."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

SUCCESS = "success"
FAILURE = "failure"
PENDING = "pending"


class ScopeSpecError(Exception):
    """Base class for usage errors raised by scopespec itself."""


class RegistrationError(ScopeSpecError, ValueError):
    """Raised when an example or group cannot be registered."""


class CollectionError(ScopeSpecError):
    """Raised when a specification file cannot be loaded."""


class Failed(AssertionError):
    """
    Example failure exception.

    Raised by ``fail()`` and by ``must()`` when a matcher does not match.
    ``expected`` and ``actual`` are kept so reports can show both sides.
    """

    def __init__(self, message: str = "", expected: Any = None, actual: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.expected = expected
        self.actual = actual


class Pending(Exception):
    """Marks the running example as intentionally incomplete."""

    def __init__(self, reason: str = "") -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class Result:
    """A value a check may return instead of raising."""

    status: str
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == FAILURE

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING


success = Result(SUCCESS)


def failure(reason: str = "") -> Result:
    return Result(FAILURE, reason)


def fail(msg: str = "") -> None:
    """Fail the running example with a message."""
    raise Failed(msg)


def pending(reason: str = "PENDING") -> None:
    """Mark the running example as pending.

    Unlike ``fail()``, this does not count against the run.
    """
    raise Pending(reason)
