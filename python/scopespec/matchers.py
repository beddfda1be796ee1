"""Matchers: pure predicates over an actual value.

Every matcher returns a :class:`MatchResult` and never raises for a mismatch.
``must()`` turns a failed match into :class:`~scopespec.outcomes.Failed`.

Examples:
    must(count, equal_to(1))
    must(address, end_with("Israel"))
    must(address, equal_to("40 hanamal st., tel aviv, ISRAEL").ignore_case())
    must(months, not_(have_key(12)))
    must(explode, throw_an(Exception))
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .outcomes import Failed


class _NotSet:
    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return "<NOTSET>"


_NOT_SET = _NotSet()


@dataclass(frozen=True)
class MatchResult:
    """Verdict of a matcher.

    ``message`` always describes the mismatch, even when ``ok`` is True, so a
    negated matcher can report it.
    """

    ok: bool
    message: str
    negated_message: str
    expected: Any = None
    actual: Any = None
    applicable: bool = True

    def __bool__(self) -> bool:
        return self.ok

    def negate(self) -> MatchResult:
        # A matcher that could not be applied fails both ways.
        if not self.applicable:
            return self
        return MatchResult(
            ok=not self.ok,
            message=self.negated_message,
            negated_message=self.message,
            expected=self.expected,
            actual=self.actual,
        )


class Matcher:
    """Base matcher. Subclasses implement ``match``."""

    description = "match"

    def match(self, actual: Any) -> MatchResult:
        raise NotImplementedError

    def __call__(self, actual: Any) -> MatchResult:
        return self.match(actual)

    def __invert__(self) -> Matcher:
        return not_(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description}>"


class _Predicate(Matcher):
    """Matcher built from a predicate and two message templates."""

    def __init__(
        self,
        test: Callable[[Any], bool],
        description: str,
        expected: Any = None,
    ) -> None:
        self.test = test
        self.description = description
        self.expected = expected

    def match(self, actual: Any) -> MatchResult:
        try:
            ok = bool(self.test(actual))
        except (TypeError, AttributeError):
            message = f"cannot check whether {actual!r} can {self.description}"
            return MatchResult(
                ok=False,
                message=message,
                negated_message=message,
                expected=self.expected,
                actual=actual,
                applicable=False,
            )
        return MatchResult(
            ok=ok,
            message=f"{actual!r} does not {self.description}",
            negated_message=f"{actual!r} does {self.description}",
            expected=self.expected,
            actual=actual,
        )


class _Not(Matcher):
    def __init__(self, matcher: Matcher) -> None:
        self.matcher = matcher
        self.description = f"not {matcher.description}"

    def match(self, actual: Any) -> MatchResult:
        return self.matcher.match(actual).negate()

    def __invert__(self) -> Matcher:
        return self.matcher


class _EqualTo(Matcher):
    def __init__(self, expected: Any, *, case_insensitive: bool = False) -> None:
        self.expected = expected
        self.case_insensitive = case_insensitive
        suffix = " (ignoring case)" if case_insensitive else ""
        self.description = f"equal {expected!r}{suffix}"

    def ignore_case(self) -> _EqualTo:
        return _EqualTo(self.expected, case_insensitive=True)

    def match(self, actual: Any) -> MatchResult:
        if self.case_insensitive and isinstance(actual, str) and isinstance(self.expected, str):
            ok = actual.casefold() == self.expected.casefold()
        else:
            ok = actual == self.expected
        return MatchResult(
            ok=ok,
            message=f"{actual!r} != {self.expected!r}",
            negated_message=f"{actual!r} == {self.expected!r}",
            expected=self.expected,
            actual=actual,
        )


class _Throw(Matcher):
    def __init__(self, exc_type: type[BaseException], match: str | None = None) -> None:
        self.exc_type = exc_type
        self.pattern = match
        self.description = f"throw {exc_type.__name__}"
        if match is not None:
            self.description += f" matching {match!r}"

    def match(self, actual: Any) -> MatchResult:
        if not callable(actual):
            return MatchResult(
                ok=False,
                message=f"{actual!r} is not callable",
                negated_message=f"{actual!r} is not callable",
                expected=self.exc_type,
                actual=actual,
                applicable=False,
            )
        name = getattr(actual, "__name__", repr(actual))
        try:
            actual()
        except self.exc_type as exc:
            if self.pattern is not None and not re.search(self.pattern, str(exc)):
                return MatchResult(
                    ok=False,
                    message=f"{name}() raised {exc!r}, which does not match {self.pattern!r}",
                    negated_message=f"{name}() raised {exc!r}",
                    expected=self.exc_type,
                    actual=exc,
                )
            return MatchResult(
                ok=True,
                message=f"{name}() raised {exc!r}",
                negated_message=f"{name}() raised {exc!r}",
                expected=self.exc_type,
                actual=exc,
            )
        except Exception as exc:
            return MatchResult(
                ok=False,
                message=f"expected {self.exc_type.__name__} but {name}() raised {exc!r}",
                negated_message=f"{name}() raised {exc!r}",
                expected=self.exc_type,
                actual=exc,
            )
        return MatchResult(
            ok=False,
            message=f"expected {self.exc_type.__name__} but {name}() raised nothing",
            negated_message=f"{name}() raised nothing",
            expected=self.exc_type,
            actual=None,
        )


def not_(matcher: Matcher) -> Matcher:
    """Negate a matcher."""
    return _Not(matcher)


# equality


def equal_to(expected: Any) -> _EqualTo:
    return _EqualTo(expected)


be_equal_to = equal_to


def typed_equal_to(expected: Any) -> Matcher:
    """Equality that also requires the exact same type (``1 != 1.0`` here)."""
    return _Predicate(
        lambda actual: type(actual) is type(expected) and actual == expected,
        f"equal {expected!r} of type {type(expected).__name__}",
        expected,
    )


def be_true() -> Matcher:
    return _Predicate(lambda actual: actual is True, "be True", True)


def be_false() -> Matcher:
    return _Predicate(lambda actual: actual is False, "be False", False)


# strings


def start_with(prefix: str) -> Matcher:
    return _Predicate(lambda actual: actual.startswith(prefix), f"start with {prefix!r}", prefix)


def end_with(suffix: str) -> Matcher:
    return _Predicate(lambda actual: actual.endswith(suffix), f"end with {suffix!r}", suffix)


def contain(item: Any) -> Matcher:
    """Substring for strings, membership for any other container."""
    return _Predicate(lambda actual: item in actual, f"contain {item!r}", item)


def have_length(length: int) -> Matcher:
    def test(actual: Any) -> bool:
        return len(actual) == length

    return _Predicate(test, f"have length {length}", length)


have_size = have_length


# numbers


def be_ge(bound: Any) -> Matcher:
    return _Predicate(lambda actual: actual >= bound, f"be >= {bound!r}", bound)


def be_greater_than(bound: Any) -> Matcher:
    return _Predicate(lambda actual: actual > bound, f"be > {bound!r}", bound)


def be_less_than(bound: Any) -> Matcher:
    return _Predicate(lambda actual: actual < bound, f"be < {bound!r}", bound)


def be_between(low: Any, high: Any) -> Matcher:
    """Inclusive on both ends."""
    return _Predicate(lambda actual: low <= actual <= high, f"be between {low!r} and {high!r}", (low, high))


# optional values


def be_some(value: Any = _NOT_SET) -> Matcher:
    if value is _NOT_SET:
        return _Predicate(lambda actual: actual is not None, "be present", None)
    return _Predicate(
        lambda actual: actual is not None and actual == value,
        f"be present with value {value!r}",
        value,
    )


def be_none() -> Matcher:
    return _Predicate(lambda actual: actual is None, "be None", None)


# collections and mappings


def be_empty() -> Matcher:
    return _Predicate(lambda actual: len(actual) == 0, "be empty", 0)


def _mapping(actual: Any) -> Mapping:
    if not isinstance(actual, Mapping):
        msg = f"expected a mapping, got {type(actual).__name__}"
        raise TypeError(msg)
    return actual


def have_key(key: Any) -> Matcher:
    return _Predicate(
        lambda actual: key in _mapping(actual),
        f"have key {key!r}",
        key,
    )


def have_pair(pair: tuple[Any, Any]) -> Matcher:
    key, value = pair

    def test(actual: Any) -> bool:
        mapping = _mapping(actual)
        return key in mapping and mapping[key] == value

    return _Predicate(test, f"have pair {key!r} -> {value!r}", pair)


# exceptions


def throw_a(exc_type: type[BaseException] = Exception, match: str | None = None) -> Matcher:
    """Invoke the actual value (a callable) and expect ``exc_type``."""
    return _Throw(exc_type, match)


throw_an = throw_a


def must(actual: Any, matcher: Matcher) -> MatchResult:
    """Apply ``matcher`` to ``actual`` and raise ``Failed`` on mismatch."""
    result = matcher(actual)
    if not result.ok:
        raise Failed(result.message, expected=result.expected, actual=result.actual)
    return result


def must_equal(actual: Any, expected: Any) -> MatchResult:
    return must(actual, equal_to(expected))


def must_not_equal(actual: Any, expected: Any) -> MatchResult:
    return must(actual, not_(equal_to(expected)))
