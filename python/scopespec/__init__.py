"""Public Python API for scopespec."""

from __future__ import annotations

from . import matchers
from ._reporting import ExampleResult, RunReport
from .cli import main
from .core import execute_example, run, run_specification
from .matchers import (
    MatchResult,
    Matcher,
    be_between,
    be_empty,
    be_equal_to,
    be_false,
    be_ge,
    be_greater_than,
    be_less_than,
    be_none,
    be_some,
    be_true,
    contain,
    end_with,
    equal_to,
    have_key,
    have_length,
    have_pair,
    have_size,
    must,
    must_equal,
    must_not_equal,
    not_,
    start_with,
    throw_a,
    throw_an,
    typed_equal_to,
)
from .outcomes import (
    CollectionError,
    Failed,
    Pending,
    RegistrationError,
    Result,
    ScopeSpecError,
    fail,
    failure,
    pending,
    success,
)
from .scope import After, Scope, fixture_scope
from .specification import Example, ExampleGroup, Specification, example_group

__all__ = [
    "After",
    "CollectionError",
    "Example",
    "ExampleGroup",
    "ExampleResult",
    "Failed",
    "MatchResult",
    "Matcher",
    "Pending",
    "RegistrationError",
    "Result",
    "RunReport",
    "Scope",
    "ScopeSpecError",
    "Specification",
    "be_between",
    "be_empty",
    "be_equal_to",
    "be_false",
    "be_ge",
    "be_greater_than",
    "be_less_than",
    "be_none",
    "be_some",
    "be_true",
    "contain",
    "end_with",
    "equal_to",
    "example_group",
    "execute_example",
    "fail",
    "failure",
    "fixture_scope",
    "have_key",
    "have_length",
    "have_pair",
    "have_size",
    "main",
    "matchers",
    "must",
    "must_equal",
    "must_not_equal",
    "not_",
    "pending",
    "run",
    "run_specification",
    "start_with",
    "success",
    "throw_a",
    "throw_an",
    "typed_equal_to",
]
