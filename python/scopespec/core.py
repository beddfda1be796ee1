"""Collection and sequential execution of specifications."""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
import time
import traceback
from collections.abc import Iterable, Sequence
from contextlib import ExitStack
from pathlib import Path

from ._reporting import CollectionFailure, ExampleResult, RunReport
from .matchers import MatchResult
from .outcomes import FAILURE, PENDING, SUCCESS, CollectionError, Failed, Pending, Result
from .scope import fixture_scope
from .specification import Example, ExampleGroup, Specification

logger = logging.getLogger(__name__)

SPEC_SUFFIX = "_spec.py"


def execute_example(
    example: Example,
    group: str | None = None,
    path: str | None = None,
) -> ExampleResult:
    """Run one example and map whatever happened to an :class:`ExampleResult`.

    Never raises for anything the check does; ``KeyboardInterrupt`` and
    ``SystemExit`` still propagate.
    """
    cleanup_errors: list[BaseException] = []
    outcome: dict[str, object] = {"status": SUCCESS}
    start = time.perf_counter()
    try:
        with ExitStack() as stack:
            args = []
            if example.context is not None:
                scope, cleanup_errors = stack.enter_context(fixture_scope(example.context))
                args.append(scope)
            value = _call_check(example, args)
            outcome = _interpret(value)
    except Failed as exc:
        outcome = {
            "status": FAILURE,
            "message": exc.message or "failed",
            "expected": exc.expected,
            "actual": exc.actual,
            "traceback": traceback.format_exc(),
        }
    except Pending as exc:
        outcome = {"status": PENDING, "message": exc.reason or "PENDING"}
    except Exception as exc:
        outcome = {
            "status": FAILURE,
            "message": f"{type(exc).__name__}: {exc}",
            "traceback": traceback.format_exc(),
        }
    duration = time.perf_counter() - start

    result = ExampleResult(
        group=group,
        label=example.label,
        duration=duration,
        cleanup_error=repr(cleanup_errors[0]) if cleanup_errors else None,
        path=path,
        **outcome,  # type: ignore[arg-type]
    )
    logger.debug("%s -> %s (%.3fs)", result.name, result.status, duration)
    return result


def _call_check(example: Example, args: list[object]) -> object:
    check = example.check
    if args:
        try:
            accepts_scope = bool(inspect.signature(check).parameters)
        except (TypeError, ValueError):
            accepts_scope = True
        if not accepts_scope:
            return check()
    return check(*args)


def _interpret(value: object) -> dict[str, object]:
    if value is None or value is True:
        return {"status": SUCCESS}
    if isinstance(value, Result):
        if value.status not in (SUCCESS, FAILURE, PENDING):
            return {"status": FAILURE, "message": f"unknown result status {value.status!r}"}
        return {"status": value.status, "message": value.message or None}
    if isinstance(value, MatchResult):
        if value.ok:
            return {"status": SUCCESS}
        return {
            "status": FAILURE,
            "message": value.message,
            "expected": value.expected,
            "actual": value.actual,
        }
    if value is False:
        return {"status": FAILURE, "message": "the example returned False"}
    msg = f"an example must return None, a bool, a Result or a MatchResult, got {value!r}"
    return {"status": FAILURE, "message": msg}


def _matches(pattern: str | None, group: ExampleGroup, example: Example) -> bool:
    if not pattern:
        return True
    haystack = f"{group.label or ''} {example.label}".casefold()
    return pattern.casefold() in haystack


def run_specification(
    spec: Specification,
    pattern: str | None = None,
    path: str | None = None,
) -> RunReport:
    """Execute every example of ``spec`` in registration order."""
    start = time.perf_counter()
    results: list[ExampleResult] = []
    for group in spec.groups:
        for example in group.examples:
            if not _matches(pattern, group, example):
                continue
            results.append(execute_example(example, group=group.label, path=path))
    return RunReport(results=tuple(results), duration=time.perf_counter() - start)


def discover(paths: Iterable[str | Path]) -> list[Path]:
    """Expand files and directories into the list of spec files to load."""
    found: list[Path] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            found.extend(sorted(p for p in path.rglob(f"*{SPEC_SUFFIX}") if p.is_file()))
        elif path.is_file():
            found.append(path)
        else:
            msg = f"path does not exist: {path}"
            raise CollectionError(msg)
    return found


def load_specifications(path: str | Path) -> list[Specification]:
    """Import ``path`` as a module and return its ``Specification`` objects."""
    path = Path(path).resolve()
    module_name = f"_scopespec_{path.stem}_{abs(hash(str(path)))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"cannot import {path}"
        raise CollectionError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    # Let the spec file import siblings such as the class under test.
    parent = str(path.parent)
    added = parent not in sys.path
    if added:
        sys.path.insert(0, parent)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"{type(exc).__name__}: {exc}"
        raise CollectionError(msg) from exc
    finally:
        if added:
            sys.path.remove(parent)
    specs = [value for value in vars(module).values() if isinstance(value, Specification)]
    logger.debug("collected %d specification(s) from %s", len(specs), path)
    return specs


def run(paths: Sequence[str | Path] = (".",), pattern: str | None = None) -> RunReport:
    """Collect spec files under ``paths`` and execute them in order."""
    report = RunReport()
    for path in discover(paths):
        try:
            specs = load_specifications(path)
        except CollectionError as exc:
            logger.warning("could not collect %s: %s", path, exc)
            report = report.merge(RunReport(collection_errors=(CollectionFailure(str(path), str(exc)),)))
            continue
        for spec in specs:
            report = report.merge(run_specification(spec, pattern=pattern, path=str(path)))
    return report
