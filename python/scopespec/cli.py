"""Command line interface helpers."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from ._reporting import ExampleResult, RunReport
from .config import RunConfig
from .core import run
from .error_formatter import ErrorFormatter
from .outcomes import CollectionError


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"

    @staticmethod
    def disable():
        """Disable all colors."""
        Colors.GREEN = ""
        Colors.RED = ""
        Colors.YELLOW = ""
        Colors.CYAN = ""
        Colors.BOLD = ""
        Colors.DIM = ""
        Colors.RESET = ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopespec",
        description="Run behaviour-driven specifications written with scopespec.",
    )
    _ = parser.add_argument(
        "paths",
        nargs="*",
        default=(".",),
        help="Spec files or directories to collect *_spec.py files from.",
    )
    _ = parser.add_argument(
        "-k",
        "--pattern",
        help="Substring to filter examples by group or label (case insensitive).",
    )
    _ = parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="List every example under its group.",
    )
    _ = parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII characters instead of Unicode symbols for output.",
    )
    _ = parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Disable colored output.",
    )
    _ = parser.add_argument(
        "--watch",
        action="store_true",
        help="Re-run affected specs whenever a watched file changes.",
    )
    _ = parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for scopespec's own diagnostics (default: WARNING).",
    )
    _ = parser.set_defaults(color=True)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = RunConfig.from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    if not config.color:
        Colors.disable()

    if config.watch:
        from ._watch import watch_mode

        return watch_mode(config)

    try:
        report = run(paths=config.paths, pattern=config.pattern)
    except CollectionError as exc:
        parser.error(str(exc))
    print_report(report, verbose=config.verbose, ascii_mode=config.ascii, color=config.color)
    return 0 if report.failed == 0 else 1


def _symbols(ascii_mode: bool, verbose: bool) -> dict[str, str]:
    if ascii_mode:
        if verbose:
            return {"success": "PASS", "failure": "FAIL", "pending": "PEND"}
        return {"success": ".", "failure": "F", "pending": "*"}
    return {
        "success": f"{Colors.GREEN}✓{Colors.RESET}",
        "failure": f"{Colors.RED}✗{Colors.RESET}",
        "pending": f"{Colors.YELLOW}⊘{Colors.RESET}",
    }


def print_report(
    report: RunReport,
    verbose: bool = False,
    ascii_mode: bool = False,
    color: bool = True,
) -> None:
    """Print a report followed by failure details and a summary line.

    Args:
        report: The run report
        verbose: If True, list every example under its group
        ascii_mode: If True, use ASCII characters instead of Unicode symbols
        color: Passed on to the failure formatter
    """
    if verbose:
        _print_verbose_report(report, ascii_mode)
    else:
        symbols = _symbols(ascii_mode, verbose=False)
        print("".join(symbols.get(result.status, "?") for result in report.results))

    _print_failures(report, ErrorFormatter(use_colors=color))

    passed_str = f"{Colors.GREEN}{report.passed} passed{Colors.RESET}" if report.passed > 0 else f"{report.passed} passed"
    failed_str = f"{Colors.RED}{report.failed} failed{Colors.RESET}" if report.failed > 0 else f"{report.failed} failed"
    pending_str = f"{Colors.YELLOW}{report.pending} pending{Colors.RESET}" if report.pending > 0 else f"{report.pending} pending"

    summary = (
        f"\n{Colors.BOLD}{report.total} examples:{Colors.RESET} "
        f"{passed_str}, "
        f"{failed_str}, "
        f"{pending_str} in {Colors.DIM}{report.duration:.3f}s{Colors.RESET}"
    )
    print(summary)


def _print_failures(report: RunReport, formatter: ErrorFormatter) -> None:
    failures = [r for r in report.results if r.status == "failure"]
    if not failures and not report.collection_errors:
        return
    print(f"\n{Colors.RED}{'=' * 70}")
    print(f"{Colors.BOLD}FAILURES{Colors.RESET}")
    print(f"{Colors.RED}{'=' * 70}{Colors.RESET}")
    for error in report.collection_errors:
        print(f"\n{Colors.BOLD}{error.path}{Colors.RESET} could not be collected")
        print(f"  {error.message}")
    for result in failures:
        print(formatter.format_failure(result))


def _print_verbose_report(report: RunReport, ascii_mode: bool) -> None:
    """Print each group label followed by its indented examples and timings."""
    symbols = _symbols(ascii_mode, verbose=True)
    for group, results in report.iter_groups():
        if group is not None:
            print(f"\n{Colors.BOLD}{group}{Colors.RESET}")
            indent = "  "
        else:
            print()
            indent = ""
        for result in results:
            _print_verbose_line(result, symbols.get(result.status, "?"), indent)


def _print_verbose_line(result: ExampleResult, symbol: str, indent: str) -> None:
    duration_str = f"{Colors.DIM}{result.duration * 1000:.0f}ms{Colors.RESET}"
    print(f"{indent}{symbol} {result.label} {duration_str}")
    if result.status == "pending" and result.message:
        print(f"{indent}  {Colors.YELLOW}{result.message}{Colors.RESET}")
