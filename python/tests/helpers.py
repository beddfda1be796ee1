"""Shared helpers for the scopespec test-suite."""

from __future__ import annotations

import textwrap
from pathlib import Path

from scopespec import Scope

EXAMPLES_DIR = Path(__file__).resolve().parents[2] / "examples"


def write_spec(directory: Path, name: str, source: str) -> Path:
    """Write a dedented spec module and return its path."""
    target = directory / name
    target.write_text(textwrap.dedent(source), encoding="utf-8")
    return target


class Counter(Scope):
    count = 0
    items: list[int] = []
    labels = {"a": 1}
