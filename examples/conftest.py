"""Run the example specs with plain ``pytest examples``."""

from scopespec.pytest_plugin import pytest_collect_file  # noqa: F401
