"""Run configuration assembled from command line arguments."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class RunConfig:
    paths: tuple[str, ...] = (".",)
    pattern: str | None = None
    verbose: bool = False
    ascii: bool = False
    color: bool = True
    watch: bool = False
    log_level: int = logging.WARNING

    @classmethod
    def from_args(cls, args: argparse.Namespace, environ: Mapping[str, str] | None = None) -> RunConfig:
        """Build a config from parsed CLI arguments.

        A non-empty ``NO_COLOR`` environment variable disables colors like
        ``--no-color`` does.
        """
        env = os.environ if environ is None else environ
        color = args.color and not env.get("NO_COLOR")
        return cls(
            paths=tuple(args.paths),
            pattern=args.pattern,
            verbose=args.verbose,
            ascii=args.ascii,
            color=color,
            watch=args.watch,
            log_level=parse_log_level(args.log_level),
        )


def parse_log_level(value: str | int) -> int:
    """Accept ``debug``/``INFO``/``20`` style levels."""
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        msg = f"unknown log level: {value!r}"
        raise ValueError(msg)
    return level
