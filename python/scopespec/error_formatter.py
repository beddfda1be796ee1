"""Readable rendering of failed examples."""

from __future__ import annotations

import re

from ._reporting import ExampleResult

_FRAME_RE = re.compile(r'File "([^"]+)", line (\d+), in (.+)')


class Colors:
    """ANSI color codes for terminal output."""
    reset = "\033[0m"
    bold = "\033[1m"
    dim = "\033[2m"
    red = "\033[91m"
    green = "\033[92m"
    yellow = "\033[93m"
    cyan = "\033[96m"


class ErrorFormatter:
    """Formats example failures in a user-friendly way."""

    def __init__(self, use_colors: bool = True) -> None:
        self.use_colors = use_colors

    def format_failure(self, result: ExampleResult) -> str:
        """
        Format a failed example.

        Shows the failure message prominently, then expected vs actual when a
        matcher produced them, then the user frames of the traceback.
        """
        lines = []

        if result.path:
            header = f"{self._bold(result.name)} {self._dim(f'({result.path})')}"
        else:
            header = self._bold(result.name)
        lines.append(f"\n{header}")
        lines.append(self._red("─" * 70))
        lines.append(f"{self._red('✗')} {self._bold(result.message or 'failed')}")

        if result.expected is not None or result.actual is not None:
            lines.append(self._format_comparison(result))

        frames = self.parse_frames(result.traceback or "")
        if frames:
            lines.append(self._format_stack_trace(frames))

        if result.cleanup_error:
            lines.append(f"\n{self._yellow('cleanup error:')} {result.cleanup_error}")

        return "\n".join(lines)

    def parse_frames(self, text: str) -> list[dict]:
        """Extract ``file``, ``line``, ``function`` and ``code`` per frame.

        Frames from the standard library and from scopespec itself are dropped.
        """
        frames = []
        lines = text.strip().split("\n")
        for index, line in enumerate(lines):
            match = _FRAME_RE.search(line)
            if not match:
                continue
            code = None
            if index + 1 < len(lines):
                candidate = lines[index + 1].strip()
                if candidate and not candidate.startswith(("File ", "^", "~")):
                    code = candidate
            frame = {
                "file": match.group(1),
                "line": int(match.group(2)),
                "function": match.group(3),
                "code": code,
            }
            if not self._is_internal_frame(frame["file"]):
                frames.append(frame)
        return frames

    def _is_internal_frame(self, file_path: str) -> bool:
        """Check if a stack frame is from internal Python or scopespec code."""
        internal_patterns = [
            "/python3.",
            "/lib/python",
            "importlib",
            "<frozen",
            "/scopespec/",
        ]
        normalized = file_path.replace("\\", "/")
        return any(pattern in normalized for pattern in internal_patterns)

    def _format_comparison(self, result: ExampleResult) -> str:
        return "\n".join(
            [
                f"\n  {self._dim('expected:')} {self._green(repr(result.expected))}",
                f"  {self._dim('actual:  ')} {self._red(repr(result.actual))}",
            ]
        )

    def _format_stack_trace(self, frames: list[dict]) -> str:
        lines = [f"\n{self._dim('Stack trace:')}"]
        for frame in frames:
            location = f"({frame['file']}:{frame['line']})"
            lines.append(f"  {self._dim('at')} {frame['function']} {self._dim(location)}")
            if frame["code"]:
                lines.append(f"    {self._red('→')} {frame['code']}")
        return "\n".join(lines)

    # Color helper methods
    def _bold(self, text: str) -> str:
        return f"{Colors.bold}{text}{Colors.reset}" if self.use_colors else text

    def _dim(self, text: str) -> str:
        return f"{Colors.dim}{text}{Colors.reset}" if self.use_colors else text

    def _red(self, text: str) -> str:
        return f"{Colors.red}{text}{Colors.reset}" if self.use_colors else text

    def _green(self, text: str) -> str:
        return f"{Colors.green}{text}{Colors.reset}" if self.use_colors else text

    def _yellow(self, text: str) -> str:
        return f"{Colors.yellow}{text}{Colors.reset}" if self.use_colors else text
