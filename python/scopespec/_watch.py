"""Watch mode: re-run specs when they or the code they import change."""

from __future__ import annotations

import ast
import logging
import os
import sys
import time
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .cli import Colors, print_report
from .config import RunConfig
from .core import SPEC_SUFFIX, discover, run

logger = logging.getLogger(__name__)


def is_spec_file(file_path: str | Path) -> bool:
    return Path(file_path).name.endswith(SPEC_SUFFIX)


class DependencyTracker:
    """Map source files to the spec files that import them."""

    def __init__(self) -> None:
        self.dependencies: dict[str, set[str]] = {}
        self.spec_imports: dict[str, set[str]] = {}

    def analyze_file(self, file_path: str) -> set[str]:
        """Return the resolved paths of modules imported by ``file_path``."""
        imports: set[str] = set()
        try:
            with open(file_path, encoding="utf-8") as f:
                tree = ast.parse(f.read(), filename=file_path)
        except (SyntaxError, OSError) as exc:
            logger.debug("cannot analyze %s: %s", file_path, exc)
            return imports

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names = [alias.name for alias in node.names]
            elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
                names = [node.module]
            else:
                continue
            for name in names:
                resolved = self._resolve_import(name, file_path)
                if resolved:
                    imports.add(resolved)
        return imports

    @staticmethod
    def _resolve_import(module_name: str, from_file: str) -> str | None:
        relative = Path(*module_name.split("."))
        # Spec files are loaded with their own directory on sys.path.
        for root in [str(Path(from_file).parent), *sys.path]:
            target = Path(root or ".") / relative
            if target.with_suffix(".py").exists():
                return str(target.with_suffix(".py").resolve())
            if (target / "__init__.py").exists():
                return str((target / "__init__.py").resolve())
        return None

    def update_dependencies(self, spec_file: str) -> None:
        spec_file = str(Path(spec_file).resolve())
        for source in self.spec_imports.get(spec_file, set()):
            self.dependencies.get(source, set()).discard(spec_file)

        imports = self.analyze_file(spec_file)
        self.spec_imports[spec_file] = imports
        for source in imports:
            self.dependencies.setdefault(source, set()).add(spec_file)

    def get_affected_specs(self, changed_file: str) -> set[str]:
        changed_file = str(Path(changed_file).resolve())
        if is_spec_file(changed_file):
            return {changed_file}
        return set(self.dependencies.get(changed_file, set()))


class SpecFileEventHandler(FileSystemEventHandler):
    """Collect changed ``.py`` files and re-run the specs they affect."""

    debounce_delay = 0.5  # seconds

    def __init__(self, config: RunConfig) -> None:
        super().__init__()
        self.config = config
        self.tracker = DependencyTracker()
        self.last_run_time = 0.0
        self.pending_changes: set[str] = set()
        for spec_file in discover(config.paths):
            self.tracker.update_dependencies(str(spec_file))

    def on_modified(self, event: FileSystemEvent) -> None:
        self._record(event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._record(event)

    def _record(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        file_path = os.fsdecode(event.src_path)
        if not file_path.endswith(".py"):
            return
        self.pending_changes.add(file_path)
        if time.time() - self.last_run_time >= self.debounce_delay:
            self.run_affected()

    def run_affected(self) -> set[str]:
        """Re-run every spec affected by the pending changes."""
        if not self.pending_changes:
            return set()
        self.last_run_time = time.time()

        affected: set[str] = set()
        for changed in self.pending_changes:
            if is_spec_file(changed):
                self.tracker.update_dependencies(changed)
            affected.update(self.tracker.get_affected_specs(changed))
        _forget_modules(self.pending_changes)
        self.pending_changes.clear()

        if not affected:
            return affected

        print(f"\n{Colors.CYAN}{'=' * 70}{Colors.RESET}")
        print(f"{Colors.BOLD}File changes detected. Re-running {len(affected)} spec file(s)...{Colors.RESET}")
        for spec_file in sorted(affected):
            print(f"  {Colors.DIM}{os.path.relpath(spec_file)}{Colors.RESET}")
        print(f"{Colors.CYAN}{'=' * 70}{Colors.RESET}\n")

        report = run(paths=tuple(sorted(affected)), pattern=self.config.pattern)
        print_report(report, verbose=self.config.verbose, ascii_mode=self.config.ascii, color=self.config.color)
        print(f"\n{Colors.DIM}Watching for changes...{Colors.RESET}")
        return affected


def _forget_modules(changed_files: set[str]) -> None:
    """Drop cached modules for changed files so the next run re-imports them."""
    changed = {str(Path(path).resolve()) for path in changed_files}
    for name, module in list(sys.modules.items()):
        module_file = getattr(module, "__file__", None)
        if module_file and str(Path(module_file).resolve()) in changed:
            del sys.modules[name]


def watch_mode(config: RunConfig) -> int:
    """Run once, then keep re-running affected specs until interrupted."""
    print(f"{Colors.BOLD}Running initial specs...{Colors.RESET}\n")
    report = run(paths=config.paths, pattern=config.pattern)
    print_report(report, verbose=config.verbose, ascii_mode=config.ascii, color=config.color)

    handler = SpecFileEventHandler(config)
    observer = Observer()
    for path in config.paths:
        path_obj = Path(path)
        if path_obj.is_dir():
            observer.schedule(handler, str(path_obj), recursive=True)
        elif path_obj.is_file():
            observer.schedule(handler, str(path_obj.parent), recursive=False)

    observer.start()
    print(f"\n{Colors.GREEN}Watch mode enabled.{Colors.RESET}")
    print(f"{Colors.DIM}Press Ctrl+C to exit.{Colors.RESET}\n")

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
        print(f"\n{Colors.YELLOW}Watch mode stopped.{Colors.RESET}")

    observer.join()
    return 0 if report.failed == 0 else 1
