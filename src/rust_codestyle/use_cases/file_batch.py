"""Shared plumbing for use cases that run the pipeline over a file tree."""

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Optional

from rust_codestyle.domain.entities import FileResult
from rust_codestyle.domain.errors import ParseError
from rust_codestyle.domain.protocols import FileSystemProtocol, TelemetryPort

Worker = Callable[[str, str], FileResult]


def default_max_workers() -> int:
    return min(32, os.cpu_count() or 1)


@dataclass(frozen=True)
class LoadedFile:
    display_path: str
    absolute_path: str
    text: str


class FileBatchUseCase:
    """Discovers, reads and concurrently processes the .rs files under a root."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        max_workers: Optional[int] = None,
    ) -> None:
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.max_workers = max_workers or default_max_workers()

    def _load(self, root: str) -> tuple[list[LoadedFile], list[FileResult]]:
        """Read every discovered file; unreadable files become per-file errors."""
        loaded: list[LoadedFile] = []
        failed: list[FileResult] = []
        for path in self.filesystem.discover_rust_files(root):
            display = self.filesystem.relative_to(path, root)
            try:
                text = self.filesystem.read_text(path)
            except (OSError, UnicodeDecodeError) as exc:
                self.telemetry.warning(f"file={display} action=skip reason={exc}")
                failed.append(FileResult(
                    path=display,
                    parse_error=ParseError(display, 1, 1, f"cannot read file: {exc}"),
                ))
                continue
            loaded.append(LoadedFile(display, path, text))
        self.telemetry.debug(f"root={root} files={len(loaded)} unreadable={len(failed)}")
        return loaded, failed

    def _run(self, files: list[LoadedFile], worker: Worker) -> list[FileResult]:
        """
        Process files on a thread pool.

        Completion order is arbitrary; results are sorted by path before they
        leave this method.
        """
        results: list[FileResult] = []
        if not files:
            return results
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(worker, f.display_path, f.text): f for f in files}
            for future in as_completed(futures):
                result = future.result()
                if result.parse_error is not None:
                    self.telemetry.warning(f"file={result.path} action=parse-error")
                results.append(result)
        return sorted(results, key=lambda r: r.path)
