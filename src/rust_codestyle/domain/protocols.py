from typing import Iterable, Protocol


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...
    def set_verbose(self, verbose: bool) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def discover_rust_files(self, root: str) -> list[str]:
        """Sorted .rs files under root, skipping hidden and build directories."""
        ...

    def relative_to(self, path: str, root: str) -> str:
        """Display form of path relative to the run root."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content of a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...


class SnapshotCleanupProtocol(Protocol):
    """Removes pending insta snapshots made stale by inlining snapshots."""

    def remove_stale_snapshots(self, source_paths: Iterable[str]) -> list[str]:
        """Delete stale pending snapshots for the given sources; return what was removed."""
        ...
