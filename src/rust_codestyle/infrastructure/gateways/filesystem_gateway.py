"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import os
from pathlib import Path

from rust_codestyle.domain.protocols import FileSystemProtocol

EXCLUDED_DIRECTORIES = frozenset({"target"})


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def discover_rust_files(self, root: str) -> list[str]:
        """
        All .rs files under root, sorted.

        Hidden directories (``.git``, ``.cargo``...) and ``target`` build
        output are not descended into. A file root yields just that file.
        """
        root_path = Path(root).resolve()
        if root_path.is_file():
            return [str(root_path)] if root_path.suffix == ".rs" else []
        found = []
        for directory, subdirs, files in os.walk(root_path):
            subdirs[:] = sorted(
                d for d in subdirs if not d.startswith(".") and d not in EXCLUDED_DIRECTORIES)
            found.extend(str(Path(directory) / name) for name in files if name.endswith(".rs"))
        return sorted(found)

    def relative_to(self, path: str, root: str) -> str:
        """Display form of path relative to root (posix separators)."""
        path_obj = Path(path).resolve()
        root_path = Path(root).resolve()
        if root_path.is_file():
            root_path = root_path.parent
        try:
            return path_obj.relative_to(root_path).as_posix()
        except ValueError:
            return path_obj.as_posix()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content of a file, keeping its newlines untouched."""
        with open(path, encoding=encoding, newline="") as handle:
            return handle.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file, keeping its newlines untouched."""
        with open(path, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
