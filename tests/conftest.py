"""Shared helpers for codestyle tests.

Run pytest from the project root; pythonpath in pyproject.toml points at src.
"""

from textwrap import dedent
from typing import Optional
from unittest.mock import MagicMock

import pytest

from rust_codestyle.domain.rules import Rule
from rust_codestyle.domain.syntax import SourceFile, parse


def rust(text: str, path: str = "src/lib.rs") -> SourceFile:
    """Parse dedented Rust source."""
    return parse(dedent(text).lstrip("\n"), path)


def fix_until_stable(rule: Rule, text: str, path: str = "src/lib.rs", passes: int = 10) -> str:
    """Apply a rule's fix repeatedly, the way the pipeline does."""
    current = dedent(text).lstrip("\n")
    for _ in range(passes):
        fixed = rule.fix(parse(current, path))
        if fixed == current:
            break
        current = fixed
    return current


def source_text(text: str) -> str:
    return dedent(text).lstrip("\n")


def file_system_mock(files: dict[str, str], root: str = "/repo") -> MagicMock:
    """FileSystemProtocol mock serving ``files`` (keys relative to root)."""
    filesystem = MagicMock()
    filesystem.discover_rust_files.return_value = sorted(f"{root}/{name}" for name in files)
    filesystem.relative_to.side_effect = lambda path, _root: path[len(root) + 1:]

    def read_text(path: str, encoding: Optional[str] = "utf-8") -> str:
        return files[path[len(root) + 1:]]

    filesystem.read_text.side_effect = read_text
    return filesystem


@pytest.fixture
def telemetry() -> MagicMock:
    return MagicMock()
