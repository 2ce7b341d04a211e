from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rust_codestyle.domain.errors import FixConflict, ParseError


class Mode(Enum):
    """The two run modes of the engine."""
    ASSERT = "assert"
    FORMAT = "format"


class ExitStatus(Enum):
    """Overall outcome of a run, worst first."""
    ERROR = "error"
    VIOLATIONS = "violations"
    CLEAN = "clean"

    @property
    def exit_code(self) -> int:
        return 0 if self is ExitStatus.CLEAN else 1


@dataclass(frozen=True)
class Violation:
    """A single breach of a convention, located by 1-based line and column."""

    rule: str
    path: str
    line: int
    column: int
    message: str
    fixable: bool = False

    def sort_key(self) -> tuple[str, int, int, str]:
        return (self.path, self.line, self.column, self.rule)

    def with_path(self, path: str) -> "Violation":
        return Violation(self.rule, path, self.line, self.column, self.message, self.fixable)


@dataclass(frozen=True)
class TextEdit:
    """
    Replace the byte range [start, end) of a file with ``replacement``.

    Rules return lists of edits instead of rewriting text themselves; the
    edit applier is the only place where source text is spliced.
    """

    start: int
    end: int
    replacement: str = ""

    @classmethod
    def insert(cls, offset: int, text: str) -> "TextEdit":
        """Create an edit that inserts text at a byte offset."""
        return cls(offset, offset, text)

    @classmethod
    def delete(cls, start: int, end: int) -> "TextEdit":
        """Create an edit that removes a byte range."""
        return cls(start, end, "")


@dataclass(frozen=True)
class FileResult:
    """Per-file outcome of one run."""

    path: str
    violations: tuple[Violation, ...] = ()
    fixed_text: Optional[str] = None
    remaining: tuple[Violation, ...] = ()
    conflicts: tuple[FixConflict, ...] = ()
    parse_error: Optional[ParseError] = None
    fixed_count: int = 0
    snapshots_stale: bool = False

    @property
    def changed(self) -> bool:
        return self.fixed_text is not None


@dataclass(frozen=True)
class RunReport:
    """Aggregated, path-sorted results of an assert or format run."""

    mode: Mode
    files: tuple[FileResult, ...] = field(default_factory=tuple)

    @property
    def violations(self) -> list[Violation]:
        found = [v for f in self.files for v in f.violations]
        return sorted(found, key=Violation.sort_key)

    @property
    def remaining(self) -> list[Violation]:
        left = [v for f in self.files for v in f.remaining]
        return sorted(left, key=Violation.sort_key)

    @property
    def conflicts(self) -> list[FixConflict]:
        found = [c for f in self.files for c in f.conflicts]
        return sorted(found, key=FixConflict.sort_key)

    @property
    def parse_errors(self) -> list[ParseError]:
        errors = [f.parse_error for f in self.files if f.parse_error is not None]
        return sorted(errors, key=lambda e: (e.path, e.line, e.column))

    @property
    def fixed_count(self) -> int:
        return sum(f.fixed_count for f in self.files)

    @property
    def status(self) -> ExitStatus:
        """Worst outcome: parse error or fix conflict > violations > clean."""
        if self.parse_errors or self.conflicts:
            return ExitStatus.ERROR
        outstanding = self.violations if self.mode is Mode.ASSERT else self.remaining
        if outstanding:
            return ExitStatus.VIOLATIONS
        return ExitStatus.CLEAN

    @property
    def exit_code(self) -> int:
        return self.status.exit_code
