"""Error taxonomy for the style engine."""

from dataclasses import dataclass


class CodestyleError(Exception):
    """Base class for all errors raised by codestyle."""


class ConfigurationError(CodestyleError):
    """Raised when rule options cannot be resolved (unknown name, bad value)."""


class ParseError(CodestyleError):
    """A source file is not valid enough to build the syntax tree."""

    def __init__(self, path: str, line: int, column: int, message: str) -> None:
        super().__init__(f"{path}:{line}:{column}: {message}")
        self.path = path
        self.line = line
        self.column = column
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return (self.path, self.line, self.column, self.message) == (
            other.path, other.line, other.column, other.message)

    def __hash__(self) -> int:
        return hash((self.path, self.line, self.column, self.message))


@dataclass(frozen=True)
class FixConflict:
    """
    A fixable violation that survived its own rule's fix.

    This is an engine defect, never a user issue, and is reported apart from
    the violations that need manual fixing.
    """

    rule: str
    path: str
    line: int
    column: int
    message: str

    def sort_key(self) -> tuple[str, int, int, str]:
        return (self.path, self.line, self.column, self.rule)
