"""The rule contract shared by every style rule."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from rust_codestyle.domain.entities import TextEdit, Violation
from rust_codestyle.domain.syntax import SourceFile, apply_edits, select_non_overlapping


class RuleName(str, Enum):
    """The closed set of rule names, in fix order."""
    INSTRUMENT = "instrument"
    LOOPS = "loops"
    IMPL_FOLLOWS_TYPE = "impl-follows-type"
    EMBED_SIMPLE_VARS = "embed-simple-vars"
    INSTA_INLINE_SNAPSHOT = "insta-inline-snapshot"

    def __str__(self) -> str:
        return self.value


class Rule(ABC):
    """
    A single convention: a detector plus an optional fixer.

    Rules are stateless and shared across worker threads. ``check`` must be
    side-effect-free and return violations ordered by (line, column).
    Fixes are expressed as byte-span edits so untouched code keeps its
    formatting.
    """

    name: ClassVar[RuleName]
    description: ClassVar[str]
    default_enabled: ClassVar[bool] = True
    fixable: ClassVar[bool] = False

    @abstractmethod
    def check(self, source: SourceFile) -> list[Violation]:
        """Report every occurrence of the convention being broken."""
        ...

    def plan_fix(self, source: SourceFile) -> list[TextEdit]:
        """Edits that fix the fixable occurrences; empty for assert-only rules."""
        return []

    def fix(self, source: SourceFile) -> str:
        """
        Apply one pass of this rule's edits and return the new text.

        Overlapping edits are deferred to the next pass, so callers loop until
        the text stops changing.
        """
        edits = select_non_overlapping(self.plan_fix(source))
        if not edits:
            return source.text
        return apply_edits(source.data, edits).decode("utf-8")

    def violation(self, source: SourceFile, offset: int, message: str,
                  fixable: bool = False) -> Violation:
        line, column = source.position(offset)
        return Violation(
            rule=self.name.value,
            path=source.path,
            line=line,
            column=column,
            message=message,
            fixable=fixable and self.fixable,
        )

    @staticmethod
    def ordered(violations: list[Violation]) -> list[Violation]:
        return sorted(violations, key=lambda v: (v.line, v.column, v.message))
