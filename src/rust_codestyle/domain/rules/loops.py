"""Endless ``loop`` expressions must be justified by a ``// LOOP`` comment."""

from tree_sitter import Node

from rust_codestyle.domain.entities import TextEdit, Violation
from rust_codestyle.domain.rules.base import Rule, RuleName
from rust_codestyle.domain.syntax import SkipRanges, SourceFile, comments_by_line

MARKERS = ("//LOOP", "// LOOP")

MESSAGE = (
    "Endless loop without `//LOOP` comment\n"
    "HINT: try to rewrite the loop with `while let` or justify why a bound can't be enforced"
)


def _keyword(loop: Node) -> Node:
    return next((c for c in loop.children if c.type == "loop"), loop)


class LoopsRule(Rule):
    """
    Every ``loop { ... }`` needs a marker comment on its own line or the line
    directly above it. Nested loops are checked one by one.
    """

    name = RuleName.LOOPS
    description = "endless loops must carry a `// LOOP` justification comment"
    fixable = True

    def _unmarked(self, source: SourceFile) -> list[Node]:
        skips = SkipRanges.of(source)
        comments = comments_by_line(source)
        unmarked = []
        for node in source.walk():
            if node.type != "loop_expression" or skips.contains(node.start_byte):
                continue
            line = source.line_of(_keyword(node).start_byte)
            nearby = comments.get(line, []) + comments.get(line - 1, [])
            if not any(marker in text for text in nearby for marker in MARKERS):
                unmarked.append(_keyword(node))
        return unmarked

    def _insertion_point(self, source: SourceFile, keyword: Node) -> int:
        return source.lines.line_start(source.line_of(keyword.start_byte))

    def check(self, source: SourceFile) -> list[Violation]:
        found = []
        for keyword in self._unmarked(source):
            fixable = not source.is_inside_multiline_token(self._insertion_point(source, keyword))
            found.append(self.violation(source, keyword.start_byte, MESSAGE, fixable=fixable))
        return self.ordered(found)

    def plan_fix(self, source: SourceFile) -> list[TextEdit]:
        edits = {}
        for keyword in self._unmarked(source):
            offset = self._insertion_point(source, keyword)
            if offset in edits or source.is_inside_multiline_token(offset):
                continue
            indent = source.lines.indentation(source.line_of(offset))
            newline = source.lines.terminator(source.line_of(offset))
            edits[offset] = TextEdit.insert(offset, f"{indent}// LOOP{newline}")
        return list(edits.values())
