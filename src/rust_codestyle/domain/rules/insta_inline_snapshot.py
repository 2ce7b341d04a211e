"""insta snapshot assertions must use inline snapshots."""

from typing import Optional

from rust_codestyle.domain.entities import TextEdit, Violation
from rust_codestyle.domain.rules.base import Rule, RuleName
from rust_codestyle.domain.syntax import MacroArg, MacroCall, SkipRanges, SourceFile, macro_calls

INSTA_MACROS = frozenset({
    "assert_snapshot",
    "assert_debug_snapshot",
    "assert_display_snapshot",
    "assert_json_snapshot",
    "assert_yaml_snapshot",
    "assert_ron_snapshot",
    "assert_toml_snapshot",
    "assert_csv_snapshot",
    "assert_compact_json_snapshot",
    "assert_compact_debug_snapshot",
})

_STRING_TYPES = ("string_literal", "raw_string_literal")


def is_snapshot_macro(call: MacroCall) -> bool:
    if call.name not in INSTA_MACROS:
        return False
    return len(call.path) == 1 or call.path == ("insta", call.name)


def is_inline(arg: MacroArg) -> bool:
    """``@"..."`` / ``@r#"..."#``."""
    return len(arg.nodes) == 2 and arg.nodes[0].type == "@" and arg.nodes[1].type in _STRING_TYPES


def _is_redaction_map(arg: MacroArg) -> bool:
    node = arg.single
    return node is not None and node.type == "token_tree" \
        and bool(node.children) and node.children[0].type == "{"


class InstaInlineSnapshotRule(Rule):
    """
    Flags ``assert_*snapshot!`` calls that rely on an external ``.snap`` file.

    ``assert_snapshot!(value)`` (optionally with a redaction map) is fixed by
    appending an empty inline snapshot, ``@""``, for ``cargo insta`` to fill in;
    named snapshots and other shapes need a manual rewrite.
    """

    name = RuleName.INSTA_INLINE_SNAPSHOT
    description = "insta snapshot assertions must use inline snapshots"
    fixable = True

    def _offending(self, source: SourceFile) -> list[MacroCall]:
        skips = SkipRanges.of(source)
        return [
            call for call in macro_calls(source)
            if is_snapshot_macro(call) and call.args
            and not skips.contains(call.start)
            and not any(is_inline(arg) for arg in call.args)
        ]

    def _insertion(self, call: MacroCall) -> Optional[TextEdit]:
        args = call.args
        if len(args) == 1 or (len(args) == 2 and _is_redaction_map(args[1])):
            return TextEdit.insert(args[-1].end, ', @""')
        return None

    def check(self, source: SourceFile) -> list[Violation]:
        return self.ordered([
            self.violation(
                source,
                call.start,
                f'`{call.name}!` must use inline snapshot with `@r""` or `@""`',
                fixable=self._insertion(call) is not None,
            )
            for call in self._offending(source)
        ])

    def plan_fix(self, source: SourceFile) -> list[TextEdit]:
        edits = (self._insertion(call) for call in self._offending(source))
        return [edit for edit in edits if edit is not None]
