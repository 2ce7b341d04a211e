"""Async functions must carry an ``#[instrument]`` attribute."""

from tree_sitter import Node

from rust_codestyle.domain.entities import Violation
from rust_codestyle.domain.rules.base import Rule, RuleName
from rust_codestyle.domain.syntax import SkipRanges, SourceFile
from rust_codestyle.domain.syntax.items import attribute_path, outer_attributes

EXEMPT_FUNCTIONS = frozenset({"main"})
EXEMPT_FILES = frozenset({"utils.rs"})


def _is_async(function: Node) -> bool:
    modifiers = next((c for c in function.children if c.type == "function_modifiers"), None)
    return modifiers is not None and any(c.type == "async" for c in modifiers.children)


class InstrumentRule(Rule):
    """Flags ``async fn`` without a tracing ``#[instrument]`` attribute. Assert-only."""

    name = RuleName.INSTRUMENT
    description = "async functions must be annotated with #[instrument]"
    default_enabled = False

    def check(self, source: SourceFile) -> list[Violation]:
        if source.file_name in EXEMPT_FILES:
            return []
        skips = SkipRanges.of(source)
        found = []
        for node in source.walk():
            if node.type != "function_item" or not _is_async(node):
                continue
            name = node.child_by_field_name("name")
            if name is None or skips.contains(node.start_byte):
                continue
            fn_name = source.node_text(name)
            if fn_name in EXEMPT_FUNCTIONS:
                continue
            last_segments = {attribute_path(a)[-1:] for a in outer_attributes(node)}
            if ("instrument",) in last_segments or ("test",) in last_segments:
                continue
            found.append(self.violation(
                source, name.start_byte, f"No #[instrument] on async fn `{fn_name}`"))
        return self.ordered(found)
