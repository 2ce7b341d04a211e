"""Syntax model: tree-sitter parse trees with position helpers."""

from rust_codestyle.domain.syntax.edits import apply_edits, select_non_overlapping
from rust_codestyle.domain.syntax.items import Item, SkipRanges, comments_by_line
from rust_codestyle.domain.syntax.line_index import LineIndex
from rust_codestyle.domain.syntax.macros import MacroArg, MacroCall, macro_calls
from rust_codestyle.domain.syntax.source_file import SourceFile, parse

__all__ = [
    "Item",
    "LineIndex",
    "MacroArg",
    "MacroCall",
    "SkipRanges",
    "SourceFile",
    "apply_edits",
    "comments_by_line",
    "macro_calls",
    "parse",
    "select_non_overlapping",
]
