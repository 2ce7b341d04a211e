"""Bare variables passed to format macros should be embedded as ``{name}``."""

import re
from dataclasses import dataclass
from typing import Optional

from rust_codestyle.domain.entities import TextEdit, Violation
from rust_codestyle.domain.rules.base import Rule, RuleName
from rust_codestyle.domain.syntax import MacroArg, MacroCall, SkipRanges, SourceFile, macro_calls
from rust_codestyle.domain.syntax.format_string import FormatString, parse_format_string

FORMAT_MACROS = frozenset({
    "format", "write", "writeln", "print", "println", "eprint", "eprintln",
    "format_args", "panic", "todo", "unimplemented", "unreachable",
    "log", "trace", "debug", "info", "warn", "error",
    "assert", "assert_eq", "assert_ne", "debug_assert", "debug_assert_eq", "debug_assert_ne",
    "bail", "ensure", "anyhow", "eyre",
})

# Macros whose format string is not the first argument.
FORMAT_ARG_INDEX = {
    "write": 1,
    "writeln": 1,
    "assert": 1,
    "debug_assert": 1,
    "ensure": 1,
    "assert_eq": 2,
    "assert_ne": 2,
    "debug_assert_eq": 2,
    "debug_assert_ne": 2,
}

# Logging macros take fields and targets before the message.
LOG_MACROS = frozenset({"log", "trace", "debug", "info", "warn", "error"})

RESERVED = frozenset({"_", "self", "Self", "crate", "super"})

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


@dataclass(frozen=True, eq=False)
class _Embedding:
    call: MacroCall
    literal: MacroArg
    fmt: FormatString
    # placeholder index -> positional argument holding a bare variable
    simple: dict[int, MacroArg]
    # argument -> byte range removed with it (its leading comma included)
    removals: dict[int, tuple[int, int]]
    fixable: bool


def is_simple_variable(arg: MacroArg) -> bool:
    node = arg.single
    return node is not None and node.type == "identifier" \
        and bool(_IDENTIFIER.match(arg.text)) and arg.text not in RESERVED


def _format_index(call: MacroCall) -> Optional[int]:
    if call.name in LOG_MACROS:
        return next((i for i, a in enumerate(call.args) if a.is_string_literal), None)
    index = FORMAT_ARG_INDEX.get(call.name, 0)
    return index if index < len(call.args) and call.args[index].is_string_literal else None


class EmbedSimpleVarsRule(Rule):
    """
    ``println!("{}", name)`` should read ``println!("{name}")``.

    Only bare identifiers qualify; field access, calls and other expressions
    stay positional. Calls mixing named arguments, explicit indices or
    ``*``/``N$`` width arguments are left alone, as are calls whose
    placeholder count does not match their arguments.
    """

    name = RuleName.EMBED_SIMPLE_VARS
    description = "simple variables must be embedded in format strings"
    fixable = True

    def _embeddings(self, source: SourceFile) -> list[_Embedding]:
        skips = SkipRanges.of(source)
        found = []
        for call in macro_calls(source):
            if call.name not in FORMAT_MACROS or skips.contains(call.start):
                continue
            embedding = self._analyse(source, call)
            if embedding is not None:
                found.append(embedding)
        return found

    def _analyse(self, source: SourceFile, call: MacroCall) -> Optional[_Embedding]:
        index = _format_index(call)
        if index is None:
            return None
        literal = call.args[index]
        fmt = parse_format_string(literal.text)
        if fmt is None:
            return None
        positional = call.args[index + 1:]
        if any(a.is_named for a in positional):
            return None
        if any(p.indexed or p.dynamic_spec for p in fmt.placeholders):
            return None
        implicit = [i for i, p in enumerate(fmt.placeholders) if p.implicit]
        if len(implicit) != len(positional):
            return None

        simple: dict[int, MacroArg] = {}
        removals: dict[int, tuple[int, int]] = {}
        previous_end = literal.end
        for placeholder_index, arg in zip(implicit, positional):
            if is_simple_variable(arg):
                simple[placeholder_index] = arg
                removals[placeholder_index] = (previous_end, arg.end)
            previous_end = arg.end
        if not simple:
            return None
        fixable = not any(
            start <= comment.start_byte < end
            for comment in call.comments for start, end in removals.values()
        )
        return _Embedding(call, literal, fmt, simple, removals, fixable)

    def check(self, source: SourceFile) -> list[Violation]:
        found = []
        for embedding in self._embeddings(source):
            for placeholder_index, arg in embedding.simple.items():
                placeholder = embedding.fmt.placeholders[placeholder_index]
                spec = "" if placeholder.spec is None else ":" + placeholder.spec
                found.append(self.violation(
                    source,
                    arg.start,
                    f"variable `{arg.text}` should be embedded in format string: "
                    f"use `{{{arg.text}{spec}}}` instead of `{{{spec}}}, {arg.text}`",
                    fixable=embedding.fixable,
                ))
        return self.ordered(found)

    def plan_fix(self, source: SourceFile) -> list[TextEdit]:
        edits = []
        for embedding in self._embeddings(source):
            if not embedding.fixable:
                continue
            names = {i: arg.text for i, arg in embedding.simple.items()}
            literal = embedding.literal
            edits.append(TextEdit(literal.start, literal.end, embedding.fmt.embed(names)))
            edits.extend(TextEdit.delete(start, end) for start, end in embedding.removals.values())
        return edits
