"""Macro invocations and their top-level arguments."""

from dataclasses import dataclass
from typing import Iterator, Optional

from tree_sitter import Node

from rust_codestyle.domain.syntax.source_file import COMMENT_TYPES, SourceFile


@dataclass(frozen=True, eq=False)
class MacroArg:
    """One comma-separated argument of a macro call, as raw tokens."""

    nodes: tuple[Node, ...]
    text: str

    @property
    def start(self) -> int:
        return self.nodes[0].start_byte

    @property
    def end(self) -> int:
        return self.nodes[-1].end_byte

    @property
    def single(self) -> Optional[Node]:
        return self.nodes[0] if len(self.nodes) == 1 else None

    @property
    def is_string_literal(self) -> bool:
        node = self.single
        return node is not None and node.type in ("string_literal", "raw_string_literal")

    @property
    def is_named(self) -> bool:
        """``name = expr`` style argument."""
        return len(self.nodes) >= 3 and self.nodes[0].type == "identifier" \
            and self.nodes[1].type == "="


@dataclass(frozen=True, eq=False)
class MacroCall:
    """
    A ``path!(...)`` invocation, either a real ``macro_invocation`` node or a
    nested call found inside another macro's token tree.
    """

    path: tuple[str, ...]
    name_node: Node
    start: int
    token_tree: Node
    args: tuple[MacroArg, ...]
    comments: tuple[Node, ...]

    @property
    def name(self) -> str:
        return self.path[-1]


def split_arguments(source: SourceFile, token_tree: Node) -> tuple[tuple[MacroArg, ...], tuple[Node, ...]]:
    """Split a token tree's contents on top-level commas; comments are returned apart."""
    args: list[MacroArg] = []
    comments: list[Node] = []
    current: list[Node] = []
    children = token_tree.children
    inner = children[1:-1] if len(children) >= 2 else []
    for child in inner:
        if child.type in COMMENT_TYPES:
            comments.append(child)
            continue
        if child.type == ",":
            if current:
                args.append(_make_arg(source, current))
            current = []
            continue
        current.append(child)
    if current:
        args.append(_make_arg(source, current))
    return tuple(args), tuple(comments)


def _make_arg(source: SourceFile, nodes: list[Node]) -> MacroArg:
    return MacroArg(tuple(nodes), source.slice(nodes[0].start_byte, nodes[-1].end_byte))


def _invocation(source: SourceFile, node: Node) -> Optional[MacroCall]:
    macro = node.child_by_field_name("macro")
    tree = next((c for c in reversed(node.children) if c.type == "token_tree"), None)
    if macro is None or tree is None:
        return None
    name_node = macro.child_by_field_name("name") if macro.type == "scoped_identifier" else macro
    if name_node is None:
        return None
    path = tuple(seg.strip() for seg in source.node_text(macro).split("::") if seg.strip())
    args, comments = split_arguments(source, tree)
    return MacroCall(path, name_node, macro.start_byte, tree, args, comments)


def _nested_calls(source: SourceFile, token_tree: Node) -> Iterator[MacroCall]:
    children = token_tree.children
    for index, child in enumerate(children):
        if child.type != "!" or index == 0 or index + 1 >= len(children):
            continue
        name_node = children[index - 1]
        tree = children[index + 1]
        if name_node.type != "identifier" or tree.type != "token_tree":
            continue
        segments = [source.node_text(name_node)]
        cursor = index - 2
        while cursor >= 1 and children[cursor].type == "::" \
                and children[cursor - 1].type == "identifier":
            segments.insert(0, source.node_text(children[cursor - 1]))
            cursor -= 2
        args, comments = split_arguments(source, tree)
        yield MacroCall(tuple(segments), name_node, children[cursor + 1].start_byte, tree, args, comments)


def macro_calls(source: SourceFile) -> Iterator[MacroCall]:
    """
    Every macro call in the file, in source order, including calls nested in
    other macros' arguments. ``macro_rules!`` bodies are not searched.
    """
    calls: list[MacroCall] = []
    for node in source.walk(prune=lambda n: n.type == "macro_definition"):
        if node.type == "macro_invocation":
            call = _invocation(source, node)
            if call is not None:
                calls.append(call)
        elif node.type == "token_tree":
            calls.extend(_nested_calls(source, node))
    return iter(sorted(calls, key=lambda c: c.start))
