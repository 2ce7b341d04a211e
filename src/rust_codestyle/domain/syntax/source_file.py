"""Parsed Rust source files backed by tree-sitter."""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Iterator, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree

from rust_codestyle.domain.errors import ParseError
from rust_codestyle.domain.syntax.line_index import LineIndex

COMMENT_TYPES = frozenset({"line_comment", "block_comment"})
STRING_TYPES = frozenset({"string_literal", "raw_string_literal", "char_literal"})

_SNIPPET_WIDTH = 20


@lru_cache(maxsize=1)
def rust_language() -> Language:
    """The compiled Rust grammar, shared by every parser."""
    return Language(tree_sitter_rust.language())


@dataclass(frozen=True, eq=False)
class SourceFile:
    """
    One parsed file: its text, its UTF-8 bytes, the tree and a line index.

    Instances are never mutated; a fix yields new text that is parsed into a
    new SourceFile.
    """

    path: str
    text: str
    data: bytes
    tree: Tree
    lines: LineIndex = field(repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def file_name(self) -> str:
        return self.path.replace("\\", "/").rsplit("/", 1)[-1]

    def slice(self, start: int, end: int) -> str:
        return self.data[start:end].decode("utf-8")

    def node_text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def position(self, offset: int) -> tuple[int, int]:
        return self.lines.position(offset)

    def line_of(self, offset: int) -> int:
        return self.lines.line_of(offset)

    def content_end(self, node: Node) -> int:
        """End offset of ``node`` with trailing whitespace (e.g. a comment's newline) trimmed."""
        end = node.end_byte
        while end > node.start_byte and self.data[end - 1:end] in (b"\n", b"\r", b" ", b"\t"):
            end -= 1
        return end

    def walk(self, node: Optional[Node] = None,
             prune: Optional[Callable[[Node], bool]] = None) -> Iterator[Node]:
        """Pre-order traversal; children of nodes for which ``prune`` is true are not visited."""
        stack = [node if node is not None else self.root]
        while stack:
            current = stack.pop()
            yield current
            if prune is not None and prune(current):
                continue
            stack.extend(reversed(current.children))

    def is_inside_multiline_token(self, offset: int) -> bool:
        """True when ``offset`` falls strictly inside a string or comment token."""
        node: Optional[Node] = self.root.descendant_for_byte_range(offset, offset)
        while node is not None:
            if (node.type in STRING_TYPES or node.type in COMMENT_TYPES) \
                    and node.start_byte < offset < node.end_byte:
                return True
            node = node.parent
        return False


def _first_error(node: Node) -> Optional[Node]:
    if node.is_missing or node.type == "ERROR":
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _describe(node: Node, data: bytes) -> str:
    if node.is_missing:
        return f"missing `{node.type}`"
    snippet = data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
    snippet = snippet.strip().split("\n", 1)[0][:_SNIPPET_WIDTH]
    if not snippet:
        return "syntax error"
    return f"unexpected `{snippet}`"


def parse(text: str, path: str = "<memory>") -> SourceFile:
    """
    Parse Rust source text.

    Raises ParseError at the first ERROR or MISSING node when the text is not
    valid enough to build a complete tree.
    """
    data = text.encode("utf-8")
    # Parser instances are not thread-safe; one per call.
    parser = Parser(rust_language())
    tree = parser.parse(data)
    lines = LineIndex(data)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root) or root
        line, column = lines.position(bad.start_byte)
        raise ParseError(path, line, column, _describe(bad, data))
    return SourceFile(path=path, text=text, data=data, tree=tree, lines=lines)
