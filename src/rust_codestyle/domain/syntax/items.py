"""Items, attributes, comments and skip ranges of a parsed file."""

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterator, Optional

from tree_sitter import Node

from rust_codestyle.domain.syntax.source_file import COMMENT_TYPES, SourceFile

SKIP_ATTRIBUTE = ("codestyle", "skip")

TRIVIA_TYPES = COMMENT_TYPES | {"attribute_item"}

_ITEM_KINDS = {
    "struct_item": "struct",
    "enum_item": "enum",
    "union_item": "union",
    "trait_item": "trait",
    "impl_item": "impl",
    "function_item": "fn",
    "mod_item": "mod",
}

_NON_ITEMS = TRIVIA_TYPES | {"inner_attribute_item", "{", "}", ";"}

_PATH_SEPARATOR = re.compile(r"\s*::\s*")


@dataclass(frozen=True, eq=False)
class Item:
    """
    A top-level or module-level item.

    ``start`` includes the item's leading trivia (attributes and comments
    directly above it); ``node`` is the item itself.
    """

    node: Node
    kind: str
    name: Optional[str]
    start: int
    skipped: bool

    @property
    def end(self) -> int:
        return self.node.end_byte


def attribute_path(attribute_item: Node) -> tuple[str, ...]:
    """Path segments of ``#[path(...)]`` / ``#![path]``, e.g. ``("tracing", "instrument")``."""
    attribute = next((c for c in attribute_item.named_children if c.type == "attribute"), None)
    if attribute is None or not attribute.named_children:
        return ()
    raw = attribute.named_children[0].text.decode("utf-8")
    return tuple(seg for seg in _PATH_SEPARATOR.split(raw.strip()) if seg)


def is_skip_attribute(attribute_item: Node) -> bool:
    return attribute_path(attribute_item) == SKIP_ATTRIBUTE


def _starts_own_line(source: SourceFile, offset: int) -> bool:
    line_start = source.lines.line_start(source.line_of(offset))
    return source.data[line_start:offset].strip() == b""


def leading_trivia(source: SourceFile, node: Node) -> list[Node]:
    """Attributes and comments attached above ``node``, nearest last."""
    attached: list[Node] = []
    current_start = node.start_byte
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in TRIVIA_TYPES:
        gap = source.line_of(current_start) - source.line_of(source.content_end(sibling))
        if gap > 1 or not _starts_own_line(source, sibling.start_byte):
            break
        attached.insert(0, sibling)
        current_start = sibling.start_byte
        sibling = sibling.prev_sibling
    return attached


def outer_attributes(node: Node) -> list[Node]:
    """``#[...]`` attributes preceding ``node`` (comments between them are allowed)."""
    found: list[Node] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in TRIVIA_TYPES:
        if sibling.type == "attribute_item":
            found.insert(0, sibling)
        sibling = sibling.prev_sibling
    return found


def _type_name(type_node: Optional[Node]) -> Optional[str]:
    while type_node is not None:
        if type_node.type in ("type_identifier", "primitive_type"):
            return type_node.text.decode("utf-8")
        if type_node.type == "generic_type":
            type_node = type_node.child_by_field_name("type")
        elif type_node.type == "scoped_type_identifier":
            type_node = type_node.child_by_field_name("name")
        elif type_node.type == "reference_type":
            type_node = type_node.child_by_field_name("type")
        else:
            return None
    return None


def item_name(node: Node) -> Optional[str]:
    """Declared name of an item, or the target type name of an impl."""
    if node.type == "impl_item":
        return _type_name(node.child_by_field_name("type"))
    name = node.child_by_field_name("name")
    return name.text.decode("utf-8") if name is not None else None


def item_containers(source: SourceFile) -> Iterator[Node]:
    """The file root and every inline ``mod`` body, outermost first."""
    yield source.root
    for node in source.walk():
        if node.type == "mod_item":
            body = node.child_by_field_name("body")
            if body is not None:
                yield body


def container_items(source: SourceFile, container: Node, skips: "SkipRanges") -> list[Item]:
    items = []
    for child in container.named_children:
        if child.type in _NON_ITEMS:
            continue
        trivia = leading_trivia(source, child)
        start = trivia[0].start_byte if trivia else child.start_byte
        items.append(Item(
            node=child,
            kind=_ITEM_KINDS.get(child.type, "other"),
            name=item_name(child),
            start=start,
            skipped=skips.contains(child.start_byte),
        ))
    return items


class SkipRanges:
    """Byte ranges exempted from every rule by ``#[codestyle::skip]``."""

    def __init__(self, ranges: list[tuple[int, int]]) -> None:
        merged: list[tuple[int, int]] = []
        for start, end in sorted(ranges):
            if merged and start <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(end, merged[-1][1]))
            else:
                merged.append((start, end))
        self._starts = [r[0] for r in merged]
        self._ranges = merged

    @classmethod
    def of(cls, source: SourceFile) -> "SkipRanges":
        ranges = []
        for node in source.walk():
            if node.type == "attribute_item" and is_skip_attribute(node):
                target = node.next_named_sibling
                while target is not None and target.type in TRIVIA_TYPES:
                    target = target.next_named_sibling
                if target is not None:
                    ranges.append((node.start_byte, target.end_byte))
            elif node.type == "inner_attribute_item" and is_skip_attribute(node):
                scope = node.parent
                if scope is not None:
                    ranges.append((scope.start_byte, scope.end_byte))
        return cls(ranges)

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def contains(self, offset: int) -> bool:
        index = bisect_right(self._starts, offset) - 1
        return index >= 0 and offset < self._ranges[index][1]


def comments_by_line(source: SourceFile) -> dict[int, list[str]]:
    """Comment texts keyed by the 1-based line they start on."""
    found: dict[int, list[str]] = {}
    for node in source.walk():
        if node.type in COMMENT_TYPES:
            line = source.line_of(node.start_byte)
            found.setdefault(line, []).append(source.node_text(node).strip())
    return found
