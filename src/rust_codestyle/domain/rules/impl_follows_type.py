"""``impl`` blocks must directly follow the declaration of their type."""

from dataclasses import dataclass
from typing import Optional

from rust_codestyle.domain.entities import TextEdit, Violation
from rust_codestyle.domain.rules.base import Rule, RuleName
from rust_codestyle.domain.syntax import Item, SkipRanges, SourceFile
from rust_codestyle.domain.syntax.items import container_items, item_containers

DECLARATION_KINDS = frozenset({"struct", "enum", "union", "trait"})

_WHITESPACE = b" \t\r\n"


@dataclass(frozen=True, eq=False)
class _Group:
    """A declaration with the impls paired to it that are out of place."""

    declaration: Item
    anchor: Item
    misplaced: tuple[Item, ...]


def _pair_impls(items: list[Item]) -> list[_Group]:
    declarations: dict[str, list[int]] = {}
    for index, item in enumerate(items):
        if item.kind in DECLARATION_KINDS and item.name and not item.skipped:
            declarations.setdefault(item.name, []).append(index)

    paired: dict[int, list[int]] = {}
    for index, item in enumerate(items):
        if item.kind != "impl" or item.skipped or item.name not in declarations:
            continue
        candidates = declarations[item.name]
        preceding = [d for d in candidates if d < index]
        owner = preceding[-1] if preceding else candidates[0]
        paired.setdefault(owner, []).append(index)

    groups = []
    for owner in sorted(paired):
        impls = paired[owner]
        expected = owner + 1
        in_place = 0
        while in_place < len(impls) and impls[in_place] == expected:
            expected += 1
            in_place += 1
        if in_place == len(impls):
            continue
        anchor = items[impls[in_place - 1]] if in_place else items[owner]
        groups.append(_Group(items[owner], anchor, tuple(items[i] for i in impls[in_place:])))
    return groups


class ImplFollowsTypeRule(Rule):
    """
    An impl for type ``T`` (inherent or trait) must come right after ``T``'s
    struct, enum, union or trait declaration, or after other impls of ``T``
    that already do. Impls for types declared elsewhere are ignored.
    """

    name = RuleName.IMPL_FOLLOWS_TYPE
    description = "impl blocks must directly follow the declaration of their type"
    fixable = True

    def _groups(self, source: SourceFile) -> list[_Group]:
        skips = SkipRanges.of(source)
        groups = []
        for container in item_containers(source):
            groups.extend(_pair_impls(container_items(source, container, skips)))
        return groups

    def check(self, source: SourceFile) -> list[Violation]:
        found = []
        for group in self._groups(source):
            fixable = self._region_edit(source, group) is not None
            decl_line = source.line_of(group.declaration.node.start_byte)
            for item in group.misplaced:
                found.append(self.violation(
                    source,
                    item.node.start_byte,
                    f"impl `{item.name}` should directly follow the declaration of "
                    f"`{item.name}` (line {decl_line})",
                    fixable=fixable,
                ))
        return self.ordered(found)

    def plan_fix(self, source: SourceFile) -> list[TextEdit]:
        edits = []
        for group in self._groups(source):
            edit = self._region_edit(source, group)
            if edit is not None:
                edits.append(edit)
        return edits

    def _tail_end(self, source: SourceFile, end: int) -> Optional[int]:
        """End of ``end``'s line content, allowing only a trailing line comment after it."""
        line_end = source.lines.line_end(source.line_of(end))
        rest = source.data[end:line_end]
        if rest.strip() == b"":
            return end
        if rest.lstrip().startswith(b"//"):
            return end + len(rest.rstrip())
        return None

    def _owns_lines(self, source: SourceFile, item: Item) -> bool:
        line_start = source.lines.line_start(source.line_of(item.start))
        return source.data[line_start:item.start].strip() == b""

    def _removal(self, source: SourceFile, item: Item) -> Optional[tuple[int, int, str]]:
        tail = self._tail_end(source, item.end)
        if tail is None or not self._owns_lines(source, item):
            return None
        data = source.data
        start = item.start
        while start > 0 and data[start - 1] in _WHITESPACE:
            start -= 1
        if start > 0:
            return start, tail, source.slice(start, tail)
        # First thing in the file: take the blank lines after it instead.
        after = tail
        while after < len(data) and data[after] in _WHITESPACE:
            after += 1
        if after < len(data):
            after = source.lines.line_start(source.line_of(after))
        newline = source.lines.terminator(source.line_of(tail))
        return 0, after, newline * 2 + source.slice(item.start, tail)

    def _region_edit(self, source: SourceFile, group: _Group) -> Optional[TextEdit]:
        """
        One edit spanning the anchor and every misplaced impl: the impls are
        cut out and re-inserted, in their original order, after the anchor.
        """
        anchor = self._tail_end(source, group.anchor.end)
        if anchor is None:
            return None
        removals = []
        for item in group.misplaced:
            removal = self._removal(source, item)
            if removal is None or removal[0] < anchor < removal[1]:
                return None
            removals.append(removal)
        # Items are in source order, so sorting by offset keeps their relative order.
        removals.sort()
        moved = "".join(chunk for _, _, chunk in removals)
        low = min([anchor] + [r[0] for r in removals])
        high = max([anchor] + [r[1] for r in removals])

        pieces = []
        pos = low
        inserted = False
        for start, end, _ in removals:
            if not inserted and anchor <= start:
                pieces.append(source.slice(pos, anchor))
                pieces.append(moved)
                pos = anchor
                inserted = True
            pieces.append(source.slice(pos, start))
            pos = end
        if not inserted:
            pieces.append(source.slice(pos, anchor))
            pieces.append(moved)
            pos = anchor
        pieces.append(source.slice(pos, high))
        return TextEdit(low, high, "".join(pieces))
