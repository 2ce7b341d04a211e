"""Span-replacement edits over source bytes."""

from typing import Iterable

from rust_codestyle.domain.entities import TextEdit


def _ordered(edits: Iterable[TextEdit]) -> list[TextEdit]:
    return sorted(edits, key=lambda e: (e.start, e.end))


def select_non_overlapping(edits: Iterable[TextEdit]) -> list[TextEdit]:
    """
    Keep the earliest edits that do not overlap, dropping the rest.

    Dropped edits are picked up by the next fix pass after re-parsing.
    Identical insertions are collapsed.
    """
    chosen: list[TextEdit] = []
    for edit in _ordered(edits):
        if chosen:
            last = chosen[-1]
            if edit == last:
                continue
            if edit.start < last.end or (edit.start == last.start and last.start == last.end
                                         and edit.start == edit.end):
                continue
        chosen.append(edit)
    return chosen


def apply_edits(data: bytes, edits: Iterable[TextEdit]) -> bytes:
    """Splice ``edits`` into ``data``. Raises ValueError on overlapping edits."""
    out: list[bytes] = []
    pos = 0
    for edit in _ordered(edits):
        if edit.start < pos or edit.end < edit.start or edit.end > len(data):
            raise ValueError(f"invalid or overlapping edit {edit!r}")
        out.append(data[pos:edit.start])
        out.append(edit.replacement.encode("utf-8"))
        pos = edit.end
    out.append(data[pos:])
    return b"".join(out)
