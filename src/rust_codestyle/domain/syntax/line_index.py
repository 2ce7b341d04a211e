"""Byte offset <-> (line, column) mapping for UTF-8 source text."""

from bisect import bisect_right


class LineIndex:
    """
    Maps byte offsets to 1-based (line, column) pairs.

    Columns count characters, not bytes, so multi-byte identifiers and string
    contents report the column an editor would show.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        starts = [0]
        pos = data.find(b"\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = data.find(b"\n", pos + 1)
        self._starts = starts

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_of(self, offset: int) -> int:
        """1-based line containing ``offset``."""
        return bisect_right(self._starts, offset)

    def position(self, offset: int) -> tuple[int, int]:
        line = self.line_of(offset)
        start = self._starts[line - 1]
        column = len(self._data[start:offset].decode("utf-8", errors="replace")) + 1
        return line, column

    def line_start(self, line: int) -> int:
        return self._starts[line - 1]

    def line_end(self, line: int) -> int:
        """Offset of the newline ending ``line`` (or end of data)."""
        if line < len(self._starts):
            return self._starts[line] - 1
        return len(self._data)

    def terminator(self, line: int) -> str:
        """
        The line ending used by ``line``: ``"\\r\\n"`` or ``"\\n"``.

        A last line without a newline takes the file's first line ending.
        """
        end = self.line_end(line)
        if end >= len(self._data):
            end = self._data.find(b"\n")
            if end == -1:
                return "\n"
        return "\r\n" if self._data[end - 1:end] == b"\r" else "\n"

    def indentation(self, line: int) -> str:
        start = self.line_start(line)
        text = self._data[start:self.line_end(line)]
        stripped = text.lstrip(b" \t")
        return text[:len(text) - len(stripped)].decode("utf-8")
