"""Unit tests for LineIndex."""

from rust_codestyle.domain.syntax import LineIndex


class TestLineIndex:
    """Offset to (line, column) mapping."""

    def test_position_is_one_based(self) -> None:
        """First byte of the file is line 1, column 1."""
        index = LineIndex(b"fn a() {}\nfn b() {}\n")
        assert index.position(0) == (1, 1)
        assert index.position(3) == (1, 4)
        assert index.position(10) == (2, 1)

    def test_columns_count_characters_not_bytes(self) -> None:
        """Multi-byte characters advance the column by one."""
        data = 'let s = "héllo"; x'.encode("utf-8")
        index = LineIndex(data)
        assert index.position(data.index(b"x")) == (1, 18)

    def test_line_bounds(self) -> None:
        """line_start/line_end bracket a line's content without its newline."""
        data = b"one\n  two\nthree"
        index = LineIndex(data)
        assert index.line_count == 3
        assert index.line_start(2) == 4
        assert data[index.line_start(2):index.line_end(2)] == b"  two"
        assert index.line_end(3) == len(data)

    def test_indentation(self) -> None:
        """Leading spaces and tabs of a line are returned verbatim."""
        index = LineIndex(b"fn f() {\n    \tloop {}\n}\n")
        assert index.indentation(2) == "    \t"
        assert index.indentation(1) == ""

    def test_terminator_follows_the_file(self) -> None:
        """CRLF and LF lines report their own ending; a bare last line borrows the file's."""
        crlf = LineIndex(b"one\r\ntwo\r\nthree")
        assert crlf.terminator(1) == "\r\n"
        assert crlf.terminator(3) == "\r\n"
        assert LineIndex(b"one\ntwo").terminator(2) == "\n"
        assert LineIndex(b"single").terminator(1) == "\n"
