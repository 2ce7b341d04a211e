"""Unit tests for report aggregation and exit status."""

from rust_codestyle.domain.entities import ExitStatus, FileResult, Mode, RunReport, Violation
from rust_codestyle.domain.errors import FixConflict, ParseError


def violation(path: str, line: int, rule: str = "loops", fixable: bool = True) -> Violation:
    return Violation(rule, path, line, 5, "message", fixable)


class TestViolation:
    """Ordering of violations."""

    def test_sort_key_orders_by_path_line_column_rule(self) -> None:
        """Report order is path, then position, then rule name."""
        items = [
            Violation("loops", "b.rs", 1, 1, "m"),
            Violation("loops", "a.rs", 2, 1, "m"),
            Violation("embed-simple-vars", "a.rs", 2, 1, "m"),
            Violation("loops", "a.rs", 1, 9, "m"),
        ]
        ordered = sorted(items, key=Violation.sort_key)
        assert [(v.path, v.line, v.column, v.rule) for v in ordered] == [
            ("a.rs", 1, 9, "loops"),
            ("a.rs", 2, 1, "embed-simple-vars"),
            ("a.rs", 2, 1, "loops"),
            ("b.rs", 1, 1, "loops"),
        ]

    def test_with_path(self) -> None:
        """Only the path changes."""
        moved = violation("a.rs", 3).with_path("src/a.rs")
        assert moved == violation("src/a.rs", 3)


class TestRunReport:
    """Aggregation and status."""

    def test_empty_run_is_clean(self) -> None:
        """No files, nothing to report."""
        report = RunReport(Mode.ASSERT)
        assert report.status is ExitStatus.CLEAN
        assert report.exit_code == 0

    def test_assert_mode_violations(self) -> None:
        """Violations from all files, sorted by path."""
        report = RunReport(Mode.ASSERT, (
            FileResult("src/b.rs", violations=(violation("src/b.rs", 1),)),
            FileResult("src/a.rs", violations=(violation("src/a.rs", 7),)),
        ))
        assert [v.path for v in report.violations] == ["src/a.rs", "src/b.rs"]
        assert report.status is ExitStatus.VIOLATIONS
        assert report.exit_code == 1

    def test_format_mode_counts_only_remaining(self) -> None:
        """Fixed violations do not fail a format run."""
        report = RunReport(Mode.FORMAT, (
            FileResult("src/a.rs", violations=(violation("src/a.rs", 1),),
                       fixed_text="fixed", fixed_count=1),
        ))
        assert report.status is ExitStatus.CLEAN
        assert report.fixed_count == 1

    def test_format_mode_remaining(self) -> None:
        """Manual violations fail a format run."""
        left = violation("src/a.rs", 1, "instrument", fixable=False)
        report = RunReport(Mode.FORMAT, (
            FileResult("src/a.rs", violations=(left,), remaining=(left,)),
        ))
        assert report.remaining == [left]
        assert report.status is ExitStatus.VIOLATIONS

    def test_parse_error_outranks_violations(self) -> None:
        """One broken file makes the run an error, whatever else happened."""
        error = ParseError("src/bad.rs", 2, 3, "unexpected `}`")
        report = RunReport(Mode.ASSERT, (
            FileResult("src/a.rs", violations=(violation("src/a.rs", 1),)),
            FileResult("src/bad.rs", parse_error=error),
        ))
        assert report.parse_errors == [error]
        assert report.status is ExitStatus.ERROR
        assert report.exit_code == 1

    def test_conflicts_are_errors(self) -> None:
        """A fix that did not converge is an internal error."""
        conflict = FixConflict("loops", "src/a.rs", 1, 1, "message")
        report = RunReport(Mode.FORMAT, (FileResult("src/a.rs", conflicts=(conflict,)),))
        assert report.conflicts == [conflict]
        assert report.status is ExitStatus.ERROR

    def test_changed(self) -> None:
        """A file is changed only when it has new text."""
        assert FileResult("a.rs", fixed_text="x").changed
        assert not FileResult("a.rs").changed
