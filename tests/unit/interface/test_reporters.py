"""Unit tests for StyleReporter."""

from rust_codestyle.domain.entities import FileResult, Mode, RunReport, Violation
from rust_codestyle.domain.errors import FixConflict, ParseError
from rust_codestyle.interface.reporters import StyleReporter, format_violation

LOOP = Violation("loops", "src/main.rs", 2, 5,
                 "Endless loop without `//LOOP` comment", fixable=True)
INSTRUMENT = Violation("instrument", "src/lib.rs", 1, 10,
                       "No #[instrument] on async fn `serve`")


class TestFormatViolation:
    """One line per violation."""

    def test_layout(self) -> None:
        """``[rule] path:line:col: message``."""
        assert format_violation(INSTRUMENT) == \
            "[instrument] src/lib.rs:1:10: No #[instrument] on async fn `serve`"


class TestAssertRendering:
    """Assert mode output."""

    def test_clean(self) -> None:
        """A single success line."""
        assert StyleReporter().render(RunReport(Mode.ASSERT)) == "codestyle: all checks passed\n"

    def test_violations_sorted_by_path(self) -> None:
        """Header, blank line, then the violations in path order."""
        report = RunReport(Mode.ASSERT, (
            FileResult("src/main.rs", violations=(LOOP,)),
            FileResult("src/lib.rs", violations=(INSTRUMENT,)),
        ))
        assert StyleReporter().render(report) == (
            "codestyle: found 2 violation(s):\n"
            "\n"
            "[instrument] src/lib.rs:1:10: No #[instrument] on async fn `serve`\n"
            "[loops] src/main.rs:2:5: Endless loop without `//LOOP` comment\n"
        )

    def test_parse_errors_only(self) -> None:
        """No success line when a file failed to parse."""
        error = ParseError("src/bad.rs", 3, 1, "missing `}`")
        report = RunReport(Mode.ASSERT, (FileResult("src/bad.rs", parse_error=error),))
        assert StyleReporter().render(report) == (
            "codestyle: failed to parse 1 file(s):\n"
            "[parse-error] src/bad.rs:3:1: missing `}`\n"
        )

    def test_violations_and_parse_errors(self) -> None:
        """Sections are separated by a blank line."""
        error = ParseError("src/bad.rs", 3, 1, "missing `}`")
        report = RunReport(Mode.ASSERT, (
            FileResult("src/bad.rs", parse_error=error),
            FileResult("src/main.rs", violations=(LOOP,)),
        ))
        assert StyleReporter().render(report).splitlines() == [
            "codestyle: found 1 violation(s):",
            "",
            "[loops] src/main.rs:2:5: Endless loop without `//LOOP` comment",
            "",
            "codestyle: failed to parse 1 file(s):",
            "[parse-error] src/bad.rs:3:1: missing `}`",
        ]

    def test_render_is_independent_of_file_order(self) -> None:
        """The same results in any order render identically."""
        files = (
            FileResult("src/main.rs", violations=(LOOP,)),
            FileResult("src/lib.rs", violations=(INSTRUMENT,)),
        )
        reporter = StyleReporter()
        assert reporter.render(RunReport(Mode.ASSERT, files)) == \
            reporter.render(RunReport(Mode.ASSERT, files[::-1]))


class TestFormatRendering:
    """Format mode output."""

    def test_all_fixed(self) -> None:
        """Only the fixed count."""
        report = RunReport(Mode.FORMAT, (
            FileResult("src/main.rs", violations=(LOOP,), fixed_text="x", fixed_count=1),
        ))
        assert StyleReporter().render(report) == "codestyle: fixed 1 violation(s)\n"

    def test_remaining(self) -> None:
        """Manual violations follow the fixed count."""
        report = RunReport(Mode.FORMAT, (
            FileResult("src/lib.rs", violations=(INSTRUMENT,), remaining=(INSTRUMENT,)),
        ))
        assert StyleReporter().render(report) == (
            "codestyle: fixed 0 violation(s)\n"
            "codestyle: 1 violation(s) need manual fixing:\n"
            "\n"
            "[instrument] src/lib.rs:1:10: No #[instrument] on async fn `serve`\n"
        )

    def test_conflicts(self) -> None:
        """Fix conflicts get their own section."""
        conflict = FixConflict("loops", "src/main.rs", 2, 5, "stuck")
        report = RunReport(Mode.FORMAT, (FileResult("src/main.rs", conflicts=(conflict,)),))
        assert StyleReporter().render(report).splitlines() == [
            "codestyle: fixed 0 violation(s)",
            "",
            "codestyle: internal error: 1 fix(es) did not converge:",
            "[fix-conflict] [loops] src/main.rs:2:5: stuck",
        ]
