"""Plain-text rendering of run reports."""

from rust_codestyle.domain.entities import Mode, RunReport, Violation
from rust_codestyle.domain.errors import FixConflict, ParseError

PREFIX = "codestyle"


def format_violation(violation: Violation) -> str:
    return (f"[{violation.rule}] {violation.path}:{violation.line}:{violation.column}: "
            f"{violation.message}")


def format_parse_error(error: ParseError) -> str:
    return f"[parse-error] {error.path}:{error.line}:{error.column}: {error.message}"


def format_conflict(conflict: FixConflict) -> str:
    return (f"[fix-conflict] [{conflict.rule}] {conflict.path}:{conflict.line}:"
            f"{conflict.column}: {conflict.message}")


class StyleReporter:
    """
    Renders a RunReport as text. Pure: the same report always yields the
    same string, whatever order the files were processed in.
    """

    def render(self, report: RunReport) -> str:
        lines: list[str] = []
        if report.mode is Mode.ASSERT:
            violations = report.violations
            if violations:
                lines.append(f"{PREFIX}: found {len(violations)} violation(s):")
                lines.append("")
                lines.extend(format_violation(v) for v in violations)
            elif not report.parse_errors:
                lines.append(f"{PREFIX}: all checks passed")
        else:
            lines.append(f"{PREFIX}: fixed {report.fixed_count} violation(s)")
            remaining = report.remaining
            if remaining:
                lines.append(f"{PREFIX}: {len(remaining)} violation(s) need manual fixing:")
                lines.append("")
                lines.extend(format_violation(v) for v in remaining)

        errors = report.parse_errors
        if errors:
            if lines:
                lines.append("")
            lines.append(f"{PREFIX}: failed to parse {len(errors)} file(s):")
            lines.extend(format_parse_error(e) for e in errors)

        conflicts = report.conflicts
        if conflicts:
            if lines:
                lines.append("")
            lines.append(f"{PREFIX}: internal error: {len(conflicts)} fix(es) did not converge:")
            lines.extend(format_conflict(c) for c in conflicts)
        return "\n".join(lines) + "\n"
