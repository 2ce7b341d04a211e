"""Per-file check and fix pipeline. Pure: text in, FileResult out."""

from collections import Counter
from typing import Sequence

from rust_codestyle.domain.entities import FileResult, Violation
from rust_codestyle.domain.errors import FixConflict, ParseError
from rust_codestyle.domain.rules import Rule, RuleName
from rust_codestyle.domain.syntax import SourceFile, parse

MAX_FIX_PASSES = 10


def _conflict(violation: Violation) -> FixConflict:
    return FixConflict(violation.rule, violation.path, violation.line, violation.column,
                       violation.message)


class FilePipeline:
    """
    Runs a fixed rule sequence over one file.

    Rules are applied strictly in order in format mode; the text is re-parsed
    after every fix pass so each rule sees a fresh tree.
    """

    def __init__(self, rules: Sequence[Rule], max_passes: int = MAX_FIX_PASSES) -> None:
        self.rules = tuple(rules)
        self.max_passes = max_passes

    def _check_all(self, source: SourceFile) -> list[Violation]:
        found: list[Violation] = []
        for rule in self.rules:
            found.extend(rule.check(source))
        return sorted(found, key=Violation.sort_key)

    def check(self, path: str, text: str) -> FileResult:
        """Assert mode: report violations only."""
        try:
            source = parse(text, path)
        except ParseError as exc:
            return FileResult(path=path, parse_error=exc)
        return FileResult(path=path, violations=tuple(self._check_all(source)))

    def _fix_rule(self, rule: Rule, source: SourceFile) -> tuple[SourceFile, list[FixConflict]]:
        current = source
        for _ in range(self.max_passes):
            new_text = rule.fix(current)
            if new_text == current.text:
                break
            try:
                current = parse(new_text, source.path)
            except ParseError as exc:
                # Broken output is discarded; the rule's changes are rolled back.
                return source, [FixConflict(
                    rule.name.value, source.path, exc.line, exc.column,
                    f"fix produced unparseable code: {exc.message}",
                )]
        return current, []

    def format(self, path: str, text: str) -> FileResult:
        """Format mode: fix what can be fixed, then re-check everything."""
        try:
            source = parse(text, path)
        except ParseError as exc:
            return FileResult(path=path, parse_error=exc)

        before = self._check_all(source)
        current = source
        conflicts: list[FixConflict] = []
        for rule in self.rules:
            if rule.fixable:
                current, failed = self._fix_rule(rule, current)
                conflicts.extend(failed)

        after = self._check_all(current) if current is not source else before
        fixable_rules = {rule.name.value for rule in self.rules if rule.fixable}
        remaining = []
        for violation in after:
            if violation.fixable and violation.rule in fixable_rules:
                conflicts.append(_conflict(violation))
            else:
                remaining.append(violation)

        insta = RuleName.INSTA_INLINE_SNAPSHOT.value
        # External snapshots are only stale once every assertion in the file is inline.
        snapshots_stale = any(v.rule == insta for v in before) \
            and not any(v.rule == insta for v in after)

        before_counts = Counter(v.rule for v in before)
        after_counts = Counter(v.rule for v in after)
        fixed = sum(max(0, count - after_counts[rule]) for rule, count in before_counts.items())

        return FileResult(
            path=path,
            violations=tuple(before),
            fixed_text=current.text if current.text != text else None,
            remaining=tuple(remaining),
            conflicts=tuple(sorted(conflicts, key=FixConflict.sort_key)),
            fixed_count=fixed,
            snapshots_stale=snapshots_stale,
        )
