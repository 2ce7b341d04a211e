"""Use case: format mode. Applies fixes and reports what is left."""

from typing import Optional

from rust_codestyle.domain.config import RuleOptions
from rust_codestyle.domain.entities import FileResult, Mode, RunReport
from rust_codestyle.domain.protocols import (
    FileSystemProtocol,
    SnapshotCleanupProtocol,
    TelemetryPort,
)
from rust_codestyle.use_cases.file_batch import FileBatchUseCase, LoadedFile
from rust_codestyle.use_cases.file_pipeline import FilePipeline


class ApplyFixesUseCase(FileBatchUseCase):
    """
    Fix the files under a root.

    Files are rewritten only when their text changed, after all rules ran.
    Stale pending insta snapshots are removed for every file where the snapshot
    rule fired.
    """

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        snapshots: SnapshotCleanupProtocol,
        max_workers: Optional[int] = None,
    ) -> None:
        super().__init__(filesystem, telemetry, max_workers)
        self.snapshots = snapshots

    def execute(self, root: str, options: RuleOptions) -> RunReport:
        rules = options.active_rules()
        self.telemetry.step(f"mode=format rules={','.join(r.name.value for r in rules)}")
        pipeline = FilePipeline(rules)
        files, unreadable = self._load(root)
        results = self._run(files, pipeline.format)

        by_path = {f.display_path: f for f in files}
        for result in results:
            self._handle_result(result, by_path[result.path])
        self._cleanup_snapshots(
            [by_path[r.path].absolute_path for r in results if r.snapshots_stale])

        report = RunReport(
            Mode.FORMAT, tuple(sorted(results + unreadable, key=lambda r: r.path)))
        self.telemetry.debug(
            f"fixed={report.fixed_count} remaining={len(report.remaining)} "
            f"conflicts={len(report.conflicts)}")
        return report

    def _handle_result(self, result: FileResult, loaded: LoadedFile) -> None:
        for conflict in result.conflicts:
            self.telemetry.error(
                f"file={result.path} rule={conflict.rule} action=fix-conflict "
                f"line={conflict.line}")
        if result.fixed_text is None:
            return
        self.filesystem.write_text(loaded.absolute_path, result.fixed_text)
        self.telemetry.step(f"file={result.path} action=rewrite fixed={result.fixed_count}")

    def _cleanup_snapshots(self, touched: list[str]) -> None:
        if not touched:
            return
        for removed in self.snapshots.remove_stale_snapshots(touched):
            self.telemetry.step(f"snapshot={removed} action=remove")
