"""Use case: assert mode. Reports violations without touching files."""

from rust_codestyle.domain.config import RuleOptions
from rust_codestyle.domain.entities import Mode, RunReport
from rust_codestyle.use_cases.file_batch import FileBatchUseCase
from rust_codestyle.use_cases.file_pipeline import FilePipeline


class CheckStyleUseCase(FileBatchUseCase):
    """Run every active rule's check over the files under a root."""

    def execute(self, root: str, options: RuleOptions) -> RunReport:
        rules = options.active_rules()
        self.telemetry.step(f"mode=assert rules={','.join(r.name.value for r in rules)}")
        pipeline = FilePipeline(rules)
        files, unreadable = self._load(root)
        results = self._run(files, pipeline.check)
        report = RunReport(
            Mode.ASSERT, tuple(sorted(results + unreadable, key=lambda r: r.path)))
        self.telemetry.debug(
            f"checked={len(files)} violations={len(report.violations)} "
            f"parse_errors={len(report.parse_errors)}")
        return report
