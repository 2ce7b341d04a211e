from typing import TYPE_CHECKING, Any, cast

from rust_codestyle.infrastructure.config_file_loader import ConfigFileLoader
from rust_codestyle.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from rust_codestyle.infrastructure.gateways.snapshot_gateway import SnapshotGateway
from rust_codestyle.interface.reporters import StyleReporter
from rust_codestyle.interface.telemetry import ProjectTelemetry
from rust_codestyle.use_cases.apply_fixes import ApplyFixesUseCase
from rust_codestyle.use_cases.check_style import CheckStyleUseCase

if TYPE_CHECKING:
    from rust_codestyle.domain.protocols import TelemetryPort


class CodestyleContainer:
    """Dependency Injection Container for codestyle."""

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        telemetry = ProjectTelemetry("rust_codestyle", "cyan", "Rust style check")
        self.register_singleton("TelemetryPort", telemetry)
        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        snapshots = SnapshotGateway()
        self.register_singleton("SnapshotGateway", snapshots)
        self.register_singleton("ConfigFileLoader", ConfigFileLoader())
        self.register_singleton("StyleReporter", StyleReporter())

        # Use cases
        self.register_singleton(
            "CheckStyleUseCase", CheckStyleUseCase(filesystem, telemetry))
        self.register_singleton(
            "ApplyFixesUseCase", ApplyFixesUseCase(filesystem, telemetry, snapshots))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_config_file_loader(self) -> ConfigFileLoader:
        return cast(ConfigFileLoader, self.get("ConfigFileLoader"))

    def get_reporter(self) -> StyleReporter:
        return cast(StyleReporter, self.get("StyleReporter"))

    def get_check_style_use_case(self) -> CheckStyleUseCase:
        return cast(CheckStyleUseCase, self.get("CheckStyleUseCase"))

    def get_apply_fixes_use_case(self) -> ApplyFixesUseCase:
        return cast(ApplyFixesUseCase, self.get("ApplyFixesUseCase"))
