"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from rust_codestyle.infrastructure.di.container import CodestyleContainer
from rust_codestyle.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = CodestyleContainer()
    deps = CLIDependencies(
        telemetry=container.get_telemetry_port(),
        config_loader=container.get_config_file_loader(),
        reporter=container.get_reporter(),
        check_style=container.get_check_style_use_case(),
        apply_fixes=container.get_apply_fixes_use_case(),
    )
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
