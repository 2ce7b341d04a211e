"""CLI entry points for codestyle - Thin Controller using Typer."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from rust_codestyle.domain.config import RuleOptions
from rust_codestyle.domain.entities import RunReport
from rust_codestyle.domain.errors import ConfigurationError
from rust_codestyle.domain.protocols import TelemetryPort
from rust_codestyle.domain.rules import ALL_RULES
from rust_codestyle.infrastructure.config_file_loader import ConfigFileLoader
from rust_codestyle.interface.reporters import StyleReporter
from rust_codestyle.use_cases.apply_fixes import ApplyFixesUseCase
from rust_codestyle.use_cases.check_style import CheckStyleUseCase

EXIT_CONFIGURATION_ERROR = 2

# Rule flags are parsed from the extra arguments so unknown names surface as
# ConfigurationError rather than a generic usage error.
_RULE_FLAGS = {"allow_extra_args": True, "ignore_unknown_options": True}

_BOOL_WORDS = frozenset({"true", "false"})

_RULE_HELP = "Per-rule overrides, before or after the root: " + " ".join(
    f"--{rule.name.value}={'true' if rule.default_enabled else 'false'}" for rule in ALL_RULES)

_ROOT = typer.Argument(
    None, help="Crate or workspace root to scan (default: .)", show_default=False)
_VERBOSE = typer.Option(False, "--verbose", "-v", help="Print progress to stderr")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    config_loader: ConfigFileLoader
    reporter: StyleReporter
    check_style: CheckStyleUseCase
    apply_fixes: ApplyFixesUseCase


def parse_command_line(tokens: list[str]) -> tuple[str, dict[str, str]]:
    """
    Split the root from rule overrides, in any order.

    Overrides are `--name=value`, `--name value` (value `true` or `false`) or
    a bare `--name`, meaning true.
    """
    overrides: dict[str, str] = {}
    positional: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token.startswith("-"):
            positional.append(token)
            continue
        if not token.startswith("--") or len(token) == 2:
            raise ConfigurationError(f"unexpected argument `{token}`")
        name, has_value, value = token[2:].partition("=")
        if not has_value:
            if index < len(tokens) and tokens[index].strip().lower() in _BOOL_WORDS:
                value = tokens[index]
                index += 1
            else:
                value = "true"
        overrides[name] = value
    if len(positional) > 1:
        raise ConfigurationError(f"unexpected argument `{positional[1]}`")
    return (positional[0] if positional else "."), overrides


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_options(deps: CLIDependencies, root: str, flags: dict[str, str]) -> RuleOptions:
        """Defaults < Cargo.toml metadata < command-line flags."""
        return RuleOptions.resolve(deps.config_loader.load_rule_options(root), flags)

    @staticmethod
    def emit(deps: CLIDependencies, report: RunReport) -> None:
        typer.echo(deps.reporter.render(report), nl=False)
        sys.exit(report.exit_code)

    @staticmethod
    def prepare(deps: CLIDependencies, root: Optional[str], args: list[str],
                verbose: bool) -> tuple[str, RuleOptions]:
        """Resolve the run root and rule options; configuration errors exit with 2."""
        deps.telemetry.set_verbose(verbose)
        deps.telemetry.handshake()
        # Overrides placed before the root reach typer as the root argument.
        tokens = ([root] if root is not None else []) + list(args)
        try:
            target, flags = parse_command_line(tokens)
            if not Path(target).exists():
                raise ConfigurationError(f"path `{target}` does not exist")
            return target, CLIAppFactory.resolve_options(deps, target, flags)
        except ConfigurationError as exc:
            deps.telemetry.error(str(exc))
            sys.exit(EXIT_CONFIGURATION_ERROR)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="codestyle",
            help="codestyle: opinionated style checks and fixes for Rust sources",
            add_completion=False,
        )

        @app.command("assert", context_settings=_RULE_FLAGS, epilog=_RULE_HELP)
        def assert_style(
            ctx: typer.Context,
            root: Optional[str] = _ROOT,
            verbose: bool = _VERBOSE,
        ) -> None:
            """Report violations without modifying any file."""
            target, options = CLIAppFactory.prepare(deps, root, ctx.args, verbose)
            report = deps.check_style.execute(target, options)
            CLIAppFactory.emit(deps, report)

        @app.command("format", context_settings=_RULE_FLAGS, epilog=_RULE_HELP)
        def format_style(
            ctx: typer.Context,
            root: Optional[str] = _ROOT,
            verbose: bool = _VERBOSE,
        ) -> None:
            """Apply automatic fixes, then report what needs manual fixing."""
            target, options = CLIAppFactory.prepare(deps, root, ctx.args, verbose)
            report = deps.apply_fixes.execute(target, options)
            CLIAppFactory.emit(deps, report)

        @app.command("rules")
        def list_rules() -> None:
            """List the available rules and their defaults."""
            table = Table(title="codestyle rules")
            table.add_column("Rule", style="bold")
            table.add_column("Default")
            table.add_column("Fix")
            table.add_column("Description")
            for rule in ALL_RULES:
                table.add_row(
                    rule.name.value,
                    "on" if rule.default_enabled else "off",
                    "auto" if rule.fixable else "manual",
                    rule.description,
                )
            Console().print(table)

        return app
