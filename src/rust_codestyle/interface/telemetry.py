"""Console and log telemetry for the CLI."""

import logging

from rich.console import Console
from rich.markup import escape

from rust_codestyle.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """
    Status lines go to stderr through rich; every message is also logged.

    stdout is reserved for the report so it can be piped or snapshotted.
    """

    def __init__(self, name: str, color: str, welcome: str) -> None:
        self.name = name
        self.color = color
        self.welcome = welcome
        self.console = Console(stderr=True)
        self.logger = logging.getLogger(name)
        self.verbose = False

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose

    def handshake(self) -> None:
        if self.verbose:
            self.console.print(f"[bold {self.color}]{self.name}[/] {self.welcome}")
        self.logger.info(self.welcome)

    def step(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[{self.color}]>[/] {escape(message)}", highlight=False)
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]warning:[/] {escape(message)}", highlight=False)
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/] {escape(message)}", highlight=False)
        self.logger.error(message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/]", highlight=False)
        self.logger.debug(message)
