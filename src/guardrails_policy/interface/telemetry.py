"""Terminal telemetry: banner and progress lines on stderr, mirrored to logging."""

import logging

import typer

from guardrails_policy.domain.constants import GUARDRAILS_BANNER


class _Console:
    """Writes styled lines to stderr so stdout stays reserved for reports."""

    def print(self, message: str, color: str = "white", bold: bool = False) -> None:
        typer.echo(typer.style(message, fg=color, bold=bold), err=True)


class ProjectTelemetry:
    """TelemetryPort implementation for the guardrails CLI."""

    def __init__(self, project_name: str, color: str, welcome: str) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome = welcome
        self.console = _Console()
        self.logger = logging.getLogger(f"guardrails.{project_name.lower()}")

    def handshake(self) -> None:
        self.console.print(GUARDRAILS_BANNER)
        self.console.print(f"[{self.project_name}] {self.welcome}", color=self.color, bold=True)
        self.logger.info("%s: %s", self.project_name, self.welcome)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.project_name}] {message}", color=self.color)
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[{self.project_name}] WARNING: {message}", color="yellow")
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.console.print(f"[{self.project_name}] ERROR: {message}", color="red", bold=True)
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
