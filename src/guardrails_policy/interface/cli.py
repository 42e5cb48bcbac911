"""CLI entry points for guardrails - Thin Controller using Typer."""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional

import typer

from guardrails_policy.domain.config import ConfigurationLoader
from guardrails_policy.domain.engine import TraversalEngine
from guardrails_policy.domain.exceptions import ConfigurationError, SelectionError
from guardrails_policy.domain.protocols import (
    FileSystemProtocol,
    PolicyDocumentLoaderProtocol,
    SourceParserProtocol,
    TelemetryPort,
)
from guardrails_policy.domain.registry import PolicyRegistry
from guardrails_policy.domain.responsibilities import RESPONSIBILITIES
from guardrails_policy.interface.reporters import AnalysisReporter
from guardrails_policy.use_cases.list_policies import ListPoliciesUseCase
from guardrails_policy.use_cases.prepare_review import PrepareReviewUseCase
from guardrails_policy.use_cases.run_static_analysis import RunStaticAnalysisUseCase
from guardrails_policy.use_cases.select_policies import SELECTORS, PolicySelector

DEFAULT_SELECTOR = "server-domain-model"


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    registry_provider: Callable[[], PolicyRegistry]
    parser: SourceParserProtocol
    filesystem: FileSystemProtocol
    engine: TraversalEngine
    document_loader: PolicyDocumentLoaderProtocol
    reporters: Mapping[str, AnalysisReporter]


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_paths(paths: Optional[list[Path]]) -> list[str]:
        """Explicit paths, else the current directory."""
        if not paths:
            return ["."]
        return [str(path) for path in paths]

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="guardrails",
            help="Guardrails: architecture policy checks for TypeScript and Python codebases.",
            add_completion=False,
        )

        def _fail(message: str, code: int) -> typer.Exit:
            deps.telemetry.error(message)
            return typer.Exit(code=code)

        def _reporter(output_format: str) -> AnalysisReporter:
            reporter = deps.reporters.get(output_format)
            if reporter is None:
                raise _fail(
                    f"unknown format '{output_format}'; expected one of: {', '.join(deps.reporters)}", 2
                )
            return reporter

        def _selector(name: str) -> PolicySelector:
            variant = SELECTORS.get(name)
            if variant is None:
                raise _fail(f"unknown selector '{name}'; expected one of: {', '.join(SELECTORS)}", 2)
            return PolicySelector(variant, deps.filesystem)

        def _policy_root(policy_root: Optional[Path]) -> Optional[str]:
            if policy_root is not None:
                return str(policy_root)
            return deps.config_loader.policy_root

        @app.callback()
        def main(
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
        ) -> None:
            """Guardrails policy engine."""
            if verbose:
                logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

        @app.command()
        def check(
            paths: Optional[list[Path]] = typer.Argument(None, help="Files or directories (default: .)"),  # noqa: B008
            scope: Optional[str] = typer.Option(None, "--scope", help="horizontal or vertical"),
            kind: Optional[str] = typer.Option(None, "--type", help="static or semantic"),
            workspace: Optional[str] = typer.Option(None, "--workspace", help="server or web"),
            output_format: str = typer.Option("text", "--format", help="text, markdown or json"),
            jobs: Optional[int] = typer.Option(None, "--jobs", "-j", min=1, help="Files checked in parallel"),
            fail_on_warnings: bool = typer.Option(
                False, "--fail-on-warnings", help="Exit 1 on warnings as well as errors"
            ),
        ) -> None:
            """Run the policy checks over files and directories."""
            reporter = _reporter(output_format)
            deps.telemetry.handshake()
            try:
                use_case = RunStaticAnalysisUseCase(
                    registry=deps.registry_provider(),
                    parser=deps.parser,
                    filesystem=deps.filesystem,
                    telemetry=deps.telemetry,
                    config_loader=deps.config_loader,
                    engine=deps.engine,
                )
                run = use_case.execute(
                    CLIAppFactory.resolve_paths(paths),
                    scope=scope,
                    kind=kind,
                    workspace=workspace,
                    jobs=jobs,
                )
            except ConfigurationError as exc:
                raise _fail(str(exc), 2) from exc
            typer.echo(reporter.render_run(run))
            if run.has_failures(fail_on_warnings or deps.config_loader.fail_on_warnings):
                deps.telemetry.step(
                    f"Policy check failed: {run.error_count} error(s), {run.warning_count} warning(s)."
                )
                raise typer.Exit(code=1)
            deps.telemetry.step("Policy check passed.")

        @app.command("list-policies")
        def list_policies(
            scope: Optional[str] = typer.Option(None, "--scope", help="horizontal or vertical"),
            kind: Optional[str] = typer.Option(None, "--type", help="static or semantic"),
            output_format: str = typer.Option("markdown", "--format", help="text, markdown or json"),
        ) -> None:
            """List registered policies, grouped by workspace and layer."""
            reporter = _reporter(output_format)
            try:
                descriptors = ListPoliciesUseCase(deps.registry_provider()).execute(scope=scope, type=kind)
            except ConfigurationError as exc:
                raise _fail(str(exc), 2) from exc
            typer.echo(reporter.render_policies(descriptors))

        @app.command()
        def tools(
            call: Optional[str] = typer.Option(None, "--call", help="Tool id to invoke"),
            kind: Optional[str] = typer.Option(None, "--type", help="Tool argument: static or semantic"),
        ) -> None:
            """Print the discovery tool records, or the result of one tool call."""
            if call is None:
                typer.echo(json.dumps(ListPoliciesUseCase.describe_responsibilities(), indent=2))
                return
            responsibility = next((r for r in RESPONSIBILITIES if r.id == call), None)
            if responsibility is None:
                known = ", ".join(r.id for r in RESPONSIBILITIES)
                raise _fail(f"unknown tool '{call}'; expected one of: {known}", 2)
            arguments = {"type": kind} if kind is not None else {}
            try:
                descriptors = ListPoliciesUseCase(deps.registry_provider()).execute_tool(
                    responsibility, arguments
                )
            except ConfigurationError as exc:
                raise _fail(str(exc), 2) from exc
            typer.echo(json.dumps([d.to_dict() for d in descriptors], indent=2, ensure_ascii=False))

        @app.command()
        def select(
            target: str = typer.Argument(..., help="File to select policy documents for"),
            selector: str = typer.Option(DEFAULT_SELECTOR, "--selector", help="Selector variant"),
            policy_root: Optional[Path] = typer.Option(None, "--policy-root", help="Directory holding policy/"),
        ) -> None:
            """Print the policy documents that apply to TARGET, in review order."""
            policy_selector = _selector(selector)
            try:
                selection = asyncio.run(policy_selector.select_policies(target, _policy_root(policy_root)))
            except SelectionError as exc:
                raise _fail(str(exc), 1) from exc
            for document in selection.documents:
                typer.echo(str(document))

        @app.command()
        def review(
            target: str = typer.Argument(..., help="File to review"),
            selector: str = typer.Option(DEFAULT_SELECTOR, "--selector", help="Selector variant"),
            policy_root: Optional[Path] = typer.Option(None, "--policy-root", help="Directory holding policy/"),
        ) -> None:
            """Print a review instruction bundling TARGET with its policy documents."""
            use_case = PrepareReviewUseCase(_selector(selector), deps.document_loader, deps.filesystem)
            try:
                packet = asyncio.run(use_case.execute(target, _policy_root(policy_root)))
            except SelectionError as exc:
                raise _fail(str(exc), 1) from exc
            except (OSError, UnicodeDecodeError) as exc:
                raise _fail(f"cannot read {target}: {exc}", 1) from exc
            typer.echo(packet.instruction)

        return app
