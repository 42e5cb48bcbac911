"""Run the policy catalog over files and directories."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Union

from guardrails_policy.domain.config import ConfigurationLoader
from guardrails_policy.domain.constants import PolicyKind, PolicyScope
from guardrails_policy.domain.engine import TraversalEngine
from guardrails_policy.domain.entities import AnalysisRun, FileReport, ToolingError
from guardrails_policy.domain.exceptions import ParseError
from guardrails_policy.domain.protocols import (
    FileSystemProtocol,
    SourceParserProtocol,
    TelemetryPort,
)
from guardrails_policy.domain.registry import PolicyRegistry
from guardrails_policy.domain.rules import PolicyCheck

logger = logging.getLogger(__name__)


class RunStaticAnalysisUseCase:
    """
    Collects source files, parses each one and runs the applicable checks.

    Files are independent, so they run on a thread pool of `jobs` workers;
    reports come back sorted by path whatever the completion order.
    """

    def __init__(
        self,
        registry: PolicyRegistry,
        parser: SourceParserProtocol,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        config_loader: ConfigurationLoader,
        engine: Optional[TraversalEngine] = None,
    ) -> None:
        self.registry = registry
        self.parser = parser
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.config_loader = config_loader
        self.engine = engine or TraversalEngine(config_loader.time_budget_seconds)

    def collect_files(self, paths: Sequence[str]) -> list[str]:
        """Supported source files below `paths`, de-duplicated, in sorted order."""
        seen: set[str] = set()
        files: list[str] = []
        for path in paths:
            if not self.filesystem.exists(path):
                self.telemetry.warning(f"Path not found: {path}")
                continue
            for file_path in self.filesystem.walk_files(path, self.config_loader.exclude_dirs):
                normalized = self.filesystem.normalize(file_path)
                if normalized in seen or not self.parser.supports(normalized):
                    continue
                seen.add(normalized)
                files.append(normalized)
        return sorted(files)

    def check_file(self, file_path: str, checks: Sequence[PolicyCheck]) -> FileReport:
        """Parse and check one file; read and parse failures become tooling errors."""
        if not self.engine.applicable_checks(file_path, checks):
            return FileReport(file_path=file_path)
        try:
            text = self.filesystem.read_text(file_path)
            source_file = self.parser.parse(file_path, text)
        except (OSError, UnicodeDecodeError, ParseError) as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            return FileReport(
                file_path=file_path,
                tooling_errors=(ToolingError(file_path=file_path, message=str(exc)),),
            )
        return self.engine.run_checks(source_file, checks)

    def execute(
        self,
        paths: Sequence[str],
        scope: Optional[Union[PolicyScope, str]] = None,
        kind: Optional[Union[PolicyKind, str]] = None,
        workspace: Optional[str] = None,
        jobs: Optional[int] = None,
    ) -> AnalysisRun:
        checks = self.registry.checks(
            scope=scope,
            kind=kind,
            workspace=workspace,
            disabled=self.config_loader.disabled_policies,
        )
        files = self.collect_files(paths)
        self.telemetry.step(f"Checking {len(files)} file(s) against {len(checks)} policies...")
        workers = max(1, jobs or self.config_loader.jobs)
        if workers == 1 or len(files) < 2:
            reports = [self.check_file(file_path, checks) for file_path in files]
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                reports = list(pool.map(lambda file_path: self.check_file(file_path, checks), files))
        run = AnalysisRun(reports=tuple(sorted(reports, key=lambda report: report.file_path)))
        logger.debug(
            "Run finished: %d errors, %d warnings, %d tooling errors",
            run.error_count,
            run.warning_count,
            len(run.tooling_errors),
        )
        return run
