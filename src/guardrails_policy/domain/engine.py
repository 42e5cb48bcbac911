"""Traversal & reporting engine: one pre-order walk, every matching check per node."""

import logging
import time
from typing import Callable, Optional, Sequence

from guardrails_policy.domain.entities import Diagnostic, FileReport, SourceFile, ToolingError
from guardrails_policy.domain.rules import CheckContext, PolicyCheck
from guardrails_policy.domain.rules.syntax import iter_preorder

logger = logging.getLogger(__name__)


class TraversalEngine:
    """
    Runs PolicyChecks over a parsed SourceFile.

    Holds no per-file state, so one engine serves concurrent traversals.
    A visitor that raises is disabled for the rest of that file and recorded
    as a ToolingError; the other checks keep running.
    """

    def __init__(
        self,
        time_budget_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.time_budget_seconds = time_budget_seconds
        self._clock = clock

    def applicable_checks(self, file_path: str, checks: Sequence[PolicyCheck]) -> list[PolicyCheck]:
        """Checks whose file pattern matches, in registration order."""
        return [check for check in checks if check.matches(file_path)]

    def run_checks(self, source_file: SourceFile, checks: Sequence[PolicyCheck]) -> FileReport:
        active = self.applicable_checks(source_file.path, checks)
        diagnostics: list[Diagnostic] = []
        tooling_errors: list[ToolingError] = []
        if not active:
            return FileReport(file_path=source_file.path)

        # Ids are only unique per scope, so contexts pair with checks by position.
        running = [(check, CheckContext(source_file, check, diagnostics)) for check in active]
        checks_run = tuple(check.id for check in active)
        deadline = (
            self._clock() + self.time_budget_seconds if self.time_budget_seconds is not None else None
        )

        for node in iter_preorder(source_file.tree):
            if deadline is not None and self._clock() > deadline:
                tooling_errors.append(
                    ToolingError(
                        file_path=source_file.path,
                        message=(
                            f"time budget of {self.time_budget_seconds}s exceeded; "
                            f"stopped {len(running)} check(s) at line {node.start.line}"
                        ),
                        line=node.start.line,
                        column=node.start.column,
                    )
                )
                logger.warning("Time budget exceeded for %s", source_file.path)
                break
            for entry in list(running):
                check, context = entry
                try:
                    check.visitor(node, context)
                except Exception as exc:  # noqa: BLE001 - any visitor fault is isolated per check
                    logger.warning(
                        "Policy %s failed on %s:%s: %s",
                        check.id,
                        source_file.path,
                        node.start.line,
                        exc,
                    )
                    tooling_errors.append(
                        ToolingError(
                            file_path=source_file.path,
                            message=f"internal check error: {exc}",
                            policy_id=check.id,
                            line=node.start.line,
                            column=node.start.column,
                        )
                    )
                    running.remove(entry)
            if not running:
                break

        return FileReport(
            file_path=source_file.path,
            diagnostics=tuple(diagnostics),
            tooling_errors=tuple(tooling_errors),
            checks_run=checks_run,
        )
