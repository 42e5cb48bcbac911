from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from guardrails_policy.domain.constants import Dialect, PolicyKind, PolicyScope, Severity

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode


@dataclass(frozen=True)
class Position:
    """1-based line and column."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceFile:
    """A parsed source file handed to the traversal engine."""

    path: str
    text: str
    tree: "SyntaxNode"
    dialect: Dialect

    @property
    def file_name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def directory_name(self) -> str:
        """Name of the directory that contains the file ('' at the root)."""
        parts = self.path.rsplit("/", 2)
        return parts[-2] if len(parts) >= 2 else ""


@dataclass(frozen=True)
class PolicyMetadata:
    """Human-facing description of a policy: what it enforces and why."""

    what: str = ""
    why: str = ""
    failure: str = ""
    policy_path: str = ""


@dataclass(frozen=True)
class Diagnostic:
    """A policy violation found in the target code."""

    file_path: str
    line: int
    column: int
    end_line: int
    end_column: int
    message: str
    severity: Severity
    policy_id: str
    what: str = ""
    why: str = ""
    policy_path: str = ""

    @property
    def location(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file_path,
            "line": self.line,
            "column": self.column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
            "severity": self.severity.value,
            "ruleId": self.policy_id,
            "message": self.message,
            "what": self.what,
            "why": self.why,
            "policyPath": self.policy_path,
        }


@dataclass(frozen=True)
class ToolingError:
    """
    A fault in the tooling rather than in the target code.

    Raised visitors, exhausted time budgets and unparsable files end up here.
    policy_id is None when the fault is not attributable to a single check.
    """

    file_path: str
    message: str
    policy_id: Optional[str] = None
    line: int = 0
    column: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file_path,
            "line": self.line,
            "column": self.column,
            "ruleId": self.policy_id,
            "message": self.message,
        }


@dataclass(frozen=True)
class FileReport:
    """Everything one traversal produced for one file."""

    file_path: str
    diagnostics: tuple[Diagnostic, ...] = ()
    tooling_errors: tuple[ToolingError, ...] = ()
    checks_run: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisRun:
    """Aggregated result of a directory run, reports ordered by file path."""

    reports: tuple[FileReport, ...] = ()

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for report in self.reports for d in report.diagnostics]

    @property
    def tooling_errors(self) -> list[ToolingError]:
        return [e for report in self.reports for e in report.tooling_errors]

    @property
    def files_checked(self) -> int:
        return len(self.reports)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.WARNING)

    def has_failures(self, fail_on_warnings: bool = False) -> bool:
        """True when the run should fail a CI gate."""
        if self.error_count or self.tooling_errors:
            return True
        return fail_on_warnings and self.warning_count > 0


@dataclass(frozen=True)
class PolicyDescriptor:
    """Listing view of a registered check. Never carries the visitor."""

    id: str
    scope: PolicyScope
    kind: PolicyKind
    workspace: str
    layer: str
    description: str
    why: str = ""
    policy_path: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "scope": self.scope.value,
            "kind": self.kind.value,
            "workspace": self.workspace,
            "layer": self.layer,
            "description": self.description,
            "why": self.why,
            "policyPath": self.policy_path,
        }


@dataclass(frozen=True)
class PolicySelection:
    """Ordered policy documents that apply to one target file."""

    target_file_path: str
    policy_root: Path
    category: str
    documents: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def document_names(self) -> list[str]:
        return [path.name for path in self.documents]


@dataclass(frozen=True)
class PolicyDocument:
    name: str
    path: Path
    content: str


@dataclass(frozen=True)
class ReviewPacket:
    """Policy documents and target code bundled for a downstream reviewer."""

    target_file_path: str
    target_code: str
    documents: tuple[PolicyDocument, ...]
    instruction: str
