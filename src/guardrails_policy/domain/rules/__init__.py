"""AST checker factory: wraps a (file pattern, visitor) pair into a PolicyCheck."""

import re
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Union

from guardrails_policy.domain.constants import (
    KNOWN_LAYERS,
    POLICY_PACKAGE,
    PolicyKind,
    PolicyScope,
    Severity,
)
from guardrails_policy.domain.entities import Diagnostic, PolicyMetadata, SourceFile
from guardrails_policy.domain.exceptions import ConfigurationError

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode

PathPredicate = Callable[[str], bool]
FilePattern = Union[str, "re.Pattern[str]", PathPredicate]
Visitor = Callable[["SyntaxNode", "CheckContext"], None]

_WHY_RE = re.compile(r"^\s*Why:\s*(.+)$", re.MULTILINE)
_FAILURE_RE = re.compile(r"^\s*Failure:\s*(.+)$", re.MULTILINE)


@dataclass(frozen=True)
class PolicyCheck:
    """
    Immutable unit pairing a file matcher with a visitor.

    Carries no execution state; one instance is shared by every traversal,
    including concurrent ones.
    """

    id: str
    scope: PolicyScope
    kind: PolicyKind
    workspace: str
    layer: str
    visitor: Visitor = field(repr=False, compare=False)
    matcher: PathPredicate = field(repr=False, compare=False)
    excludes: tuple[PathPredicate, ...] = field(default=(), repr=False, compare=False)
    metadata: PolicyMetadata = field(default_factory=PolicyMetadata)

    @property
    def description(self) -> str:
        return self.metadata.what or self.id

    def matches(self, file_path: str) -> bool:
        """True when the normalized path is in scope for this check."""
        if not self.matcher(file_path):
            return False
        return not any(exclude(file_path) for exclude in self.excludes)


class CheckContext:
    """
    Per-file, per-check reporting context handed to every visitor call.

    report() is the only way a check produces a Diagnostic.
    """

    def __init__(self, source_file: SourceFile, check: PolicyCheck, sink: list[Diagnostic]) -> None:
        self.source_file = source_file
        self._check = check
        self._sink = sink

    @property
    def file_path(self) -> str:
        return self.source_file.path

    @property
    def file_name(self) -> str:
        return self.source_file.file_name

    @property
    def policy_id(self) -> str:
        return self._check.id

    def report(
        self,
        node: "SyntaxNode",
        message: str,
        severity: Union[Severity, str] = Severity.ERROR,
    ) -> None:
        """Append a diagnostic located at `node`."""
        start = node.start
        end = node.end
        metadata = self._check.metadata
        self._sink.append(
            Diagnostic(
                file_path=self.source_file.path,
                line=start.line,
                column=start.column,
                end_line=end.line,
                end_column=end.column,
                message=message,
                severity=Severity(severity),
                policy_id=self._check.id,
                what=metadata.what,
                why=metadata.why,
                policy_path=metadata.policy_path,
            )
        )


def compile_matcher(file_pattern: FilePattern) -> PathPredicate:
    """Normalise a regex, regex string or predicate into a path predicate."""
    if isinstance(file_pattern, re.Pattern):
        return lambda path: file_pattern.search(path) is not None
    if isinstance(file_pattern, str):
        if not file_pattern:
            raise ConfigurationError("file_pattern must not be empty")
        try:
            compiled = re.compile(file_pattern)
        except re.error as exc:
            raise ConfigurationError(f"invalid file_pattern {file_pattern!r}: {exc}") from exc
        return lambda path: compiled.search(path) is not None
    if callable(file_pattern):
        return file_pattern
    raise ConfigurationError(
        f"file_pattern must be a regex, a pattern string or a predicate, got {type(file_pattern).__name__}"
    )


def parse_metadata(docstring: Optional[str], policy_path: str = "") -> PolicyMetadata:
    """Read what/why/failure from a policy module docstring."""
    if not docstring:
        return PolicyMetadata(policy_path=policy_path)
    lines = [line.strip() for line in docstring.strip().splitlines()]
    what = lines[0] if lines else ""
    why = _WHY_RE.search(docstring)
    failure = _FAILURE_RE.search(docstring)
    return PolicyMetadata(
        what=what,
        why=why.group(1).strip() if why else "",
        failure=failure.group(1).strip() if failure else "",
        policy_path=policy_path,
    )


def infer_layer(check_name: str) -> str:
    """Pick the known layer a check name starts with, else 'common'."""
    for layer in KNOWN_LAYERS:
        if check_name.startswith(layer):
            return layer
    return "common"


def _kebab(segment: str) -> str:
    return segment.replace("_", "-")


def _identity_from_module(module_name: str) -> Optional[tuple[PolicyScope, str, str, str, str]]:
    """
    Derive (scope, id, workspace, layer, policy_path) from a catalog module.

    guardrails_policy.policy.horizontal.server.domain_model.no_nested_child_arrays
    -> (horizontal, server/domain-model/no-nested-child-arrays, server, domain-model, ...)
    """
    prefix = POLICY_PACKAGE + "."
    if not module_name.startswith(prefix):
        return None
    parts = module_name[len(prefix):].split(".")
    if len(parts) < 3:
        return None
    try:
        scope = PolicyScope(parts[0])
    except ValueError:
        return None
    workspace = _kebab(parts[1])
    check_name = _kebab(parts[-1])
    layer = _kebab(parts[2]) if len(parts) >= 4 else infer_layer(check_name)
    segments = [workspace, layer, check_name] if len(parts) >= 4 else [workspace, check_name]
    policy_path = "policy/" + "/".join(parts) + ".py"
    return scope, "/".join(segments), workspace, layer, policy_path


def create_checker(
    *,
    file_pattern: Optional[FilePattern] = None,
    visitor: Optional[Visitor] = None,
    exclude: tuple[PathPredicate, ...] = (),
    policy_id: Optional[str] = None,
    scope: Optional[PolicyScope] = None,
    kind: PolicyKind = PolicyKind.STATIC,
    workspace: Optional[str] = None,
    layer: Optional[str] = None,
    metadata: Optional[PolicyMetadata] = None,
) -> PolicyCheck:
    """
    Build a PolicyCheck.

    Identity comes from the visitor's module when it lives in the policy
    catalog; anywhere else `policy_id` and `scope` are required. Every
    misconfiguration raises ConfigurationError here, before any file is read.
    """
    if file_pattern is None:
        raise ConfigurationError("create_checker requires a file_pattern")
    if visitor is None:
        raise ConfigurationError("create_checker requires a visitor")
    if not callable(visitor):
        raise ConfigurationError("visitor must be callable")
    matcher = compile_matcher(file_pattern)
    for predicate in exclude:
        if not callable(predicate):
            raise ConfigurationError("exclude entries must be path predicates")

    module_name = getattr(visitor, "__module__", "") or ""
    derived = _identity_from_module(module_name)
    if policy_id is None:
        if derived is None:
            raise ConfigurationError(
                f"cannot derive a policy id from module '{module_name}'; pass policy_id"
            )
        scope = scope or derived[0]
        policy_id = derived[1]
        workspace = workspace or derived[2]
        layer = layer or derived[3]
    if scope is None:
        if derived is None:
            raise ConfigurationError(f"policy '{policy_id}' needs an explicit scope")
        scope = derived[0]

    id_parts = policy_id.split("/")
    workspace = workspace or id_parts[0]
    layer = layer or (id_parts[1] if len(id_parts) > 2 else infer_layer(id_parts[-1]))

    if metadata is None:
        module = sys.modules.get(module_name)
        policy_path = derived[4] if derived else ""
        metadata = parse_metadata(getattr(module, "__doc__", None), policy_path)

    return PolicyCheck(
        id=policy_id,
        scope=PolicyScope(scope),
        kind=PolicyKind(kind),
        workspace=workspace,
        layer=layer,
        visitor=visitor,
        matcher=matcher,
        excludes=tuple(exclude),
        metadata=metadata,
    )


__all__ = [
    "CheckContext",
    "PolicyCheck",
    "Visitor",
    "compile_matcher",
    "create_checker",
    "infer_layer",
    "parse_metadata",
]
