"""Build semantic PolicyChecks from declarative definitions.

A definition names the files it applies to, the node kinds it inspects, a
trigger that makes the invariant relevant and the companion patterns of which
at least one must then be present. The node text is searched, so these checks
share the brittleness of any text heuristic.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional

from guardrails_policy.domain.constants import PolicyKind, PolicyScope, Severity
from guardrails_policy.domain.entities import PolicyMetadata
from guardrails_policy.domain.exceptions import SemanticPolicyDefinitionError
from guardrails_policy.domain.rules import PolicyCheck, create_checker, file_filters
from guardrails_policy.domain.rules.syntax import node_name, variable_declarators

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

EXCLUSIONS = {
    "test": file_filters.is_test_file,
    "dummy": file_filters.is_dummy_file,
    "generated": file_filters.is_generated_file,
}

_REQUIRED_KEYS = ("id", "scope", "file_pattern", "node_kinds", "trigger", "require_any", "message")


@dataclass(frozen=True)
class SemanticRule:
    """Compiled form of one semantic policy definition."""

    node_kinds: frozenset[str]
    trigger: "re.Pattern[str]"
    require_any: tuple["re.Pattern[str]", ...]
    message: str
    severity: Severity
    name_pattern: Optional["re.Pattern[str]"] = None

    def _named(self, node: "SyntaxNode") -> bool:
        if self.name_pattern is None:
            return True
        names = [node_name(declarator) for declarator in variable_declarators(node)]
        names.append(node_name(node))
        return any(name and self.name_pattern.search(name) for name in names)

    def __call__(self, node: "SyntaxNode", ctx: "CheckContext") -> None:
        if node.kind not in self.node_kinds or not self._named(node):
            return
        text = node.text
        if not self.trigger.search(text):
            return
        if any(pattern.search(text) for pattern in self.require_any):
            return
        ctx.report(node, self.message, self.severity)


def _compile(policy_id: str, key: str, pattern: object) -> "re.Pattern[str]":
    if not isinstance(pattern, str):
        raise SemanticPolicyDefinitionError(f"{policy_id}: '{key}' must be a regex string")
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise SemanticPolicyDefinitionError(f"{policy_id}: invalid regex in '{key}': {exc}") from exc


def build_semantic_check(definition: Mapping[str, object], source: str = "") -> PolicyCheck:
    """Turn one definition mapping into a PolicyCheck of kind semantic."""
    policy_id = str(definition.get("id", "<unnamed>"))
    missing = [key for key in _REQUIRED_KEYS if key not in definition]
    if missing:
        raise SemanticPolicyDefinitionError(f"{policy_id}: missing {', '.join(missing)}")
    try:
        scope = PolicyScope(definition["scope"])
        severity = Severity(definition.get("severity", Severity.ERROR.value))
    except ValueError as exc:
        raise SemanticPolicyDefinitionError(f"{policy_id}: {exc}") from exc

    node_kinds = definition["node_kinds"]
    require_any = definition["require_any"]
    if not isinstance(node_kinds, list) or not node_kinds:
        raise SemanticPolicyDefinitionError(f"{policy_id}: 'node_kinds' must be a non-empty list")
    if not isinstance(require_any, list) or not require_any:
        raise SemanticPolicyDefinitionError(f"{policy_id}: 'require_any' must be a non-empty list")

    exclude_names = definition.get("exclude", [])
    if not isinstance(exclude_names, list):
        raise SemanticPolicyDefinitionError(f"{policy_id}: 'exclude' must be a list")
    unknown = [name for name in exclude_names if name not in EXCLUSIONS]
    if unknown:
        raise SemanticPolicyDefinitionError(f"{policy_id}: unknown exclusion '{unknown[0]}'")

    name_pattern = definition.get("name_pattern")
    rule = SemanticRule(
        node_kinds=frozenset(str(kind) for kind in node_kinds),
        trigger=_compile(policy_id, "trigger", definition["trigger"]),
        require_any=tuple(_compile(policy_id, "require_any", p) for p in require_any),
        message=str(definition["message"]).rstrip(),
        severity=severity,
        name_pattern=_compile(policy_id, "name_pattern", name_pattern) if name_pattern else None,
    )
    return create_checker(
        file_pattern=_compile(policy_id, "file_pattern", definition["file_pattern"]),
        visitor=rule,
        exclude=tuple(EXCLUSIONS[name] for name in exclude_names),
        policy_id=policy_id,
        scope=scope,
        kind=PolicyKind.SEMANTIC,
        workspace=str(definition["workspace"]) if definition.get("workspace") else None,
        layer=str(definition["layer"]) if definition.get("layer") else None,
        metadata=PolicyMetadata(
            what=str(definition.get("what", "")),
            why=str(definition.get("why", "")),
            failure=str(definition.get("failure", "")),
            policy_path=source,
        ),
    )
