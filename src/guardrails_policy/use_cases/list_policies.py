"""List registered policies for discovery tooling."""

from typing import Optional, Union

from guardrails_policy.domain.constants import PolicyKind, PolicyScope
from guardrails_policy.domain.entities import PolicyDescriptor
from guardrails_policy.domain.registry import PolicyRegistry
from guardrails_policy.domain.responsibilities import RESPONSIBILITIES, ListPoliciesResponsibility


class ListPoliciesUseCase:
    """Pure read over the registry: descriptors, never visitors."""

    def __init__(self, registry: PolicyRegistry) -> None:
        self.registry = registry

    def execute(
        self,
        scope: Optional[Union[PolicyScope, str]] = None,
        type: Optional[Union[PolicyKind, str]] = None,  # noqa: A002 - matches the tool argument
    ) -> list[PolicyDescriptor]:
        return [
            self.registry.describe(check)
            for check in self.registry.checks(scope=scope, kind=type)
        ]

    def execute_tool(
        self, responsibility: ListPoliciesResponsibility, arguments: Optional[dict[str, object]] = None
    ) -> list[PolicyDescriptor]:
        """Answer a listing tool call: the responsibility fixes the scope, arguments the kind."""
        kind = responsibility.parse_input(arguments)
        return self.execute(scope=responsibility.scope, type=kind)

    @staticmethod
    def describe_responsibilities() -> list[dict[str, object]]:
        return [responsibility.to_dict() for responsibility in RESPONSIBILITIES]
