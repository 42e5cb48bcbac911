"""Discovery descriptors for the listing tools."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from guardrails_policy.domain.constants import PolicyKind, PolicyScope
from guardrails_policy.domain.exceptions import InvalidPolicyFilterError

_TYPE_VALUES: tuple[str, ...] = tuple(kind.value for kind in PolicyKind)


def _filter_schema() -> Mapping[str, object]:
    return MappingProxyType(
        {
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "enum": list(_TYPE_VALUES),
                    "description": "static: structural checks. semantic: business-invariant checks. Omit for all.",
                }
            },
            "required": [],
            "additionalProperties": False,
        }
    )


@dataclass(frozen=True)
class ListPoliciesResponsibility:
    """Static metadata describing one listing tool."""

    id: str
    scope: PolicyScope
    tool_description: str
    input_schema: Mapping[str, object] = field(default_factory=_filter_schema)

    def parse_input(self, arguments: Optional[Mapping[str, object]]) -> Optional[PolicyKind]:
        """Validate tool arguments and return the requested kind, None for all."""
        arguments = arguments or {}
        unexpected = sorted(set(arguments) - {"type"})
        if unexpected:
            raise InvalidPolicyFilterError("argument", unexpected[0], ("type",))
        raw = arguments.get("type")
        if raw is None:
            return None
        if raw not in _TYPE_VALUES:
            raise InvalidPolicyFilterError("type", raw, _TYPE_VALUES)
        return PolicyKind(raw)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "toolDescription": self.tool_description,
            "inputSchema": dict(self.input_schema),
        }


LIST_HORIZONTAL_POLICIES = ListPoliciesResponsibility(
    id="list_horizontal_policies",
    scope=PolicyScope.HORIZONTAL,
    tool_description=(
        "List horizontal policies: rules scoped to one workspace layer "
        "(server domain-model, use-case, handler, port, di-container; web ui). "
        "Use before running a review to see which checks apply."
    ),
)

LIST_VERTICAL_POLICIES = ListPoliciesResponsibility(
    id="list_vertical_policies",
    scope=PolicyScope.VERTICAL,
    tool_description=(
        "List vertical policies: cross-cutting rules spanning several layers, "
        "such as contract and router consistency."
    ),
)

RESPONSIBILITIES: tuple[ListPoliciesResponsibility, ...] = (
    LIST_HORIZONTAL_POLICIES,
    LIST_VERTICAL_POLICIES,
)
