"""Entity and value object props are all required.

Why: optional props let half-initialised objects exist; absent values are modelled explicitly as `T | undefined`.
Failure: a `*Props` type alias declares an optional member.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import has_modifier, node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "type_alias_declaration":
        return
    alias = node_name(node)
    if alias is None or not alias.endswith("Props"):
        return
    value = node.field("value")
    if value is None or value.kind != "object_type":
        return
    for member in value.children:
        if member.kind != "property_signature" or not has_modifier(member, "?"):
            continue
        prop = node_name(member)
        ctx.report(
            member,
            f'"{alias}.{prop}" is optional.\n'
            f"Bad: {prop}?: string;\n"
            f"Good: {prop}: string | undefined;\n"
            "Reason: every caller of from() must decide the value explicitly.",
        )


policy_check = create_checker(file_pattern=r"\.(entity|vo)\.ts$", visitor=visit)
