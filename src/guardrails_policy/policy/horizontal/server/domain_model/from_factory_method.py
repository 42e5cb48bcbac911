"""Entities and value objects are built through a static from() factory.

Why: a single construction path keeps validation in one place.
Failure: a class in an entity or value object file has no `static from` method.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import class_members, has_modifier, node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext


def has_static_from(class_node: "SyntaxNode") -> bool:
    return any(
        member.kind == "method_definition"
        and node_name(member) == "from"
        and has_modifier(member, "static")
        for member in class_members(class_node)
    )


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "class_declaration" or has_static_from(node):
        return
    class_name = node_name(node) or "<anonymous>"
    ctx.report(
        node,
        f'class "{class_name}" has no static from() factory.\n'
        f"Bad: new {class_name}(props)\n"
        f"Good: static from(props: {class_name}Props): {class_name} {{ return new {class_name}(props); }}\n"
        "Reason: construction goes through one validated entry point.",
    )


policy_check = create_checker(
    file_pattern=r"\.(entity|vo)\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
