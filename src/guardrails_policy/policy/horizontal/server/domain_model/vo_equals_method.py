"""Value objects define equals().

Why: value objects compare by value; reference equality is always wrong for them.
Failure: a class in a `.vo.ts` file has no equals method.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import class_members, node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "class_declaration":
        return
    if any(
        member.kind == "method_definition" and node_name(member) == "equals"
        for member in class_members(node)
    ):
        return
    class_name = node_name(node) or "<anonymous>"
    ctx.report(
        node,
        f'value object "{class_name}" has no equals() method.\n'
        f"Bad: a === b for two {class_name} instances\n"
        f"Good: equals(other: {class_name}): boolean {{ return this.value === other.value; }}\n"
        "Reason: value objects are equal when their values are equal.",
    )


policy_check = create_checker(
    file_pattern=r"\.vo\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
