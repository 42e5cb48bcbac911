"""Use case implementations expose execute() and nothing else.

Why: helper methods grow into hidden business logic; rules belong in the domain model.
Failure: a *UseCaseImpl class declares a method other than execute.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import class_members, node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

ALLOWED_METHODS = frozenset({"execute", "constructor"})


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "class_declaration":
        return
    class_name = node_name(node) or ""
    if not class_name.endswith("UseCaseImpl"):
        return
    for member in class_members(node):
        if member.kind != "method_definition":
            continue
        method = node_name(member)
        if method in ALLOWED_METHODS:
            continue
        ctx.report(
            member,
            f'{class_name} declares method "{method}".\n'
            f"Bad: private {method}(...) {{ ... }}\n"
            "Good: move the rule into an entity or value object method and call it from execute()\n"
            "Reason: use cases orchestrate; they do not hold business rules.",
        )


policy_check = create_checker(file_pattern=r"-use-case\.ts$", visitor=visit)
