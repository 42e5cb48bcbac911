"""Repositories are declared as type aliases, not classes or interfaces.

Why: the domain only states the shape; implementations live in infrastructure.
Failure: a repository file declares a class, or an interface named *Repository*.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

CLASS_KINDS = frozenset({"class_declaration", "abstract_class_declaration"})


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind in CLASS_KINDS:
        name = node_name(node) or "<anonymous>"
        ctx.report(
            node,
            f'repository file declares class "{name}".\n'
            f"Bad: export class {name} {{ ... }}\n"
            "Good: export type TodoRepository = { findById: (props: { id: string }) => Promise<Result<Todo | undefined, UnexpectedError>> };\n"
            "Reason: implementations belong in the infrastructure layer.",
        )
    elif node.kind == "interface_declaration":
        name = node_name(node) or ""
        if "Repository" in name:
            ctx.report(
                node,
                f'repository "{name}" is an interface.\n'
                f"Bad: export interface {name} {{ ... }}\n"
                f"Good: export type {name} = {{ ... }};\n"
                "Reason: the code base declares contracts with type aliases only.",
            )


policy_check = create_checker(file_pattern=r"\.repository\.ts$", visitor=visit)
