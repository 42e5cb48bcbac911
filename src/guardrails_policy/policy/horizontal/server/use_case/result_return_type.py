"""Use case execute() declares a Result return type.

Why: callers branch on the Result; an undeclared or non-Result return hides failure paths.
Failure: execute has no return annotation, or its type contains no Result.
"""

from typing import TYPE_CHECKING, Optional

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import node_name, type_arguments, type_name, unwrap_type

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext


def contains_result(type_node: Optional["SyntaxNode"]) -> bool:
    """Result<...>, *Result, or a Promise of one of those."""
    name = type_name(type_node)
    if name is None:
        return False
    if name == "Promise":
        arguments = type_arguments(type_node)
        return bool(arguments) and contains_result(arguments[0])
    return name == "Result" or name.endswith("Result")


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind not in ("method_definition", "method_signature") or node_name(node) != "execute":
        return
    return_type = unwrap_type(node.field("return_type"))
    if return_type is None:
        ctx.report(
            node,
            "execute() has no return type.\n"
            "Bad: async execute(input: CreateTodoUseCaseInput) { ... }\n"
            "Good: async execute(input: CreateTodoUseCaseInput): Promise<CreateTodoUseCaseResult> { ... }\n"
            "Reason: the Result type documents every failure the caller must handle.",
        )
    elif not contains_result(return_type):
        ctx.report(
            node,
            f"execute() returns {return_type.text}, which is not a Result.\n"
            f"Bad: execute(...): {return_type.text}\n"
            "Good: execute(...): Promise<Result<Output, CreateTodoUseCaseException>>\n"
            "Reason: use cases never throw for expected failures.",
        )


policy_check = create_checker(file_pattern=r"-use-case\.ts$", visitor=visit)
