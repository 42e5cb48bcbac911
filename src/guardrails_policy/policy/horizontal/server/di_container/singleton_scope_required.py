"""Container bindings are registered in singleton scope.

Why: services are stateless; transient scope rebuilds dependency graphs on every resolution.
Failure: a bind() chain ends in inTransientScope(), or in toDynamicValue()/toConstantValue() without a scope.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import call_chain_methods

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

UNSCOPED_ENDINGS = frozenset({"toDynamicValue", "toConstantValue"})


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "expression_statement":
        return
    expression = node.children[0] if node.children else None
    if expression is None or expression.kind != "call_expression":
        return
    methods = call_chain_methods(expression)
    if not methods or "bind" not in methods:
        return
    last = methods[-1]
    if last == "inSingletonScope":
        return
    if last == "inTransientScope":
        subject = "binding uses inTransientScope()."
    elif last in UNSCOPED_ENDINGS:
        subject = f"binding ends with {last}() and has no scope."
    else:
        return
    ctx.report(
        node,
        f"{subject}\n"
        "Bad: container.bind(serviceId.TODO_REPOSITORY).toDynamicValue(...);\n"
        "Good: container.bind(serviceId.TODO_REPOSITORY).toDynamicValue(...).inSingletonScope();\n"
        "Reason: services are stateless and shared for the lifetime of the container.",
    )


policy_check = create_checker(file_pattern=r"register-.*-container\.ts$", visitor=visit)
