"""Results are narrowed with isOk()/isErr(), not by reading .success.

Why: the type guards narrow data and error without non-null assertions.
Failure: a condition reads `.success` on a result variable.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

CONDITION_PARENTS = frozenset({"unary_expression", "binary_expression", "ternary_expression"})
GUARDED_STATEMENTS = frozenset({"if_statement", "while_statement"})


def in_condition(node: "SyntaxNode") -> bool:
    parent = node.parent
    if parent is None:
        return False
    if parent.kind in CONDITION_PARENTS:
        return True
    if parent.kind == "parenthesized_expression":
        grandparent = parent.parent
        return grandparent is not None and grandparent.kind in GUARDED_STATEMENTS
    return False


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "member_expression":
        return
    prop = node.field("property")
    target = node.field("object")
    if prop is None or prop.text != "success" or target is None or target.kind != "identifier":
        return
    name = target.text
    if not (name.endswith("Result") or "result" in name):
        return
    if not in_condition(node):
        return
    ctx.report(
        node,
        f'Result checked through "{name}.success".\n'
        "Bad: if (!result.success) { return Result.err(result.error!); }\n"
        "Good: if (result.isErr()) { return Result.err(result.error); }\n"
        "Reason: isOk()/isErr() narrow the type, so no non-null assertion is needed.",
    )


policy_check = create_checker(
    file_pattern=r"-use-case\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
