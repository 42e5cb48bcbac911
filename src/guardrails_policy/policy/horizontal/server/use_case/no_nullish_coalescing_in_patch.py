"""PATCH use cases do not default absent input fields with ??.

Why: in a PATCH, undefined means "leave unchanged"; `input.x ?? current.x` silently drops explicit nulls.
Failure: an update use case applies ?? to a field of input, props, data or params.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

INPUT_OBJECTS = frozenset({"input", "props", "data", "params"})


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "binary_expression":
        return
    operator = node.field("operator")
    left = node.field("left")
    if operator is None or operator.text != "??" or left is None or left.kind != "member_expression":
        return
    target = left.field("object")
    if target is None or target.kind != "identifier" or target.text not in INPUT_OBJECTS:
        return
    ctx.report(
        node,
        f"PATCH field defaulted with ??: {node.text}\n"
        f"Bad: const title = {node.text};\n"
        f"Good: if ({left.text} !== undefined) {{ entity = entity.rename({left.text}); }}\n"
        "Reason: only fields present in the request may change.",
    )


policy_check = create_checker(
    file_pattern=r"-use-case\.ts$",
    visitor=visit,
    exclude=(file_filters.is_test_file, file_filters.name_lacks("update-")),
)
