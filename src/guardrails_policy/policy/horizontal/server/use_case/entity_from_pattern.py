"""Use cases create entities through Entity.from(), never with new.

Why: from() is the single validated construction path of every entity.
Failure: a use case instantiates a PascalCase class other than built-ins and error types.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
BUILTINS = frozenset({"Date", "Error", "Map", "Set", "Promise", "Array"})


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "new_expression":
        return
    constructor = node.field("constructor")
    if constructor is None or constructor.kind != "identifier":
        return
    class_name = constructor.text
    if not PASCAL_CASE.match(class_name) or class_name in BUILTINS or class_name.endswith("Error"):
        return
    ctx.report(
        node,
        f"use case instantiates {class_name} with new.\n"
        f"Bad: {node.text}\n"
        f"Good: {class_name}.from({{ ... }})\n"
        "Reason: from() validates and normalises props before the entity exists.",
    )


policy_check = create_checker(
    file_pattern=r"-use-case\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
