"""Entity methods are named after domain behaviour, not setters.

Why: setX/changeX/updateX hide the business intent and invite anemic models.
Failure: an entity method is named set*, change*, update* or update.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import CLASS_KINDS, enclosing, node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

FORBIDDEN = (
    re.compile(r"^set[A-Z]"),
    re.compile(r"^change[A-Z]"),
    re.compile(r"^update[A-Z]"),
    re.compile(r"^update$"),
)


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "method_definition" or enclosing(node, CLASS_KINDS) is None:
        return
    name = node_name(node)
    if name is None or not any(pattern.search(name) for pattern in FORBIDDEN):
        return
    ctx.report(
        node,
        f'entity method "{name}" is named like a setter.\n'
        f"Bad: {name}(value)\n"
        "Good: complete(), rename(title), reschedule(dueDate)\n"
        "Reason: method names carry the domain operation and its invariants.",
    )


policy_check = create_checker(file_pattern=r"\.entity\.ts$", visitor=visit)
