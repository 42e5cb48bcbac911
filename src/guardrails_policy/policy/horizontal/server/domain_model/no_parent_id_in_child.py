"""Child entities do not hold the id of their aggregate root.

Why: the aggregate root owns its children; a back-reference duplicates the relationship.
Failure: a class in a child entity file declares a `<aggregate>Id` property.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import class_members, node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

ENTITY_SUFFIX = ".entity.ts"
FIELD_KINDS = frozenset({"public_field_definition", "property_signature"})


def parent_id_name(directory: str) -> str:
    """project-member -> projectMemberId."""
    camel = re.sub(r"-([a-z0-9])", lambda m: m.group(1).upper(), directory)
    return camel + "Id"


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "class_declaration":
        return
    directory = ctx.source_file.directory_name
    if not directory or ctx.file_name[: -len(ENTITY_SUFFIX)] == directory:
        return
    forbidden = parent_id_name(directory)
    class_name = node_name(node) or "<anonymous>"
    for member in class_members(node):
        if member.kind in FIELD_KINDS and node_name(member) == forbidden:
            ctx.report(
                member,
                f'child entity "{class_name}" holds its parent id "{forbidden}".\n'
                f"Bad: class {class_name} {{ readonly {forbidden}: string }}\n"
                f"Good: class {class_name} {{ readonly id: string }} (reached through the aggregate root)\n"
                "Reason: the aggregate root already owns the relationship.",
            )


policy_check = create_checker(file_pattern=r"\.entity\.ts$", visitor=visit)
