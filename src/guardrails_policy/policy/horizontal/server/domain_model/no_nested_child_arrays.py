"""Aggregates nest at most one level: child entities hold no arrays of entities.

Why: deep aggregates blur the consistency boundary and force oversized transactions.
Failure: a class in a child entity file declares a property typed as an array of another type.
"""

from typing import TYPE_CHECKING, Optional

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import class_members, node_name, unwrap_type

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

ENTITY_SUFFIX = ".entity.ts"
FIELD_KINDS = frozenset({"public_field_definition", "property_signature"})


def entity_array_type(member: "SyntaxNode") -> Optional[str]:
    """`SubTask` when the member is typed SubTask[] (predefined element types excluded)."""
    type_node = unwrap_type(member.field("type"))
    if type_node is None or type_node.kind != "array_type":
        return None
    element = type_node.children[0] if type_node.children else None
    if element is None or element.kind != "type_identifier":
        return None
    return element.text


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "class_declaration":
        return
    entity_name = ctx.file_name[: -len(ENTITY_SUFFIX)]
    if entity_name == ctx.source_file.directory_name:
        return  # aggregate root
    class_name = node_name(node) or "<anonymous>"
    for member in class_members(node):
        if member.kind not in FIELD_KINDS:
            continue
        element = entity_array_type(member)
        if element is None:
            continue
        prop = node_name(member)
        ctx.report(
            member,
            f'child entity "{class_name}" has entity array "{prop}: {element}[]".\n'
            f"Bad: class {class_name} {{ {prop}: {element}[] }}\n"
            f"Good: make {element} a child of the aggregate root and reference it by id.\n"
            "Reason: aggregates allow one level of nesting; grandchildren escape the root's invariants.",
        )


policy_check = create_checker(file_pattern=r"\.entity\.ts$", visitor=visit)
