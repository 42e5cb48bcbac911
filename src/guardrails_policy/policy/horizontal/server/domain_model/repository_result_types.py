"""Repository methods return Promise<Result<T, E>>.

Why: persistence can fail; the domain handles failure through Result, never through throw.
Failure: a repository method has no return type, a non-Promise return or a Promise without Result.
"""

from typing import TYPE_CHECKING, Optional

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import node_name, type_arguments, type_name, unwrap_type

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

MEMBER_KINDS = frozenset({"property_signature", "method_signature"})
CONTAINER_KINDS = frozenset({"object_type", "interface_body"})


def is_result_type(type_node: Optional["SyntaxNode"]) -> bool:
    """Result, FooResult, or a Promise of one of those."""
    name = type_name(type_node)
    if name is None:
        return False
    if name == "Promise":
        arguments = type_arguments(type_node)
        return bool(arguments) and is_result_type(arguments[0])
    return "Result" in name


def method_return_type(member: "SyntaxNode") -> tuple[bool, Optional["SyntaxNode"]]:
    """(is a method, declared return type) for a member of a repository type."""
    if member.kind == "method_signature":
        return True, unwrap_type(member.field("return_type"))
    type_node = unwrap_type(member.field("type"))
    if type_node is None or type_node.kind != "function_type":
        return False, None
    returned = type_node.field("return_type")
    if returned is None and type_node.children:
        returned = type_node.children[-1]
    return True, unwrap_type(returned)


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind not in MEMBER_KINDS or node.parent is None or node.parent.kind not in CONTAINER_KINDS:
        return
    name = node_name(node)
    if name is None or name.endswith("Id"):
        return
    is_method, return_type = method_return_type(node)
    if not is_method:
        return
    if return_type is None:
        ctx.report(
            node,
            f'repository method "{name}" has no return type.\n'
            f"Bad: {name}(props: Props);\n"
            f"Good: {name}(props: Props): Promise<Result<void, UnexpectedError>>;\n"
            "Reason: callers rely on the declared Result to handle persistence failures.",
        )
    elif type_name(return_type) != "Promise":
        ctx.report(
            node,
            f'repository method "{name}" returns {return_type.text}, not a Promise.\n'
            f"Bad: {name}(props: Props): {return_type.text};\n"
            f"Good: {name}(props: Props): Promise<Result<...>>;\n"
            "Reason: persistence is asynchronous.",
        )
    elif not is_result_type(return_type):
        ctx.report(
            node,
            f'repository method "{name}" returns {return_type.text} without a Result.\n'
            f"Bad: {name}(props: Props): {return_type.text};\n"
            f"Good: {name}(props: Props): Promise<Result<..., UnexpectedError>>;\n"
            "Reason: failures travel as values, not exceptions.",
        )


policy_check = create_checker(file_pattern=r"\.repository\.ts$", visitor=visit)
