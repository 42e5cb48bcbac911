"""Fallible port methods return Promise<Result<T, E>>.

Why: ports wrap I/O; callers must handle failure through the Result type instead of exceptions.
Failure: a port method whose name implies I/O returns a Promise without a Result inside.
"""

import re
from typing import TYPE_CHECKING, Optional

from guardrails_policy.domain.constants import LOGGER_METHODS
from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import promise_inner, unwrap_type

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

FALLIBLE_NAMES = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"^delete",
        r"^remove",
        r"^create",
        r"^update",
        r"^save",
        r"^generate",
        r"^decode",
        r"^verify",
        r"^authenticate",
        r"^upload",
        r"^download",
        r"^fetch",
        r"^get",
    )
)
SIGNATURE_KINDS = frozenset({"property_signature", "method_signature"})


def is_fallible(name: str) -> bool:
    if name in LOGGER_METHODS:
        return False
    return any(pattern.search(name) for pattern in FALLIBLE_NAMES)


def declared_return_type(node: "SyntaxNode") -> Optional["SyntaxNode"]:
    """Return type of a method signature, or of a function-typed property signature."""
    if node.kind == "method_signature":
        return unwrap_type(node.field("return_type"))
    type_node = unwrap_type(node.field("type"))
    if type_node is None or type_node.kind != "function_type":
        return None
    returned = type_node.field("return_type")
    if returned is None and type_node.children:
        returned = type_node.children[-1]
    return unwrap_type(returned)


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind not in SIGNATURE_KINDS:
        return
    name_node = node.field("name")
    if name_node is None or name_node.kind != "property_identifier":
        return
    name = name_node.text
    if not is_fallible(name):
        return
    inner = promise_inner(declared_return_type(node))
    if inner is None or "Result<" in inner.text:
        return
    ctx.report(
        node,
        f'port method "{name}" returns Promise<{inner.text}> without a Result.\n'
        f"Bad: {name}: (props: Props) => Promise<{inner.text}>\n"
        f"Good: {name}: (props: Props) => Promise<Result<{inner.text}, UnexpectedError>>\n"
        "Reason: callers of a port cannot tell success from failure without a Result.",
    )


policy_check = create_checker(
    file_pattern=r"/port/[^/]+/index\.ts$",
    visitor=visit,
    exclude=(
        file_filters.is_test_file,
        file_filters.is_dummy_file,
        file_filters.in_directory("fetch-now"),
    ),
)
