"""Handler bodies are wrapped in try/catch.

Why: an exception escaping a handler becomes an unlogged 500 with the framework's default body.
Failure: the request function returned by a build*Handler factory contains no try statement.
"""

from typing import TYPE_CHECKING, Optional

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import (
    contains_kind,
    is_exported,
    node_name,
    variable_declarators,
)

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

FUNCTION_KINDS = frozenset({"arrow_function", "function_expression", "function"})


def request_body(factory: "SyntaxNode") -> Optional["SyntaxNode"]:
    """Body of the innermost function: ({ container }) => async (c) => { ... }."""
    current = factory
    while True:
        body = current.field("body")
        if body is None:
            return None
        if body.kind in FUNCTION_KINDS:
            current = body
            continue
        return body


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "lexical_declaration" or not is_exported(node):
        return
    for declarator in variable_declarators(node):
        name = node_name(declarator)
        value = declarator.field("value")
        if name is None or not name.endswith("Handler") or value is None:
            continue
        if value.kind not in FUNCTION_KINDS:
            continue
        body = request_body(value)
        if body is None or body.kind != "statement_block":
            continue
        if contains_kind(body, "try_statement"):
            continue
        ctx.report(
            declarator,
            f"{name} has no try/catch around the request handling.\n"
            "Bad: async (c) => { const result = await useCase.execute(input); ... }\n"
            "Good: async (c) => { try { ... } catch (error) { return handleError(error, c, logger); } }\n"
            "Reason: unexpected exceptions must still produce a logged, well-formed error response.",
        )


policy_check = create_checker(file_pattern=r"-handler\.ts$", visitor=visit)
