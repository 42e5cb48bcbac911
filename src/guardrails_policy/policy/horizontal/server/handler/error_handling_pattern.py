"""Handlers check the use-case Result and convert failures with handleError().

Why: errors from the use-case and domain layers must map onto the right HTTP status codes.
Failure: a handler calls execute() without checking isOk()/isErr(), or checks without handleError().
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import is_exported, node_name, variable_declarators

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

EXECUTE_CALL = re.compile(r"\.execute\s*\(")
RESULT_CHECK = re.compile(r"\.isOk\s*\(\)|\.isErr\s*\(\)")
HANDLE_ERROR_CALL = re.compile(r"handleError\s*\(")


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "lexical_declaration" or not is_exported(node):
        return
    for declarator in variable_declarators(node):
        name = node_name(declarator)
        if name is None or not name.endswith("Handler"):
            continue
        initializer = declarator.field("value")
        if initializer is None:
            continue
        function_text = initializer.text
        if not EXECUTE_CALL.search(function_text):
            continue

        if not RESULT_CHECK.search(function_text):
            ctx.report(
                declarator,
                f"{name} uses the use-case result without checking it.\n"
                "Bad: const result = await useCase.execute(data); return c.json(result.data, 200);\n"
                "Good: if (!result.isOk()) { return handleError(result.error, c, logger); }\n"
                "Reason: an unchecked Result turns domain failures into 200 responses.",
            )
            continue

        if not HANDLE_ERROR_CALL.search(function_text):
            ctx.report(
                declarator,
                f"{name} checks the Result but does not convert the error with handleError().\n"
                "Bad: if (!result.isOk()) { return c.json({ error: result.error.message }, 500); }\n"
                "Good: if (!result.isOk()) { return handleError(result.error, c, logger); }\n"
                "Reason: handleError maps ValidationError/DomainError/NotFoundError... to 400/422/404.",
            )


policy_check = create_checker(file_pattern=r"-handler\.ts$", visitor=visit)
