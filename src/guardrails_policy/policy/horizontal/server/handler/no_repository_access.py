"""Handlers reach data only through use cases.

Why: repositories skipped by a handler bypass authorisation and business rules.
Failure: a handler imports a repository, types a variable as one or calls repository methods.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import call_name, call_receiver, node_name, unwrap_type

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

REPOSITORY_METHODS = re.compile(r"^(findById|findBy\w*|findAll|save|remove|delete)$")
REPOSITORY_NAME = re.compile(r"[Rr]epository$")

_REASON = (
    "Good: const result = await useCase.execute(input);\n"
    "Reason: handlers translate HTTP to use-case input; data access belongs to the use case."
)


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind == "import_statement":
        clause = next((child for child in node.children if child.kind == "import_clause"), None)
        if clause is not None and re.search(r"\b\w*Repository\b", clause.text):
            ctx.report(node, f"handler imports a repository.\nBad: {node.text}\n{_REASON}")
    elif node.kind == "variable_declarator":
        type_node = unwrap_type(node.field("type"))
        if type_node is not None and "Repository" in type_node.text:
            ctx.report(
                node,
                f'variable "{node_name(node)}" is typed as a repository.\nBad: {node.text}\n{_REASON}',
            )
    elif node.kind == "call_expression":
        method = call_name(node)
        receiver = call_receiver(node)
        if method is None or receiver is None or not REPOSITORY_METHODS.match(method):
            return
        receiver_name = receiver.text.rsplit(".", 1)[-1]
        if REPOSITORY_NAME.search(receiver_name):
            ctx.report(node, f"handler calls {receiver_name}.{method}() directly.\nBad: {node.text}\n{_REASON}")


policy_check = create_checker(
    file_pattern=r"-handler\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
