"""Handlers are named build<Action><Entity>Handler and live in <action>-<entity>-handler.ts.

Why: route wiring and code search rely on one predictable name per endpoint.
Failure: an exported *Handler does not follow the pattern or its file name does not match it.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import is_exported, node_name, variable_declarators

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

HANDLER_PATTERN = re.compile(r"^build([A-Z][a-zA-Z]+)([A-Z][a-zA-Z]+)Handler$")
_UPPER = re.compile(r"(?<!^)([A-Z])")


def expected_file_name(handler_name: str) -> str:
    """buildCreateTodoHandler -> create-todo-handler.ts."""
    stem = handler_name[len("build"):-len("Handler")]
    return _UPPER.sub(r"-\1", stem).lower() + "-handler.ts"


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "lexical_declaration" or not is_exported(node):
        return
    for declarator in variable_declarators(node):
        name = node_name(declarator)
        if name is None or not name.endswith("Handler"):
            continue
        if not HANDLER_PATTERN.match(name):
            ctx.report(
                declarator,
                f'handler "{name}" does not follow build<Action><Entity>Handler.\n'
                f"Bad: export const {name} = ...\n"
                "Good: export const buildCreateTodoHandler = ...\n"
                "Reason: one naming scheme maps every endpoint to exactly one handler.",
            )
            continue
        expected = expected_file_name(name)
        if ctx.file_name != expected:
            ctx.report(
                declarator,
                f'handler "{name}" lives in "{ctx.file_name}".\n'
                f"Bad: {ctx.file_name}\n"
                f"Good: {expected}\n"
                "Reason: the file name is the kebab-case form of the handler name.",
            )


policy_check = create_checker(
    file_pattern=r"-handler\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
