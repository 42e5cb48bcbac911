"""Entities, value objects and repositories do not log.

Why: the domain stays free of infrastructure; logging belongs to the use-case and handler layers.
Failure: a domain file imports a logger or calls logger methods.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.constants import Dialect
from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import call_receiver, string_value

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

LOGGER_NAME = re.compile(r"\b[Ll]ogger\b")
PYTHON_LOGGING_MODULES = frozenset({"logging", "structlog", "loguru"})

_MESSAGE = (
    "{subject}\n"
    "Bad: {bad}\n"
    "Good: return err(new DomainError(...)) and let the use case log it\n"
    "Reason: domain objects report failures through values, not side effects."
)


def _visit_typescript(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind == "import_statement":
        source = string_value(node.field("source")) or ""
        if "/logger" not in source and "logger/" not in source:
            return
        clause = next((child for child in node.children if child.kind == "import_clause"), None)
        if clause is not None and LOGGER_NAME.search(clause.text):
            ctx.report(
                node,
                _MESSAGE.format(subject=f'domain file imports a logger from "{source}".', bad=node.text),
            )
    elif node.kind == "call_expression":
        receiver = call_receiver(node)
        if receiver is not None and receiver.kind == "identifier" and receiver.text == "logger":
            ctx.report(
                node,
                _MESSAGE.format(subject="domain file calls the logger.", bad=node.text),
            )


def _visit_python(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind == "Import":
        modules = [name for name, _alias in node.attribute("names") or ()]
    elif node.kind == "ImportFrom":
        modules = [str(node.attribute("modname") or "")]
    else:
        return
    for module in modules:
        root = module.split(".")[0]
        if root in PYTHON_LOGGING_MODULES or "logger" in module:
            ctx.report(
                node,
                _MESSAGE.format(subject=f'domain module imports "{module}".', bad=node.text),
            )
            return


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.dialect is Dialect.PYTHON:
        _visit_python(node, ctx)
    else:
        _visit_typescript(node, ctx)


policy_check = create_checker(
    file_pattern=r"\.(entity|vo|repository)\.ts$|/domain/model/.*\.py$",
    visitor=visit,
)
