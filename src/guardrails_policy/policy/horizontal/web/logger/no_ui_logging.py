"""UI components do not log.

Why: client-side logging leaks into the browser console; the UI library stays presentational.
Failure: a file under lib/ui builds a logger or calls logger methods.
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.constants import LOGGER_METHODS
from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import call_name, call_receiver

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "call_expression":
        return
    method = call_name(node)
    receiver = call_receiver(node)
    if receiver is None and method == "buildLogger":
        subject = "UI component builds a logger."
    elif receiver is not None and receiver.text == "logger" and method in LOGGER_METHODS:
        subject = f"UI component calls logger.{method}()."
    else:
        return
    ctx.report(
        node,
        f"{subject}\n"
        f"Bad: {node.text}\n"
        "Good: surface the state through props and let the feature layer log\n"
        "Reason: ui components are presentational and side-effect free.",
    )


policy_check = create_checker(
    file_pattern=r"/lib/ui/.*\.(ts|tsx)$",
    visitor=visit,
    exclude=(file_filters.is_test_file,),
)
