"""The domain model does not log.

Why: logging is an infrastructure concern; domain objects signal outcomes through Result values.
Failure: code under domain/model calls logger methods, directly or through this.logger / #logger.
"""

from typing import TYPE_CHECKING, Optional

from guardrails_policy.domain.constants import LOGGER_METHODS, Dialect
from guardrails_policy.domain.rules import create_checker
from guardrails_policy.domain.rules.syntax import call_name, call_receiver

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

LOGGER_RECEIVERS = frozenset({"logger", "this.logger", "this.#logger", "#logger"})
PYTHON_LOGGER_RECEIVERS = frozenset({"logger", "log", "logging", "self.logger", "self._logger"})
PYTHON_LOG_METHODS = frozenset({"debug", "info", "warning", "warn", "error", "exception", "critical"})


def _python_logging_call(node: "SyntaxNode") -> Optional[str]:
    func = node.field("func")
    if func is None or func.kind != "Attribute":
        return None
    method = func.attribute("attrname")
    receiver = func.field("expr")
    if method not in PYTHON_LOG_METHODS or receiver is None:
        return None
    return f"{receiver.text}.{method}" if receiver.text in PYTHON_LOGGER_RECEIVERS else None


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.dialect is Dialect.PYTHON:
        if node.kind != "Call":
            return
        call = _python_logging_call(node)
    else:
        if node.kind != "call_expression":
            return
        method = call_name(node)
        receiver = call_receiver(node)
        if method not in LOGGER_METHODS or receiver is None or receiver.text not in LOGGER_RECEIVERS:
            return
        call = f"{receiver.text}.{method}"
    if call is None:
        return
    ctx.report(
        node,
        f"domain model calls {call}().\n"
        f"Bad: {node.text}\n"
        "Good: return a Result and let the use case decide what to log\n"
        "Reason: the domain model has no infrastructure dependencies.",
    )


policy_check = create_checker(file_pattern=r"/domain/model/.*\.(ts|py)$", visitor=visit)
