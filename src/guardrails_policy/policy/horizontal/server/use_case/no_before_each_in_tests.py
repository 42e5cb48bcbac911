"""Small use-case tests build their subject inside each test, not in beforeEach.

Why: a fresh instance per test keeps tests independent.
Failure: a small test under application/use-case calls beforeEach().
"""

from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "call_expression":
        return
    function = node.field("function")
    if function is None or function.kind != "identifier" or function.text != "beforeEach":
        return
    ctx.report(
        node,
        "small test uses beforeEach.\n"
        "Bad: beforeEach(() => { useCase = new CreateTodoUseCaseImpl({ ... }); });\n"
        'Good: test("...", async () => { const useCase = new CreateTodoUseCaseImpl({ ... }); });\n'
        "Reason: per-test instances keep tests independent. Medium tests may use beforeAll for resources.",
    )


policy_check = create_checker(
    file_pattern=r"/application/use-case/.*\.small\.test\.ts$",
    visitor=visit,
)
