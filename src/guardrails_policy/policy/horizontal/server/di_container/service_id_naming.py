"""Service ids are UPPER_SNAKE_CASE, carry no IMPL suffix and equal their own value.

Why: ids are looked up by string at resolution time; one spelling avoids silent mismatches.
Failure: a key in service-id.ts that is not UPPER_SNAKE_CASE, contains IMPL or differs from its value.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import property_key, string_value

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

UPPER_SNAKE = re.compile(r"^[A-Z][A-Z0-9_]*$")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_IMPL = re.compile(r"_?IMPL")


def to_upper_snake(name: str) -> str:
    """userRepo -> USER_REPO, CreateProjectUseCase -> CREATE_PROJECT_USE_CASE."""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).upper()


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind != "pair":
        return
    key = node.field("key")
    if key is None:
        return
    name = property_key(key)
    if name is None:
        return

    if not UPPER_SNAKE.match(name):
        ctx.report(
            node,
            f'service id "{name}" is not UPPER_SNAKE_CASE.\n'
            f'Bad: {name}: "{name}"\n'
            f'Good: {to_upper_snake(name)}: "{to_upper_snake(name)}"\n'
            "Reason: service ids are constants shared by every container registration.",
        )
        return

    if "IMPL" in name:
        suggested = _IMPL.sub("", name)
        ctx.report(
            node,
            f'service id "{name}" names an implementation.\n'
            f'Bad: {name}: "{name}"\n'
            f'Good: {suggested}: "{suggested}"\n'
            "Reason: ids identify the abstraction; the bound implementation may change.",
        )
        return

    value = string_value(node.field("value"))
    if value is not None and value != name:
        ctx.report(
            node,
            f'service id key "{name}" does not match its value "{value}".\n'
            f'Bad: {name}: "{value}"\n'
            f'Good: {name}: "{name}"\n'
            "Reason: key and value must be identical so lookups by either spelling agree.",
        )


policy_check = create_checker(
    file_pattern=r"service-id\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
