"""Use case types and classes follow the <Action><Entity>UseCase naming scheme.

Why: consistent names tie the input, output, exception and implementation of one use case together.
Failure: a use case type alias or class breaks the suffix rules, or the file is not <action>-<entity>-use-case.ts.
"""

import re
from typing import TYPE_CHECKING

from guardrails_policy.domain.rules import create_checker, file_filters
from guardrails_policy.domain.rules.syntax import node_name

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode
    from guardrails_policy.domain.rules import CheckContext

TYPE_ROLES = ("Input", "Output", "Exception", "Result", "Props")
TYPE_ALIAS_PATTERN = re.compile(r"UseCase(" + "|".join(TYPE_ROLES) + r")?$")
FILE_STEM = re.compile(r"^[a-z]+-[a-z]+(-[a-z]+)*-use-case$")


def visit(node: "SyntaxNode", ctx: "CheckContext") -> None:
    if node.kind == "program":
        stem = ctx.file_name[: -len(".ts")]
        if not FILE_STEM.match(stem):
            ctx.report(
                node,
                f'use case file "{ctx.file_name}" is not named <action>-<entity>-use-case.ts.\n'
                f"Bad: {ctx.file_name}\n"
                "Good: create-todo-use-case.ts\n"
                "Reason: the file name mirrors the CreateTodoUseCase type.",
            )
    elif node.kind == "type_alias_declaration":
        name = node_name(node) or ""
        if any(role in name for role in TYPE_ROLES) and not TYPE_ALIAS_PATTERN.search(name):
            ctx.report(
                node,
                f'type "{name}" does not end with UseCase<Role>.\n'
                f"Bad: type {name}\n"
                "Good: type CreateTodoUseCaseInput / CreateTodoUseCaseOutput / CreateTodoUseCaseException\n"
                "Reason: the suffix ties the type to its use case.",
            )
    elif node.kind == "class_declaration":
        name = node_name(node) or ""
        if "UseCase" in name and not name.endswith("UseCaseImpl"):
            ctx.report(
                node,
                f'class "{name}" does not end with UseCaseImpl.\n'
                f"Bad: class {name}\n"
                "Good: class CreateTodoUseCaseImpl implements CreateTodoUseCase\n"
                "Reason: the type alias is the contract, the class its implementation.",
            )


policy_check = create_checker(
    file_pattern=r"-use-case\.ts$",
    visitor=visit,
    exclude=file_filters.TEST_OR_DUMMY,
)
