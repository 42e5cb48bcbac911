from dataclasses import dataclass, field
from typing import Optional

from guardrails_policy.domain.constants import Dialect
from guardrails_policy.domain.engine import TraversalEngine
from guardrails_policy.domain.entities import Diagnostic, FileReport, Position, SourceFile
from guardrails_policy.domain.rules import PolicyCheck
from guardrails_policy.infrastructure.gateways.astroid_gateway import AstroidGateway
from guardrails_policy.infrastructure.gateways.source_gateway import SourceGateway
from guardrails_policy.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway

_PARSER = SourceGateway([TreeSitterGateway(), AstroidGateway()])


def parse(path: str, code: str) -> SourceFile:
    return _PARSER.parse(path, code)


def run_policy(check: PolicyCheck, path: str, code: str) -> FileReport:
    """Parse `code` as if it lived at `path` and run a single check over it."""
    return TraversalEngine().run_checks(parse(path, code), [check])


def diagnostics(check: PolicyCheck, path: str, code: str) -> list[Diagnostic]:
    report = run_policy(check, path, code)
    assert report.tooling_errors == (), report.tooling_errors
    return list(report.diagnostics)


@dataclass
class FakeNode:
    """Minimal SyntaxNode for engine tests that need no parser."""

    kind: str
    children: list["FakeNode"] = field(default_factory=list)
    line: int = 1
    text: str = ""
    parent: Optional["FakeNode"] = None
    dialect: Dialect = Dialect.TYPESCRIPT
    tokens: tuple[str, ...] = ()

    @property
    def start(self) -> Position:
        return Position(self.line, 1)

    @property
    def end(self) -> Position:
        return Position(self.line, 2)

    def field(self, name: str) -> Optional["FakeNode"]:
        return None

    def fields(self, name: str) -> list["FakeNode"]:
        return []

    def attribute(self, name: str) -> object:
        return None


def fake_source(path: str, tree: FakeNode) -> SourceFile:
    return SourceFile(path=path, text="", tree=tree, dialect=Dialect.TYPESCRIPT)
