"""Astroid Gateway - parses Python sources into SyntaxNode views."""

from typing import Optional

import astroid  # type: ignore[import-untyped]
from astroid import nodes

from guardrails_policy.domain.constants import Dialect
from guardrails_policy.domain.entities import Position, SourceFile
from guardrails_policy.domain.exceptions import ParseError


class AstroidSyntaxNode:
    """
    SyntaxNode over an astroid node.

    kind is the astroid class name (Call, Attribute, ImportFrom...). Scalar
    attributes such as Attribute.attrname or ImportFrom.modname are reached
    through attribute().
    """

    __slots__ = ("_node", "_lines", "_children")

    def __init__(self, node: nodes.NodeNG, lines: list[str]) -> None:
        self._node = node
        self._lines = lines
        self._children: Optional[list["AstroidSyntaxNode"]] = None

    @property
    def kind(self) -> str:
        return type(self._node).__name__

    @property
    def dialect(self) -> Dialect:
        return Dialect.PYTHON

    @property
    def start(self) -> Position:
        line = self._node.lineno or 1
        return Position(line=line, column=(self._node.col_offset or 0) + 1)

    @property
    def end(self) -> Position:
        line = self._node.end_lineno or self.start.line
        column = self._node.end_col_offset
        return Position(line=line, column=(column if column is not None else 0) + 1)

    @property
    def text(self) -> str:
        node = self._node
        if isinstance(node, nodes.Module):
            return "".join(self._lines)
        if node.lineno is None or node.end_lineno is None or node.end_col_offset is None:
            return node.as_string()
        first, last = node.lineno - 1, node.end_lineno - 1
        if first == last:
            return self._lines[first][node.col_offset:node.end_col_offset]
        parts = [self._lines[first][node.col_offset:]]
        parts.extend(self._lines[first + 1:last])
        parts.append(self._lines[last][:node.end_col_offset])
        return "".join(parts)

    @property
    def parent(self) -> Optional["AstroidSyntaxNode"]:
        parent = self._node.parent
        return AstroidSyntaxNode(parent, self._lines) if parent is not None else None

    @property
    def children(self) -> list["AstroidSyntaxNode"]:
        if self._children is None:
            self._children = [AstroidSyntaxNode(child, self._lines) for child in self._node.get_children()]
        return self._children

    @property
    def tokens(self) -> tuple[str, ...]:
        return ()

    def field(self, name: str) -> Optional["AstroidSyntaxNode"]:
        value = getattr(self._node, name, None)
        if isinstance(value, nodes.NodeNG):
            return AstroidSyntaxNode(value, self._lines)
        return None

    def fields(self, name: str) -> list["AstroidSyntaxNode"]:
        value = getattr(self._node, name, None)
        if isinstance(value, (list, tuple)):
            return [AstroidSyntaxNode(v, self._lines) for v in value if isinstance(v, nodes.NodeNG)]
        single = self.field(name)
        return [single] if single is not None else []

    def attribute(self, name: str) -> object:
        value = getattr(self._node, name, None)
        return None if isinstance(value, nodes.NodeNG) else value

    def __repr__(self) -> str:
        return f"<AstroidSyntaxNode {self.kind} {self.start.line}:{self.start.column}>"


class AstroidGateway:
    """Parses .py sources with astroid; syntax errors become ParseError."""

    def supports(self, path: str) -> bool:
        return path.endswith(".py")

    def parse(self, path: str, text: str) -> SourceFile:
        try:
            module = astroid.parse(text, path=path)
        except astroid.AstroidSyntaxError as exc:
            raise ParseError(path, str(getattr(exc, "error", None) or exc)) from exc
        except (RecursionError, ValueError) as exc:
            # Too deeply nested for the compiler, or null bytes on older interpreters.
            raise ParseError(path, f"{type(exc).__name__}: {exc}") from exc
        return SourceFile(
            path=path,
            text=text,
            tree=AstroidSyntaxNode(module, text.splitlines(keepends=True)),
            dialect=Dialect.PYTHON,
        )
