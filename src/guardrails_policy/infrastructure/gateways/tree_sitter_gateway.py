"""Tree-sitter Gateway - parses TypeScript/TSX into SyntaxNode views."""

import logging
from functools import lru_cache
from typing import Optional

import tree_sitter
import tree_sitter_typescript

from guardrails_policy.domain.constants import Dialect
from guardrails_policy.domain.entities import Position, SourceFile
from guardrails_policy.domain.rules.file_filters import is_type_declaration_file

log = logging.getLogger(__name__)

_DIALECTS: dict[str, Dialect] = {".ts": Dialect.TYPESCRIPT, ".tsx": Dialect.TSX}


@lru_cache(maxsize=None)
def _language(dialect: Dialect) -> tree_sitter.Language:
    if dialect is Dialect.TSX:
        return tree_sitter.Language(tree_sitter_typescript.language_tsx())
    return tree_sitter.Language(tree_sitter_typescript.language_typescript())


class TreeSitterSyntaxNode:
    """SyntaxNode over a tree_sitter.Node. `children` holds named children only."""

    __slots__ = ("_node", "_source", "_dialect", "_children")

    def __init__(self, node: tree_sitter.Node, source: bytes, dialect: Dialect) -> None:
        self._node = node
        self._source = source
        self._dialect = dialect
        self._children: Optional[list["TreeSitterSyntaxNode"]] = None

    def _wrap(self, node: Optional[tree_sitter.Node]) -> Optional["TreeSitterSyntaxNode"]:
        if node is None:
            return None
        return TreeSitterSyntaxNode(node, self._source, self._dialect)

    def _position(self, byte_offset: int, row: int, byte_column: int) -> Position:
        line_start = byte_offset - byte_column
        column = len(self._source[line_start:byte_offset].decode("utf-8", errors="replace"))
        return Position(line=row + 1, column=column + 1)

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def text(self) -> str:
        return self._source[self._node.start_byte:self._node.end_byte].decode("utf-8", errors="replace")

    @property
    def start(self) -> Position:
        row, column = self._node.start_point
        return self._position(self._node.start_byte, row, column)

    @property
    def end(self) -> Position:
        row, column = self._node.end_point
        return self._position(self._node.end_byte, row, column)

    @property
    def parent(self) -> Optional["TreeSitterSyntaxNode"]:
        return self._wrap(self._node.parent)

    @property
    def children(self) -> list["TreeSitterSyntaxNode"]:
        if self._children is None:
            self._children = [
                TreeSitterSyntaxNode(child, self._source, self._dialect)
                for child in self._node.named_children
            ]
        return self._children

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(child.type for child in self._node.children if not child.is_named)

    def field(self, name: str) -> Optional["TreeSitterSyntaxNode"]:
        return self._wrap(self._node.child_by_field_name(name))

    def fields(self, name: str) -> list["TreeSitterSyntaxNode"]:
        return [
            TreeSitterSyntaxNode(child, self._source, self._dialect)
            for child in self._node.children_by_field_name(name)
        ]

    def attribute(self, name: str) -> object:
        return None

    def __repr__(self) -> str:
        start = self.start
        return f"<TreeSitterSyntaxNode {self.kind} {start.line}:{start.column}>"


class TreeSitterGateway:
    """Parses .ts and .tsx sources. A fresh Parser per call keeps threads independent."""

    def supports(self, path: str) -> bool:
        return not is_type_declaration_file(path) and self.dialect_for(path) is not None

    @staticmethod
    def dialect_for(path: str) -> Optional[Dialect]:
        for suffix, dialect in _DIALECTS.items():
            if path.endswith(suffix):
                return dialect
        return None

    def parse(self, path: str, text: str) -> SourceFile:
        dialect = self.dialect_for(path) or Dialect.TYPESCRIPT
        source = text.encode("utf-8")
        parser = tree_sitter.Parser(_language(dialect))
        tree = parser.parse(source)
        if tree.root_node.has_error:
            log.debug("tree-sitter recovered from syntax errors in %s", path)
        return SourceFile(
            path=path,
            text=text,
            tree=TreeSitterSyntaxNode(tree.root_node, source, dialect),
            dialect=dialect,
        )
