from typing import TYPE_CHECKING, Iterator, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from guardrails_policy.domain.constants import Dialect
    from guardrails_policy.domain.entities import (
        PolicyDocument,
        PolicySelection,
        Position,
        SourceFile,
    )


class SyntaxNode(Protocol):
    """
    Dialect-neutral view of one syntax tree node.

    `kind` is the variant tag visitors match on: the tree-sitter node type for
    TypeScript/TSX and the astroid node class name for Python.
    """

    @property
    def kind(self) -> str: ...

    @property
    def dialect(self) -> "Dialect": ...

    @property
    def text(self) -> str: ...

    @property
    def start(self) -> "Position": ...

    @property
    def end(self) -> "Position": ...

    @property
    def parent(self) -> Optional["SyntaxNode"]: ...

    @property
    def children(self) -> Sequence["SyntaxNode"]: ...

    @property
    def tokens(self) -> tuple[str, ...]: ...

    def field(self, name: str) -> Optional["SyntaxNode"]: ...

    def fields(self, name: str) -> Sequence["SyntaxNode"]: ...

    def attribute(self, name: str) -> object: ...


class SourceParserProtocol(Protocol):
    """Turns source text into a SourceFile for one or more dialects."""

    def supports(self, path: str) -> bool: ...

    def parse(self, path: str, text: str) -> "SourceFile": ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def exists(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def read_text(self, path: str) -> str: ...

    def walk_files(self, path: str, exclude_dirs: Sequence[str]) -> Iterator[str]: ...

    def normalize(self, path: str) -> str: ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def handshake(self) -> None: ...
    def step(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...


class PolicyDocumentLoaderProtocol(Protocol):
    async def load(self, selection: "PolicySelection") -> list["PolicyDocument"]: ...
