"""Unit tests for TreeSitterGateway."""

from guardrails_policy.domain.constants import Dialect
from guardrails_policy.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway


class TestTreeSitterGateway:
    def setup_method(self) -> None:
        self.gateway = TreeSitterGateway()

    def test_supports(self) -> None:
        assert self.gateway.supports("server/src/todo.ts")
        assert self.gateway.supports("web/src/button.tsx")
        assert not self.gateway.supports("web/src/env.d.ts")
        assert not self.gateway.supports("tools/check.py")

    def test_dialect_for(self) -> None:
        assert TreeSitterGateway.dialect_for("a.ts") is Dialect.TYPESCRIPT
        assert TreeSitterGateway.dialect_for("a.tsx") is Dialect.TSX
        assert TreeSitterGateway.dialect_for("a.js") is None

    def test_parse_exposes_named_children_and_fields(self) -> None:
        source = self.gateway.parse("todo.ts", "export class Todo {\n  static from() {}\n}\n")
        assert source.dialect is Dialect.TYPESCRIPT
        program = source.tree
        assert program.kind == "program"
        assert program.parent is None

        export = program.children[0]
        assert export.kind == "export_statement"
        declaration = export.children[0]
        assert declaration.kind == "class_declaration"
        assert declaration.field("name").text == "Todo"
        assert declaration.parent.kind == "export_statement"

        method = declaration.field("body").children[0]
        assert method.kind == "method_definition"
        assert "static" in method.tokens
        assert method.start.line == 2
        assert method.start.column == 3

    def test_columns_count_characters_not_bytes(self) -> None:
        source = self.gateway.parse("t.ts", 'const s = "é"; foo();\n')
        call = source.tree.children[1].children[0]
        assert call.kind == "call_expression"
        assert call.start.column == 16

    def test_tsx_parses_jsx(self) -> None:
        source = self.gateway.parse("b.tsx", "const b = <button />;\n")
        assert source.dialect is Dialect.TSX
        assert not any(node.kind == "ERROR" for node in source.tree.children)

    def test_fields_and_attribute(self) -> None:
        source = self.gateway.parse("t.ts", "f(a, b);\n")
        call = source.tree.children[0].children[0]
        assert [arg.text for arg in call.field("arguments").children] == ["a", "b"]
        assert call.fields("function")[0].text == "f"
        assert call.attribute("anything") is None
