"""Helpers over SyntaxNode used by TypeScript policy visitors."""

from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import SyntaxNode

CLASS_KINDS: frozenset[str] = frozenset({"class_declaration", "abstract_class_declaration", "class"})
DECLARATION_KINDS: frozenset[str] = frozenset({"lexical_declaration", "variable_declaration"})
TYPE_NAME_KINDS: frozenset[str] = frozenset(
    {"type_identifier", "nested_type_identifier", "predefined_type", "identifier"}
)


def iter_preorder(node: "SyntaxNode") -> Iterator["SyntaxNode"]:
    """Yield `node` and its descendants depth-first, in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def contains_kind(node: "SyntaxNode", kind: str) -> bool:
    return any(descendant.kind == kind for descendant in iter_preorder(node))


def node_name(node: Optional["SyntaxNode"]) -> Optional[str]:
    """Text of the `name` field, when the node has one."""
    if node is None:
        return None
    name = node.field("name")
    return name.text if name is not None else None


def string_value(node: Optional["SyntaxNode"]) -> Optional[str]:
    """Unquoted value of a string literal (or a template without substitutions)."""
    if node is None:
        return None
    if node.kind == "string":
        return node.text[1:-1]
    if node.kind == "template_string" and not any(
        child.kind == "template_substitution" for child in node.children
    ):
        return node.text[1:-1]
    return None


def property_key(node: "SyntaxNode") -> Optional[str]:
    """Name of an object-literal key given as identifier or string."""
    if node.kind in ("property_identifier", "identifier"):
        return node.text
    return string_value(node)


def unwrap_type(node: Optional["SyntaxNode"]) -> Optional["SyntaxNode"]:
    """Skip the `: T` wrapper tree-sitter puts around annotated types."""
    if node is not None and node.kind == "type_annotation":
        return node.children[0] if node.children else None
    return node


def type_name(node: Optional["SyntaxNode"]) -> Optional[str]:
    """Head name of a type: `Promise` for Promise<X>, `Todo` for Todo."""
    node = unwrap_type(node)
    if node is None:
        return None
    if node.kind == "generic_type":
        name = node.field("name")
        return name.text if name is not None else None
    if node.kind in TYPE_NAME_KINDS:
        return node.text
    return None


def type_arguments(node: Optional["SyntaxNode"]) -> list["SyntaxNode"]:
    node = unwrap_type(node)
    if node is None or node.kind != "generic_type":
        return []
    arguments = node.field("type_arguments")
    return list(arguments.children) if arguments is not None else []


def promise_inner(node: Optional["SyntaxNode"]) -> Optional["SyntaxNode"]:
    """The X in Promise<X>, else None."""
    if type_name(node) != "Promise":
        return None
    arguments = type_arguments(node)
    return arguments[0] if arguments else None


def is_exported(node: "SyntaxNode") -> bool:
    parent = node.parent
    return parent is not None and parent.kind == "export_statement"


def variable_declarators(node: "SyntaxNode") -> list["SyntaxNode"]:
    if node.kind not in DECLARATION_KINDS:
        return []
    return [child for child in node.children if child.kind == "variable_declarator"]


def class_members(node: "SyntaxNode") -> list["SyntaxNode"]:
    body = node.field("body")
    return list(body.children) if body is not None else []


def has_modifier(node: "SyntaxNode", word: str) -> bool:
    """Keyword modifiers (static, async, readonly, ?) and accessibility modifiers."""
    if word in node.tokens:
        return True
    return any(
        child.kind in ("accessibility_modifier", "override_modifier") and child.text == word
        for child in node.children
    )


def call_name(node: "SyntaxNode") -> Optional[str]:
    """`foo` for foo(), `bar` for a.b.bar()."""
    function = node.field("function")
    if function is None:
        return None
    if function.kind == "identifier":
        return function.text
    if function.kind == "member_expression":
        prop = function.field("property")
        return prop.text if prop is not None else None
    return None


def call_receiver(node: "SyntaxNode") -> Optional["SyntaxNode"]:
    """The `a.b` in a.b.c(), or None for plain calls."""
    function = node.field("function")
    if function is None or function.kind != "member_expression":
        return None
    return function.field("object")


def call_chain_methods(node: "SyntaxNode") -> list[str]:
    """Method names of a fluent chain in source order: a.bind(X).to(Y).z() -> [bind, to, z]."""
    names: list[str] = []
    current: Optional["SyntaxNode"] = node
    while current is not None:
        if current.kind == "call_expression":
            current = current.field("function")
        elif current.kind == "member_expression":
            prop = current.field("property")
            if prop is not None:
                names.append(prop.text)
            current = current.field("object")
        else:
            break
    names.reverse()
    return names


def enclosing(node: "SyntaxNode", kinds: frozenset[str]) -> Optional["SyntaxNode"]:
    current = node.parent
    while current is not None:
        if current.kind in kinds:
            return current
        current = current.parent
    return None
