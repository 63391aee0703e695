"""Typed syntax tree nodes as exposed by the type-checking front end."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag


class SyntaxKind(Enum):
    """Kinds of nodes the extractor distinguishes."""

    SOURCE_FILE = "SourceFile"
    MODULE_DECLARATION = "ModuleDeclaration"
    CLASS_DECLARATION = "ClassDeclaration"
    INTERFACE_DECLARATION = "InterfaceDeclaration"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    VARIABLE_STATEMENT = "VariableStatement"
    VARIABLE_DECLARATION = "VariableDeclaration"
    ENUM_DECLARATION = "EnumDeclaration"
    ENUM_MEMBER = "EnumMember"
    EXPORT_DECLARATION = "ExportDeclaration"
    EXPORT_SPECIFIER = "ExportSpecifier"
    NAMESPACE_EXPORT = "NamespaceExport"
    IMPORT_DECLARATION = "ImportDeclaration"
    TYPE_ALIAS_DECLARATION = "TypeAliasDeclaration"
    PROPERTY_SIGNATURE = "PropertySignature"
    PROPERTY_DECLARATION = "PropertyDeclaration"
    METHOD_SIGNATURE = "MethodSignature"
    METHOD_DECLARATION = "MethodDeclaration"
    CONSTRUCTOR = "Constructor"
    GET_ACCESSOR = "GetAccessor"
    SET_ACCESSOR = "SetAccessor"
    EXPRESSION_WITH_TYPE_ARGUMENTS = "ExpressionWithTypeArguments"
    # Type nodes
    TYPE_REFERENCE = "TypeReference"
    UNION_TYPE = "UnionType"
    INTERSECTION_TYPE = "IntersectionType"
    FUNCTION_TYPE = "FunctionType"
    LITERAL_TYPE = "LiteralType"
    TYPE_LITERAL = "TypeLiteral"
    ARRAY_TYPE = "ArrayType"
    NUMBER_KEYWORD = "NumberKeyword"
    STRING_KEYWORD = "StringKeyword"
    BOOLEAN_KEYWORD = "BooleanKeyword"
    NULL_KEYWORD = "NullKeyword"
    UNDEFINED_KEYWORD = "UndefinedKeyword"
    ANY_KEYWORD = "AnyKeyword"
    VOID_KEYWORD = "VoidKeyword"
    # Expressions
    STRING_LITERAL = "StringLiteral"
    IDENTIFIER = "Identifier"
    EXPRESSION = "Expression"
    CALL_EXPRESSION = "CallExpression"
    NEW_EXPRESSION = "NewExpression"
    PROPERTY_ACCESS_EXPRESSION = "PropertyAccessExpression"
    ELEMENT_ACCESS_EXPRESSION = "ElementAccessExpression"
    PARENTHESIZED_EXPRESSION = "ParenthesizedExpression"
    AS_EXPRESSION = "AsExpression"
    NON_NULL_EXPRESSION = "NonNullExpression"
    TEMPLATE_EXPRESSION = "TemplateExpression"
    NO_SUBSTITUTION_TEMPLATE_LITERAL = "NoSubstitutionTemplateLiteral"


class ModifierFlags(IntFlag):
    """Combined modifier flags of a declaration."""

    NONE = 0
    EXPORT = 1
    AMBIENT = 2
    PUBLIC = 4
    PRIVATE = 8
    PROTECTED = 16
    STATIC = 32
    READONLY = 64
    ABSTRACT = 128
    ASYNC = 256
    DEFAULT = 512
    CONST = 2048


class NodeFlags(IntFlag):
    """Syntactic flags attached to a node."""

    NONE = 0
    LET = 1
    CONST = 2
    NESTED_NAMESPACE = 4
    NAMESPACE = 16


MODIFIER_NAMES: dict[str, ModifierFlags] = {
    "export": ModifierFlags.EXPORT,
    "declare": ModifierFlags.AMBIENT,
    "ambient": ModifierFlags.AMBIENT,
    "public": ModifierFlags.PUBLIC,
    "private": ModifierFlags.PRIVATE,
    "protected": ModifierFlags.PROTECTED,
    "static": ModifierFlags.STATIC,
    "readonly": ModifierFlags.READONLY,
    "abstract": ModifierFlags.ABSTRACT,
    "async": ModifierFlags.ASYNC,
    "default": ModifierFlags.DEFAULT,
    "const": ModifierFlags.CONST,
}

NODE_FLAG_NAMES: dict[str, NodeFlags] = {
    "let": NodeFlags.LET,
    "const": NodeFlags.CONST,
    "nestedNamespace": NodeFlags.NESTED_NAMESPACE,
    "namespace": NodeFlags.NAMESPACE,
}


@dataclass(eq=False)
class Node:
    """A node of the typed syntax tree.

    One shape covers every kind: declarations use ``name``, ``modifiers`` and
    ``children`` (statements, members, declarators, enum members, export
    elements or union constituents); typed constructs use ``type`` and
    ``initializer``. Nodes hash by identity so the program can attach checked
    types to them.
    """

    kind: SyntaxKind
    name: str | None = None
    text: str = ""
    flags: NodeFlags = NodeFlags.NONE
    modifiers: ModifierFlags = ModifierFlags.NONE
    children: list[Node] = field(default_factory=list)
    type: Node | None = None
    initializer: Node | None = None
    heritage: list[Node] = field(default_factory=list)
    module_specifier: Node | None = None
    question_token: bool = False
    value: str | None = None  # literal text, e.g. for LiteralType
    doc: str | None = None
    # SourceFile only
    file_name: str = ""
    is_declaration_file: bool = False
    parent: Node | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Link every owned node back to this one."""
        for child in self.owned_nodes():
            child.parent = self

    def owned_nodes(self) -> list[Node]:
        """Return the direct children of this node in source order."""
        owned = list(self.heritage)
        owned.extend(self.children)
        for extra in (self.type, self.initializer, self.module_specifier):
            if extra is not None:
                owned.append(extra)
        return owned

    def source_file(self) -> Node | None:
        """Return the enclosing source file."""
        node: Node | None = self
        while node is not None and node.kind is not SyntaxKind.SOURCE_FILE:
            node = node.parent
        return node
