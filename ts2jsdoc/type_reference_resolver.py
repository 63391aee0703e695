"""Logic for converting type expressions into qualified name paths.

A type is documented as a list of alternatives: unions are flattened into one
list, generic instantiations become a ``TypeRef`` carrying resolved
sub-types, and everything else becomes a single qualified name such as
``module:my-pkg/out/util.Foo`` or ``ns:Foo``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ts2jsdoc.checked_type import CheckedType, TypeFlags
from ts2jsdoc.errors import TypeResolutionError
from ts2jsdoc.models import TypeRef, TypeReference
from ts2jsdoc.syntax import ModifierFlags, Node, NodeFlags, SyntaxKind

if TYPE_CHECKING:
    from ts2jsdoc.module_path_resolver import ModulePathResolver
    from ts2jsdoc.typed_program import TypedProgram

logger = logging.getLogger(__name__)

CALLBACK_TYPE_NAME = "callback"
TYPE_LITERAL_NAME = "Object.<string, any>"

KEYWORD_TYPE_NAMES: dict[SyntaxKind, str] = {
    SyntaxKind.NUMBER_KEYWORD: "number",
    SyntaxKind.STRING_KEYWORD: "string",
    SyntaxKind.BOOLEAN_KEYWORD: "boolean",
    SyntaxKind.NULL_KEYWORD: "null",
    SyntaxKind.UNDEFINED_KEYWORD: "undefined",
    SyntaxKind.ANY_KEYWORD: "any",
    SyntaxKind.VOID_KEYWORD: "void",
}

# Checked in order: boolean shares bits with unions, literals with primitives.
PRIMITIVE_FLAG_NAMES: list[tuple[TypeFlags, str]] = [
    (TypeFlags.BOOLEAN, "boolean"),
    (TypeFlags.VOID, "void"),
    (TypeFlags.NULL, "null"),
    (TypeFlags.STRING, "string"),
    (TypeFlags.NUMBER, "number"),
    (TypeFlags.UNDEFINED, "undefined"),
    (TypeFlags.ANY, "any"),
]


def quote_literal(text: str | None) -> str:
    """Render a literal type the way it is documented."""
    return f'"{text if text is not None else ""}"'


class TypeReferenceResolver:
    """Resolves type nodes and checked types to TypeReference lists."""

    def __init__(self, program: TypedProgram, module_paths: ModulePathResolver) -> None:
        """Initialize the resolver with the program and module path resolver."""
        self.program = program
        self.module_paths = module_paths

    def type_names_by_node(self, node: Node) -> list[TypeReference] | None:
        """Resolve a type node, using syntax first and the checker otherwise."""
        kind = node.kind
        if kind is SyntaxKind.UNION_TYPE:
            return self._nodes_to_list(node.children, node)
        if kind is SyntaxKind.FUNCTION_TYPE:
            return [CALLBACK_TYPE_NAME]
        if kind in KEYWORD_TYPE_NAMES:
            return [KEYWORD_TYPE_NAMES[kind]]
        if kind is SyntaxKind.LITERAL_TYPE:
            return [quote_literal(node.value)]
        if kind is SyntaxKind.TYPE_LITERAL:
            # Object shapes are not modeled member by member.
            return [TYPE_LITERAL_NAME]

        checked = self.program.type_at(node)
        if checked is None:
            return None
        return self.type_names(checked, node)

    def type_names(self, checked: CheckedType, origin: Node) -> list[TypeReference]:
        """Resolve a checked type; ``origin`` is only used for diagnostics."""
        flags = checked.flags
        if (
            flags & TypeFlags.UNION_OR_INTERSECTION
            and not flags & TypeFlags.ENUM
            and not flags & TypeFlags.BOOLEAN
        ):
            names: list[TypeReference] = []
            for constituent in checked.types:
                names.extend(self.type_names(constituent, origin))
            return names

        name = self.symbol_path(checked)
        if name is None:
            msg = "Cannot infer type name path"
            raise TypeResolutionError(msg, origin.text)

        if checked.type_arguments is not None:
            sub_types: list[TypeReference] = []
            for argument in checked.type_arguments:
                sub_types.extend(self.type_names(argument, origin))
            return [TypeRef(name=name, sub_types=sub_types)]
        return [name]

    def symbol_path(self, checked: CheckedType) -> str | None:
        """Return the qualified path of a checked type's symbol.

        Primitive and literal types resolve from their flags. Ambient
        declarations keep their bare name; everything else is qualified by its
        first enclosing namespace or source unit.
        """
        for flag, name in PRIMITIVE_FLAG_NAMES:
            if checked.flags & flag:
                return name
        if checked.flags & TypeFlags.LITERAL:
            return quote_literal(checked.value)

        symbol = checked.symbol
        if symbol is None or not symbol.declarations:
            return None

        declaration = symbol.primary_declaration()
        if declaration is None:
            return None
        if self.program.modifier_flags(declaration) & ModifierFlags.AMBIENT:
            # e.g. Error from the standard library declarations
            return symbol.name

        scope: Node | None = declaration
        while scope is not None:
            if scope.kind is SyntaxKind.MODULE_DECLARATION and not (
                scope.flags & NodeFlags.NESTED_NAMESPACE
            ):
                if scope.flags & NodeFlags.NAMESPACE:
                    return f"{scope.name}:{symbol.name}"
                return f"module:{scope.name}.{symbol.name}"
            if scope.kind is SyntaxKind.SOURCE_FILE:
                module_id = self.module_paths.module_info(scope).id
                return f"module:{module_id}.{symbol.name}"
            scope = scope.parent

        logger.warning("Cannot find parent for %s", symbol.name)
        return None

    def _nodes_to_list(self, nodes: list[Node], origin: Node) -> list[TypeReference]:
        names: list[TypeReference] = []
        for node in nodes:
            resolved = self.type_names_by_node(node)
            if not resolved:
                msg = "cannot get name for"
                raise TypeResolutionError(msg, origin.text)
            names.extend(resolved)
        return names
