"""Logic for turning a source unit's top-level declarations into descriptors."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ts2jsdoc.errors import TypeResolutionError
from ts2jsdoc.evaluate_literal import LiteralEvaluationError, evaluate_literal
from ts2jsdoc.models import (
    ClassDescriptor,
    EnumDescriptor,
    EnumMemberDescriptor,
    MethodDescriptor,
    PropertyDescriptor,
    TypeReference,
    VariableDescriptor,
)
from ts2jsdoc.sort_methods import sort_methods
from ts2jsdoc.source_unit_model import SourceUnitModel
from ts2jsdoc.syntax import ModifierFlags, Node, NodeFlags, SyntaxKind

if TYPE_CHECKING:
    from ts2jsdoc.module_path_resolver import ModulePathResolver
    from ts2jsdoc.source_unit_module_info import SourceUnitModuleInfo
    from ts2jsdoc.type_reference_resolver import TypeReferenceResolver
    from ts2jsdoc.typed_program import TypedProgram

logger = logging.getLogger(__name__)

CLASS_LIKE_KINDS = {SyntaxKind.CLASS_DECLARATION, SyntaxKind.INTERFACE_DECLARATION}
PROPERTY_KINDS = {SyntaxKind.PROPERTY_SIGNATURE, SyntaxKind.PROPERTY_DECLARATION}
METHOD_KINDS = {SyntaxKind.METHOD_DECLARATION, SyntaxKind.METHOD_SIGNATURE}

# Initializers that are not plain literals are documented by their source text.
RAW_TEXT_INITIALIZER_KINDS = {
    SyntaxKind.CALL_EXPRESSION,
    SyntaxKind.NEW_EXPRESSION,
    SyntaxKind.PROPERTY_ACCESS_EXPRESSION,
    SyntaxKind.ELEMENT_ACCESS_EXPRESSION,
    SyntaxKind.PARENTHESIZED_EXPRESSION,
    SyntaxKind.AS_EXPRESSION,
    SyntaxKind.NON_NULL_EXPRESSION,
    SyntaxKind.TEMPLATE_EXPRESSION,
    SyntaxKind.NO_SUBSTITUTION_TEMPLATE_LITERAL,
}

PROTECTED_TAG = "@protected"
ENUM_VALUE_TYPE = "number"


@dataclass
class UnitExtraction:
    """Everything extracted from one source unit."""

    module_info: SourceUnitModuleInfo
    model: SourceUnitModel
    reexports: dict[str, list[str]] = field(default_factory=dict)


class DeclarationExtractor:
    """Walks source units and builds descriptors for exported declarations."""

    def __init__(
        self,
        program: TypedProgram,
        module_paths: ModulePathResolver,
        type_resolver: TypeReferenceResolver,
    ) -> None:
        """Initialize the extractor with its collaborators."""
        self.program = program
        self.module_paths = module_paths
        self.type_resolver = type_resolver

    def extract(self, unit: Node) -> UnitExtraction | None:
        """Extract the documentable top-level declarations of a unit."""
        if not unit.children:
            return None

        info = self.module_paths.module_info(unit)
        module_path = "module:" + info.id
        extraction = UnitExtraction(info, SourceUnitModel())
        model = extraction.model

        for statement in unit.children:
            kind = statement.kind
            if kind in CLASS_LIKE_KINDS:
                clazz = self.describe_class_or_interface(statement, module_path)
                if clazz is not None:
                    model.classes.append(clazz)
            elif kind is SyntaxKind.FUNCTION_DECLARATION:
                function = self.describe_function(statement)
                if function is not None:
                    model.functions.append(function)
            elif kind is SyntaxKind.EXPORT_DECLARATION:
                if info.is_main:
                    self._handle_export_from_main(statement, unit, extraction.reexports)
            elif kind is SyntaxKind.VARIABLE_STATEMENT:
                variable = self.describe_variable(statement)
                if variable is not None:
                    model.members.append(variable)
            elif kind is SyntaxKind.ENUM_DECLARATION:
                enum = self.describe_enum(statement, module_path)
                if enum is not None:
                    model.members.append(enum)
        return extraction

    def _is_exported(self, node: Node) -> bool:
        return bool(self.program.modifier_flags(node) & ModifierFlags.EXPORT)

    def describe_class_or_interface(
        self, node: Node, module_path: str
    ) -> ClassDescriptor | None:
        """Describe an exported class or interface with its visible members."""
        if not self._is_exported(node) or not node.name:
            return None

        # Only the last heritage type is kept.
        parents: list[TypeReference] = []
        for heritage_type in node.heritage:
            resolved = self.type_resolver.type_names_by_node(heritage_type)
            if resolved is not None:
                parents = resolved

        is_class = node.kind is SyntaxKind.CLASS_DECLARATION
        methods: list[MethodDescriptor] = []
        properties: list[PropertyDescriptor] = []
        for member in node.children:
            if member.kind in PROPERTY_KINDS:
                prop = self.describe_property(member, is_parent_class=is_class)
                if prop is not None:
                    properties.append(prop)
            elif member.kind in METHOD_KINDS:
                method = self.describe_method(member)
                if method is not None:
                    methods.append(method)

        return ClassDescriptor(
            module_path=module_path,
            name=node.name,
            methods=sort_methods(methods),
            properties=properties,
            parents=parents,
            is_interface=node.kind is SyntaxKind.INTERFACE_DECLARATION,
            node=node,
        )

    def describe_property(
        self, node: Node, *, is_parent_class: bool
    ) -> PropertyDescriptor | None:
        """Describe a property unless it is private."""
        flags = self.program.modifier_flags(node)
        if flags & ModifierFlags.PRIVATE or not node.name:
            return None

        name = node.name
        types: list[TypeReference] | None
        if node.type is None:
            checked = self.program.type_at(node)
            types = None if checked is None else self.type_resolver.type_names(checked, node)
        else:
            types = self.type_resolver.type_names_by_node(node.type)
        if not types:
            msg = f"Cannot resolve type of property {name}"
            raise TypeResolutionError(msg, node.text)

        default_value = self._default_value(node.initializer, name)

        is_optional = node.question_token or default_value is not None or "null" in types
        if not is_optional and is_parent_class and flags & ModifierFlags.READONLY:
            is_optional = True
        return PropertyDescriptor(
            name=name,
            types=types,
            is_optional=is_optional,
            default_value=default_value,
            node=node,
        )

    def _default_value(self, initializer: Node | None, name: str) -> object:
        if initializer is None:
            return None
        if initializer.kind in RAW_TEXT_INITIALIZER_KINDS:
            return initializer.text

        try:
            value = evaluate_literal(initializer.text)
        except LiteralEvaluationError:
            logger.info("exception evaluating initializer for property %s", name)
            return initializer.text

        if value is None or isinstance(value, (str, int, float, bool, list)):
            return value
        logger.warning("unknown initializer for property %s: %r", name, value)
        return None

    def describe_method(self, node: Node) -> MethodDescriptor | None:
        """Describe a method unless it is private; protected ones are tagged."""
        flags = self.program.modifier_flags(node)
        if flags & ModifierFlags.PRIVATE or not node.name:
            return None

        is_protected = bool(flags & ModifierFlags.PROTECTED)
        tags = [PROTECTED_TAG] if is_protected else []
        return MethodDescriptor(name=node.name, tags=tags, is_protected=is_protected, node=node)

    def describe_function(self, node: Node) -> MethodDescriptor | None:
        """Describe an exported top-level function."""
        if not self._is_exported(node) or not node.name:
            return None
        return MethodDescriptor(name=node.name, tags=[], node=node)

    def describe_variable(self, node: Node) -> VariableDescriptor | None:
        """Describe an exported single-declarator variable statement."""
        if not self._is_exported(node):
            return None

        declarations = node.children
        if len(declarations) != 1:
            return None
        declaration = declarations[0]
        if declaration.type is None or not declaration.name:
            return None

        types: list[TypeReference] | None
        checked = self.program.type_at(declaration)
        if (
            checked is not None
            and checked.symbol is not None
            and checked.symbol.value_declaration is not None
        ):
            name = self.type_resolver.symbol_path(checked)
            types = None if name is None else [name]
        else:
            types = self.type_resolver.type_names_by_node(declaration.type)
        if not types:
            msg = f"Cannot resolve type of variable {declaration.name}"
            raise TypeResolutionError(msg, declaration.text or node.text)

        # Constness lives on the declaration list, not the declarator.
        return VariableDescriptor(
            types=types,
            name=declaration.name,
            is_const=bool(node.flags & NodeFlags.CONST),
            node=node,
        )

    def describe_enum(self, node: Node, module_path: str) -> EnumDescriptor | None:
        """Describe an exported enum; member values are not captured."""
        if not self._is_exported(node) or not node.name:
            return None

        enum_id = f"{module_path}.{node.name}"
        properties = [
            EnumMemberDescriptor(
                name=member.name,
                memberof=enum_id,
                type_names=[ENUM_VALUE_TYPE],
            )
            for member in node.children
            if member.kind is SyntaxKind.ENUM_MEMBER and member.name
        ]
        return EnumDescriptor(
            id=enum_id,
            name=node.name,
            memberof=module_path,
            properties=properties,
            type_names=[ENUM_VALUE_TYPE],
            node=node,
        )

    def _handle_export_from_main(
        self, node: Node, unit: Node, reexports: dict[str, list[str]]
    ) -> None:
        """Record ``export { A, B } from "./sub"`` for later flattening."""
        specifier = node.module_specifier
        if specifier is None or not node.children:
            logger.warning("Unsupported export declaration: %s", node.text)
            return
        if specifier.kind is not SyntaxKind.STRING_LITERAL or specifier.value is None:
            logger.warning("Unsupported module specifier: %s", node.text)
            return

        file_path = specifier.value
        if not file_path.startswith("."):
            logger.info("Skipping re-export from external module %s", file_path)
            return

        unit_dir = posixpath.dirname(unit.file_name.replace("\\", "/"))
        full_file_name = posixpath.normpath(posixpath.join(unit_dir, file_path)) + ".ts"
        target = self.program.source_unit(full_file_name)
        if target is None:
            logger.warning("Cannot find re-exported source file %s", full_file_name)
            return

        names: list[str] = []
        for element in node.children:
            if element.kind is SyntaxKind.EXPORT_SPECIFIER and element.name:
                names.append(element.name)
            else:
                logger.warning("Unsupported export element: %s", element.text)

        module_id = self.module_paths.module_info(target).id
        reexports.setdefault(module_id, []).extend(names)
