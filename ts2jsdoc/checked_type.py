"""Checked types and symbols reported by the type checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ts2jsdoc.syntax import Node


class TypeFlags(IntFlag):
    """Type checker flags; several kinds share bits the way the checker does."""

    NONE = 0
    ANY = 1
    STRING = 2
    NUMBER = 4
    BOOLEAN = 8
    ENUM = 16
    STRING_LITERAL = 32
    NUMBER_LITERAL = 64
    BOOLEAN_LITERAL = 128
    ENUM_LITERAL = 256
    VOID = 1024
    UNDEFINED = 2048
    NULL = 4096
    OBJECT = 32768
    UNION = 65536
    INTERSECTION = 131072
    TYPE_PARAMETER = 262144

    LITERAL = STRING_LITERAL | NUMBER_LITERAL | BOOLEAN_LITERAL
    UNION_OR_INTERSECTION = UNION | INTERSECTION


TYPE_FLAG_NAMES: dict[str, TypeFlags] = {
    "any": TypeFlags.ANY,
    "string": TypeFlags.STRING,
    "number": TypeFlags.NUMBER,
    "boolean": TypeFlags.BOOLEAN,
    "enum": TypeFlags.ENUM,
    "stringLiteral": TypeFlags.STRING_LITERAL,
    "numberLiteral": TypeFlags.NUMBER_LITERAL,
    "booleanLiteral": TypeFlags.BOOLEAN_LITERAL,
    "enumLiteral": TypeFlags.ENUM_LITERAL,
    "void": TypeFlags.VOID,
    "undefined": TypeFlags.UNDEFINED,
    "null": TypeFlags.NULL,
    "object": TypeFlags.OBJECT,
    "union": TypeFlags.UNION,
    "intersection": TypeFlags.INTERSECTION,
    "typeParameter": TypeFlags.TYPE_PARAMETER,
}


@dataclass(eq=False)
class Symbol:
    """A named entity with the declarations that introduce it."""

    name: str
    declarations: list[Node] = field(default_factory=list)
    value_declaration: Node | None = None

    def primary_declaration(self) -> Node | None:
        """Return the value declaration, falling back to the first declaration."""
        if self.value_declaration is not None:
            return self.value_declaration
        return self.declarations[0] if self.declarations else None


@dataclass(eq=False)
class CheckedType:
    """A type as inferred by the checker."""

    flags: TypeFlags = TypeFlags.NONE
    symbol: Symbol | None = None
    types: list[CheckedType] = field(default_factory=list)  # union constituents
    type_arguments: list[CheckedType] | None = None
    value: str | None = None  # literal text
