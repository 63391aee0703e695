"""Typed program provider interface and its in-memory implementation."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, Protocol

from ts2jsdoc.errors import ProgramDiagnosticsError
from ts2jsdoc.syntax import ModifierFlags, Node, SyntaxKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ts2jsdoc.checked_type import CheckedType


class TypedProgram(Protocol):
    """What the extractor needs from a type-checking front end."""

    common_source_directory: str
    out_dir: str | None
    diagnostics: list[str]

    def source_units(self) -> Iterable[Node]:
        """Enumerate all source units, declaration units included."""
        ...

    def source_unit(self, file_name: str) -> Node | None:
        """Return the unit for a file name, if it is part of the program."""
        ...

    def type_at(self, node: Node) -> CheckedType | None:
        """Return the checked type at a node."""
        ...

    def modifier_flags(self, node: Node) -> ModifierFlags:
        """Return the combined modifier flags of a declaration."""
        ...


# Kinds whose modifiers are inherited by the nested declaration.
_MODIFIER_CONTAINERS = {SyntaxKind.VARIABLE_STATEMENT}


class InMemoryProgram:
    """A typed program whose tree and checked types are already materialized."""

    def __init__(
        self,
        units: list[Node],
        types: dict[Node, CheckedType] | None = None,
        common_source_directory: str = "",
        out_dir: str | None = None,
        diagnostics: list[str] | None = None,
    ) -> None:
        """Index units by normalized file name."""
        self.units = units
        self.types: dict[Node, CheckedType] = types if types is not None else {}
        self.common_source_directory = common_source_directory
        self.out_dir = out_dir
        self.diagnostics = diagnostics or []
        self._by_file_name = {
            posixpath.normpath(u.file_name.replace("\\", "/")): u for u in units
        }

    def source_units(self) -> list[Node]:
        """Return all units in program order."""
        return list(self.units)

    def source_unit(self, file_name: str) -> Node | None:
        """Look a unit up by file name."""
        return self._by_file_name.get(posixpath.normpath(file_name.replace("\\", "/")))

    def type_at(self, node: Node) -> CheckedType | None:
        """Return the checked type recorded for a node."""
        return self.types.get(node)

    def set_type(self, node: Node, checked: CheckedType) -> None:
        """Record the checked type of a node."""
        self.types[node] = checked

    def modifier_flags(self, node: Node) -> ModifierFlags:
        """Combine a node's own modifiers with those it inherits.

        Declarators inherit from their variable statement, and everything in a
        declaration unit is ambient.
        """
        flags = node.modifiers
        parent = node.parent
        while parent is not None and parent.kind in _MODIFIER_CONTAINERS:
            flags |= parent.modifiers
            parent = parent.parent
        unit = node.source_file()
        if unit is not None and unit.is_declaration_file:
            flags |= ModifierFlags.AMBIENT
        return flags


def check_errors(program: TypedProgram) -> None:
    """Fail when the front end reported diagnostics."""
    if program.diagnostics:
        raise ProgramDiagnosticsError(list(program.diagnostics))
