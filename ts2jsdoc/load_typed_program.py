"""Logic for loading a typed program dump produced by a type-checking front end.

The dump is YAML (or JSON, which YAML reads as well)::

    commonSourceDirectory: /work/src
    compilerOptions: {outDir: /work/out}
    diagnostics: []
    sourceFiles:
      - fileName: /work/src/util.ts
        statements:
          - kind: ClassDeclaration
            id: Util
            name: Util
            modifiers: [export]
            members:
              - kind: PropertyDeclaration
                name: size
                type: number
                initializer: "1"

Any node may carry an ``id`` and an inline ``checkedType``; symbols of checked
types point at their declarations by node id.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ts2jsdoc.checked_type import TYPE_FLAG_NAMES, CheckedType, Symbol, TypeFlags
from ts2jsdoc.errors import ProgramDumpError
from ts2jsdoc.syntax import (
    MODIFIER_NAMES,
    NODE_FLAG_NAMES,
    ModifierFlags,
    Node,
    NodeFlags,
    SyntaxKind,
)
from ts2jsdoc.typed_program import InMemoryProgram

CHILD_KEYS = ("statements", "members", "declarations", "types", "elements")

KEYWORD_SHORTHANDS: dict[str, SyntaxKind] = {
    "number": SyntaxKind.NUMBER_KEYWORD,
    "string": SyntaxKind.STRING_KEYWORD,
    "boolean": SyntaxKind.BOOLEAN_KEYWORD,
    "null": SyntaxKind.NULL_KEYWORD,
    "undefined": SyntaxKind.UNDEFINED_KEYWORD,
    "any": SyntaxKind.ANY_KEYWORD,
    "void": SyntaxKind.VOID_KEYWORD,
}


def load_typed_program(path: Path) -> InMemoryProgram:
    """Load and parse a typed program dump file."""
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        msg = f"Cannot parse program dump {path}: {e}"
        raise ProgramDumpError(msg) from e
    if not isinstance(doc, dict):
        msg = f"Program dump {path} must be a mapping"
        raise ProgramDumpError(msg)
    return build_typed_program(doc)


def build_typed_program(doc: dict[str, Any]) -> InMemoryProgram:
    """Build an in-memory program from an already parsed dump."""
    builder = _ProgramBuilder()
    units = [builder.source_file(raw) for raw in doc.get("sourceFiles") or []]
    types = builder.resolve_types()

    compiler_options = doc.get("compilerOptions") or {}
    return InMemoryProgram(
        units,
        types,
        common_source_directory=str(doc.get("commonSourceDirectory") or ""),
        out_dir=compiler_options.get("outDir"),
        diagnostics=[str(d) for d in doc.get("diagnostics") or []],
    )


def _parse_kind(raw: Any) -> SyntaxKind:
    try:
        return SyntaxKind(raw)
    except ValueError:
        msg = f"Unknown node kind: {raw!r}"
        raise ProgramDumpError(msg) from None


def _parse_names(raw: Any, table: dict[str, Any], empty: Any, what: str) -> Any:
    flags = empty
    for name in raw or []:
        if name not in table:
            msg = f"Unknown {what}: {name!r}"
            raise ProgramDumpError(msg)
        flags |= table[name]
    return flags


class _ProgramBuilder:
    """Builds nodes first, then checked types once every node id is known."""

    def __init__(self) -> None:
        self.nodes_by_id: dict[str, Node] = {}
        self.pending_types: list[tuple[Node, dict[str, Any]]] = []

    def source_file(self, raw: dict[str, Any]) -> Node:
        if "fileName" not in raw:
            msg = "Source file without fileName"
            raise ProgramDumpError(msg)
        return self.node({"kind": SyntaxKind.SOURCE_FILE.value, **raw})

    def node(self, raw: Any) -> Node:
        if not isinstance(raw, dict):
            msg = f"Expected a node mapping, got {raw!r}"
            raise ProgramDumpError(msg)

        children: list[Node] = []
        for key in CHILD_KEYS:
            children.extend(self.node(c) for c in raw.get(key) or [])

        node = Node(
            kind=_parse_kind(raw.get("kind")),
            name=raw.get("name"),
            text=str(raw.get("text") or raw.get("name") or ""),
            flags=_parse_names(raw.get("flags"), NODE_FLAG_NAMES, NodeFlags.NONE, "node flag"),
            modifiers=_parse_names(
                raw.get("modifiers"), MODIFIER_NAMES, ModifierFlags.NONE, "modifier"
            ),
            children=children,
            type=self._type_node(raw.get("type")),
            initializer=self._initializer(raw.get("initializer")),
            heritage=[self.node(h) for h in raw.get("heritage") or []],
            module_specifier=self._module_specifier(raw.get("moduleSpecifier")),
            question_token=bool(raw.get("questionToken")),
            value=None if raw.get("value") is None else str(raw["value"]),
            doc=raw.get("doc"),
            file_name=str(raw.get("fileName") or ""),
            is_declaration_file=bool(raw.get("isDeclarationFile")),
        )

        node_id = raw.get("id")
        if node_id is not None:
            node_id = str(node_id)
            if node_id in self.nodes_by_id:
                msg = f"Duplicate node id: {node_id!r}"
                raise ProgramDumpError(msg)
            self.nodes_by_id[node_id] = node
        if raw.get("checkedType") is not None:
            self.pending_types.append((node, raw["checkedType"]))
        return node

    def _type_node(self, raw: Any) -> Node | None:
        if raw is None:
            return None
        if isinstance(raw, str):
            if raw not in KEYWORD_SHORTHANDS:
                msg = f"Unknown type shorthand: {raw!r}"
                raise ProgramDumpError(msg)
            return Node(kind=KEYWORD_SHORTHANDS[raw], text=raw)
        return self.node(raw)

    def _initializer(self, raw: Any) -> Node | None:
        if raw is None:
            return None
        if isinstance(raw, str):
            return Node(kind=SyntaxKind.EXPRESSION, text=raw)
        return self.node(raw)

    def _module_specifier(self, raw: Any) -> Node | None:
        if raw is None:
            return None
        if isinstance(raw, str):
            return Node(kind=SyntaxKind.STRING_LITERAL, text=f'"{raw}"', value=raw)
        return self.node(raw)

    def resolve_types(self) -> dict[Node, CheckedType]:
        return {node: self.checked_type(raw) for node, raw in self.pending_types}

    def checked_type(self, raw: Any) -> CheckedType:
        if not isinstance(raw, dict):
            msg = f"Expected a checked type mapping, got {raw!r}"
            raise ProgramDumpError(msg)

        flags = _parse_names(raw.get("flags"), TYPE_FLAG_NAMES, TypeFlags.NONE, "type flag")
        type_arguments = raw.get("typeArguments")
        return CheckedType(
            flags=flags,
            symbol=self._symbol(raw.get("symbol")),
            types=[self.checked_type(t) for t in raw.get("types") or []],
            type_arguments=(
                None
                if type_arguments is None
                else [self.checked_type(t) for t in type_arguments]
            ),
            value=None if raw.get("value") is None else str(raw["value"]),
        )

    def _symbol(self, raw: Any) -> Symbol | None:
        if raw is None:
            return None
        if not isinstance(raw, dict) or "name" not in raw:
            msg = f"Symbol without a name: {raw!r}"
            raise ProgramDumpError(msg)

        declaration_ids = list(raw.get("declarations") or [])
        if raw.get("declaration") is not None:
            declaration_ids.insert(0, raw["declaration"])
        declarations = [self._lookup(i) for i in declaration_ids]
        value_id = raw.get("valueDeclaration")
        return Symbol(
            name=str(raw["name"]),
            declarations=declarations,
            value_declaration=None if value_id is None else self._lookup(value_id),
        )

    def _lookup(self, node_id: Any) -> Node:
        node = self.nodes_by_id.get(str(node_id))
        if node is None:
            msg = f"Unknown declaration id: {node_id!r}"
            raise ProgramDumpError(msg)
        return node
