"""Tests for extracting descriptors from source unit declarations."""

import logging
from typing import Any

import pytest

from ts2jsdoc.declaration_extractor import DeclarationExtractor, UnitExtraction
from ts2jsdoc.errors import TypeResolutionError
from ts2jsdoc.load_typed_program import build_typed_program
from ts2jsdoc.models import (
    ClassDescriptor,
    EnumDescriptor,
    MethodDescriptor,
    TypeRef,
    VariableDescriptor,
)
from ts2jsdoc.module_path_resolver import ModulePathResolver
from ts2jsdoc.type_reference_resolver import TypeReferenceResolver

LIB_FILE = {
    "fileName": "/lib/lib.es5.d.ts",
    "isDeclarationFile": True,
    "statements": [{"kind": "InterfaceDeclaration", "id": "Array", "name": "Array"}],
}


def extract(
    statements: list[dict[str, Any]],
    file_name: str = "/work/src/shapes.ts",
    extra_files: tuple[dict[str, Any], ...] = (),
) -> UnitExtraction | None:
    """Build a program whose first unit holds ``statements`` and extract it."""
    program = build_typed_program(
        {
            "commonSourceDirectory": "/work/src",
            "sourceFiles": [
                {"fileName": file_name, "statements": statements},
                *extra_files,
            ],
        }
    )
    module_paths = ModulePathResolver("my-pkg", "out", "/work/src")
    extractor = DeclarationExtractor(
        program, module_paths, TypeReferenceResolver(program, module_paths)
    )
    return extractor.extract(program.source_units()[0])


def extract_class(members: list[dict[str, Any]], kind: str = "ClassDeclaration") -> ClassDescriptor:
    """Extract a single exported class or interface called Shape."""
    extraction = extract(
        [{"kind": kind, "name": "Shape", "modifiers": ["export"], "members": members}]
    )
    assert extraction is not None
    return extraction.model.classes[0]


def test_empty_unit() -> None:
    """Verify a unit without statements yields nothing."""
    assert extract([]) is None


def test_only_exported_classes() -> None:
    """Verify non-exported declarations are ignored."""
    extraction = extract(
        [
            {"kind": "ClassDeclaration", "name": "Shape", "modifiers": ["export"]},
            {"kind": "ClassDeclaration", "name": "Hidden"},
            {"kind": "FunctionDeclaration", "name": "helper"},
        ]
    )
    assert extraction is not None
    assert extraction.module_info.id == "my-pkg/out/shapes"
    assert [c.name for c in extraction.model.classes] == ["Shape"]
    assert extraction.model.classes[0].module_path == "module:my-pkg/out/shapes"
    assert extraction.model.functions == []


def test_private_members_skipped_and_protected_tagged() -> None:
    """Verify private members are dropped and protected methods tagged."""
    clazz = extract_class(
        [
            {"kind": "PropertyDeclaration", "name": "secret", "modifiers": ["private"],
             "type": "number"},
            {"kind": "MethodDeclaration", "name": "draw"},
            {"kind": "MethodDeclaration", "name": "hide", "modifiers": ["private"]},
            {"kind": "MethodDeclaration", "name": "layout", "modifiers": ["protected"]},
        ]
    )
    assert clazz.properties == []
    assert clazz.methods == [
        MethodDescriptor("draw"),
        MethodDescriptor("layout", tags=["@protected"], is_protected=True),
    ]


def test_nullable_property_is_optional() -> None:
    """Verify ``string | null`` keeps both types and makes the property optional."""
    clazz = extract_class(
        [
            {
                "kind": "PropertyDeclaration",
                "name": "label",
                "type": {"kind": "UnionType", "types": [{"kind": "StringKeyword"},
                                                        {"kind": "NullKeyword"}]},
            }
        ]
    )
    prop = clazz.properties[0]
    assert prop.types == ["string", "null"]
    assert prop.is_optional
    assert prop.default_value is None


def test_question_token_is_optional() -> None:
    """Verify ``name?: T`` is optional."""
    clazz = extract_class(
        [{"kind": "PropertySignature", "name": "size", "type": "number", "questionToken": True}],
        kind="InterfaceDeclaration",
    )
    assert clazz.is_interface
    assert clazz.properties[0].is_optional


def test_readonly_optional_only_in_classes() -> None:
    """Verify read-only class properties are optional but interface ones are not."""
    member = {"kind": "PropertyDeclaration", "name": "id", "modifiers": ["readonly"],
              "type": "number"}
    assert extract_class([member]).properties[0].is_optional

    signature = {**member, "kind": "PropertySignature"}
    assert not extract_class([signature], kind="InterfaceDeclaration").properties[0].is_optional


def test_default_values(caplog: pytest.LogCaptureFixture) -> None:
    """Verify literal initializers are evaluated and others keep their text."""
    caplog.set_level(logging.INFO)
    clazz = extract_class(
        [
            {"kind": "PropertyDeclaration", "name": "count", "type": "number",
             "initializer": "10"},
            {"kind": "PropertyDeclaration", "name": "title", "type": "string",
             "initializer": "'abc'"},
            {"kind": "PropertyDeclaration", "name": "sizes", "type": "any",
             "initializer": "[1, 2]"},
            {"kind": "PropertyDeclaration", "name": "enabled", "type": "boolean",
             "initializer": "false"},
            {"kind": "PropertyDeclaration", "name": "computed", "type": "number",
             "initializer": {"kind": "CallExpression", "text": "compute()"}},
            {"kind": "PropertyDeclaration", "name": "alias", "type": "string",
             "initializer": "someConstant"},
        ]
    )
    defaults = {p.name: p.default_value for p in clazz.properties}
    assert defaults == {
        "count": 10,
        "title": "abc",
        "sizes": [1, 2],
        "enabled": False,
        "computed": "compute()",
        "alias": "someConstant",
    }
    assert all(p.is_optional for p in clazz.properties)
    assert "alias" in caplog.text


def test_malformed_initializers_keep_source_text(caplog: pytest.LogCaptureFixture) -> None:
    """Verify initializers the evaluator chokes on fall back to their text."""
    caplog.set_level(logging.INFO)
    nested = "[" * 3000 + "]" * 3000
    huge = "1" * 5000
    clazz = extract_class(
        [
            {"kind": "PropertyDeclaration", "name": "mask", "type": "number",
             "initializer": "0x_"},
            {"kind": "PropertyDeclaration", "name": "big", "type": "number",
             "initializer": huge},
            {"kind": "PropertyDeclaration", "name": "deep", "type": "any",
             "initializer": nested},
        ]
    )
    defaults = {p.name: p.default_value for p in clazz.properties}
    assert defaults == {"mask": "0x_", "big": huge, "deep": nested}
    assert "deep" in caplog.text


def test_property_type_from_checker() -> None:
    """Verify an unannotated property falls back to its checked type."""
    extraction = extract(
        [
            {
                "kind": "ClassDeclaration",
                "name": "Shape",
                "modifiers": ["export"],
                "members": [
                    {
                        "kind": "PropertyDeclaration",
                        "name": "items",
                        "checkedType": {
                            "flags": ["object"],
                            "symbol": {"name": "Array", "declaration": "Array"},
                            "typeArguments": [{"flags": ["string"]}],
                        },
                    }
                ],
            }
        ],
        extra_files=(LIB_FILE,),
    )
    assert extraction is not None
    prop = extraction.model.classes[0].properties[0]
    assert prop.types == [TypeRef(name="Array", sub_types=["string"])]
    assert not prop.is_optional


def test_unresolvable_property_type_is_fatal() -> None:
    """Verify a property whose type cannot be named aborts extraction."""
    with pytest.raises(TypeResolutionError, match="broken: Missing"):
        extract_class(
            [
                {
                    "kind": "PropertyDeclaration",
                    "name": "broken",
                    "text": "broken: Missing",
                    "type": {"kind": "TypeReference", "text": "Missing"},
                }
            ]
        )


def test_last_heritage_type_wins() -> None:
    """Verify only the last resolvable heritage type is kept as parent."""

    def heritage(name: str) -> dict[str, Any]:
        return {
            "kind": "ExpressionWithTypeArguments",
            "text": name,
            "checkedType": {"flags": ["object"], "symbol": {"name": name, "declaration": name}},
        }

    extraction = extract(
        [
            {"kind": "ClassDeclaration", "id": "Base", "name": "Base"},
            {"kind": "InterfaceDeclaration", "id": "Mixin", "name": "Mixin"},
            {
                "kind": "ClassDeclaration",
                "name": "Shape",
                "modifiers": ["export"],
                "heritage": [heritage("Base"), heritage("Mixin")],
            },
        ]
    )
    assert extraction is not None
    assert extraction.model.classes[0].parents == ["module:my-pkg/out/shapes.Mixin"]


def test_methods_are_sorted() -> None:
    """Verify methods come out sorted with accessors paired."""
    clazz = extract_class(
        [{"kind": "MethodSignature", "name": n} for n in ["setFoo", "bar", "getFoo", "Baz"]],
        kind="InterfaceDeclaration",
    )
    assert [m.name for m in clazz.methods] == ["bar", "Baz", "setFoo", "getFoo"]


def test_exported_function() -> None:
    """Verify exported functions become untagged method descriptors."""
    extraction = extract(
        [{"kind": "FunctionDeclaration", "name": "render", "modifiers": ["export"]}]
    )
    assert extraction is not None
    assert extraction.model.functions == [MethodDescriptor("render")]


def test_variables() -> None:
    """Verify constness and the single-typed-declarator rule."""
    extraction = extract(
        [
            {
                "kind": "VariableStatement",
                "modifiers": ["export"],
                "flags": ["const"],
                "declarations": [
                    {"kind": "VariableDeclaration", "name": "VERSION", "type": "string"}
                ],
            },
            {
                "kind": "VariableStatement",
                "modifiers": ["export"],
                "flags": ["let"],
                "declarations": [
                    {"kind": "VariableDeclaration", "name": "counter", "type": "number"}
                ],
            },
            {
                "kind": "VariableStatement",
                "modifiers": ["export"],
                "declarations": [
                    {"kind": "VariableDeclaration", "name": "a", "type": "number"},
                    {"kind": "VariableDeclaration", "name": "b", "type": "number"},
                ],
            },
            {
                "kind": "VariableStatement",
                "modifiers": ["export"],
                "declarations": [{"kind": "VariableDeclaration", "name": "untyped"}],
            },
            {
                "kind": "VariableStatement",
                "declarations": [
                    {"kind": "VariableDeclaration", "name": "local", "type": "number"}
                ],
            },
        ]
    )
    assert extraction is not None
    assert extraction.model.members == [
        VariableDescriptor(types=["string"], name="VERSION", is_const=True),
        VariableDescriptor(types=["number"], name="counter", is_const=False),
    ]


def test_variable_typed_by_value_symbol() -> None:
    """Verify a variable whose type has a value declaration uses the symbol path."""
    extraction = extract(
        [
            {"kind": "ClassDeclaration", "id": "Shape", "name": "Shape", "modifiers": ["export"]},
            {
                "kind": "VariableStatement",
                "modifiers": ["export"],
                "flags": ["const"],
                "declarations": [
                    {
                        "kind": "VariableDeclaration",
                        "name": "DEFAULT_SHAPE",
                        "type": {"kind": "TypeReference", "text": "Shape"},
                        "checkedType": {
                            "flags": ["object"],
                            "symbol": {
                                "name": "Shape",
                                "declaration": "Shape",
                                "valueDeclaration": "Shape",
                            },
                        },
                    }
                ],
            },
        ]
    )
    assert extraction is not None
    variable = extraction.model.members[0]
    assert isinstance(variable, VariableDescriptor)
    assert variable.types == ["module:my-pkg/out/shapes.Shape"]


def test_enum() -> None:
    """Verify enums are described with static number members."""
    extraction = extract(
        [
            {
                "kind": "EnumDeclaration",
                "name": "Color",
                "modifiers": ["export"],
                "members": [
                    {"kind": "EnumMember", "name": "Red", "initializer": "1"},
                    {"kind": "EnumMember", "name": "Green"},
                ],
            }
        ]
    )
    assert extraction is not None
    enum = extraction.model.members[0]
    assert isinstance(enum, EnumDescriptor)
    assert enum.id == "module:my-pkg/out/shapes.Color"
    assert enum.longname == enum.id
    assert enum.memberof == "module:my-pkg/out/shapes"
    assert enum.kind == "enum"
    assert enum.type_names == ["number"]
    assert [p.name for p in enum.properties] == ["Red", "Green"]
    assert {p.memberof for p in enum.properties} == {enum.id}
    assert {p.scope for p in enum.properties} == {"static"}


SHAPES_FILE = {
    "fileName": "/work/src/shapes.ts",
    "statements": [{"kind": "ClassDeclaration", "name": "Shape", "modifiers": ["export"]}],
}


def reexport(*elements: dict[str, Any], specifier: Any = "./shapes") -> dict[str, Any]:
    """Create ``export { ... } from specifier``."""
    return {
        "kind": "ExportDeclaration",
        "text": f"export {{ ... }} from {specifier!r}",
        "moduleSpecifier": specifier,
        "elements": list(elements),
    }


def test_reexports_recorded_for_main() -> None:
    """Verify the main unit records which names it re-exports from where."""
    extraction = extract(
        [
            reexport(
                {"kind": "ExportSpecifier", "name": "Shape"},
                {"kind": "ExportSpecifier", "name": "Color"},
            )
        ],
        file_name="/work/src/main.ts",
        extra_files=(SHAPES_FILE,),
    )
    assert extraction is not None
    assert extraction.module_info.is_main
    assert extraction.module_info.id == "my-pkg"
    assert extraction.reexports == {"my-pkg/out/shapes": ["Shape", "Color"]}
    assert extraction.model.is_empty()


def test_reexports_ignored_outside_main() -> None:
    """Verify export declarations of other units are not recorded."""
    extraction = extract(
        [reexport({"kind": "ExportSpecifier", "name": "Shape"})],
        file_name="/work/src/other.ts",
        extra_files=(SHAPES_FILE,),
    )
    assert extraction is not None
    assert extraction.reexports == {}


def test_unsupported_reexports_warn(caplog: pytest.LogCaptureFixture) -> None:
    """Verify unsupported export forms are logged and skipped."""
    caplog.set_level(logging.INFO)
    extraction = extract(
        [
            reexport(),
            reexport(
                {"kind": "ExportSpecifier", "name": "Shape"},
                specifier={"kind": "Identifier", "text": "shapesPath"},
            ),
            reexport({"kind": "ExportSpecifier", "name": "Thing"}, specifier="./missing"),
            reexport({"kind": "ExportSpecifier", "name": "EventEmitter"}, specifier="events"),
            reexport(
                {"kind": "ExportSpecifier", "name": "Shape"},
                {"kind": "NamespaceExport", "text": "* as shapes"},
            ),
        ],
        file_name="/work/src/main.ts",
        extra_files=(SHAPES_FILE,),
    )
    assert extraction is not None
    assert extraction.reexports == {"my-pkg/out/shapes": ["Shape"]}
    assert "Unsupported export declaration" in caplog.text
    assert "Unsupported module specifier" in caplog.text
    assert "/work/src/missing.ts" in caplog.text
    assert "events" in caplog.text
    assert "* as shapes" in caplog.text
