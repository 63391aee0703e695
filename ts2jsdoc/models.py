"""Descriptors making up the documentation model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ts2jsdoc.syntax import Node


@dataclass
class TypeRef:
    """A generic instantiation, e.g. ``Array<Promise<string>>``."""

    name: str
    sub_types: list[TypeReference] = field(default_factory=list)


TypeReference = Union[str, TypeRef]


@dataclass
class MethodDescriptor:
    """A method, method signature or exported function."""

    name: str
    tags: list[str] = field(default_factory=list)
    is_protected: bool = False
    node: Node | None = field(default=None, repr=False, compare=False)


@dataclass
class PropertyDescriptor:
    """A property of a class or interface."""

    name: str
    types: list[TypeReference]
    is_optional: bool = False
    default_value: object = None
    node: Node | None = field(default=None, repr=False, compare=False)


@dataclass
class ClassDescriptor:
    """An exported class or interface."""

    module_path: str  # module:<id>, rewritten once when flattened
    name: str
    methods: list[MethodDescriptor] = field(default_factory=list)
    properties: list[PropertyDescriptor] = field(default_factory=list)
    parents: list[TypeReference] = field(default_factory=list)
    is_interface: bool = False
    node: Node | None = field(default=None, repr=False, compare=False)


@dataclass
class VariableDescriptor:
    """An exported top-level variable."""

    types: list[TypeReference]
    name: str
    is_const: bool = False
    node: Node | None = field(default=None, repr=False, compare=False)


@dataclass
class EnumMemberDescriptor:
    """A static member of an exported enum."""

    name: str
    memberof: str
    type_names: list[str] = field(default_factory=lambda: ["number"])
    kind: str = "member"
    scope: str = "static"


@dataclass
class EnumDescriptor:
    """An exported enum; member values are not captured."""

    id: str
    name: str
    memberof: str
    properties: list[EnumMemberDescriptor] = field(default_factory=list)
    type_names: list[str] = field(default_factory=lambda: ["number"])
    kind: str = "enum"
    scope: str = "static"
    node: Node | None = field(default=None, repr=False, compare=False)

    @property
    def longname(self) -> str:
        """Return the qualified name, same as the id."""
        return self.id


@dataclass(frozen=True)
class Example:
    """A named snippet attached to a class."""

    name: str
    content: str
    lang: str
