"""Boundary between the assembled model and a documentation renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ts2jsdoc.models import (
        ClassDescriptor,
        EnumDescriptor,
        Example,
        MethodDescriptor,
        VariableDescriptor,
    )
    from ts2jsdoc.module_path_mapper import ModulePathMapper


class DocRenderer(Protocol):
    """Turns descriptors into the text of one output unit."""

    extension: str

    def render_variable(self, variable: VariableDescriptor, path_mapper: ModulePathMapper) -> str:
        """Render an exported variable."""
        ...

    def render_member(self, descriptor: EnumDescriptor) -> str:
        """Render an enum with its members."""
        ...

    def render_class_or_interface(
        self,
        clazz: ClassDescriptor,
        path_mapper: ModulePathMapper,
        examples: list[Example],
    ) -> str:
        """Render a class or interface with its examples."""
        ...

    def render_method(
        self,
        method: MethodDescriptor,
        path_mapper: ModulePathMapper,
        container: ClassDescriptor | None,
    ) -> str:
        """Render a top-level function, or a method of ``container``."""
        ...

    def render_module(
        self,
        module_id: str,
        body: str,
        externals: dict[str, str],
        external_target: str | None,
    ) -> str:
        """Wrap a rendered body with the module header and external aliases."""
        ...
