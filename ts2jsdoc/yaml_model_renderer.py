"""Renderer that serializes the documentation model as YAML."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from ts2jsdoc.models import TypeRef, TypeReference

if TYPE_CHECKING:
    from ts2jsdoc.models import (
        ClassDescriptor,
        EnumDescriptor,
        Example,
        MethodDescriptor,
        VariableDescriptor,
    )
    from ts2jsdoc.module_path_mapper import ModulePathMapper

YAML_MIME_HEADER = "### YamlMime:ApiModule"


def serialize_type(ref: TypeReference, path_mapper: ModulePathMapper) -> Any:
    """Convert a TypeReference to plain data, mapping every qualified name."""
    if isinstance(ref, TypeRef):
        return {
            "name": path_mapper(ref.name),
            "subTypes": [serialize_type(s, path_mapper) for s in ref.sub_types],
        }
    return path_mapper(ref)


def _dump_item(data: dict[str, Any]) -> str:
    """Dump one declaration as an item of the module's declaration list."""
    return yaml.safe_dump(
        [data], sort_keys=False, allow_unicode=True, default_flow_style=False
    )


def _with_doc(data: dict[str, Any], descriptor: Any) -> dict[str, Any]:
    node = getattr(descriptor, "node", None)
    if node is not None and node.doc:
        data["description"] = node.doc
    return data


class YamlModelRenderer:
    """Renders each module as a YAML document of declarations."""

    extension = ".yml"

    def render_variable(self, variable: VariableDescriptor, path_mapper: ModulePathMapper) -> str:
        """Render an exported variable."""
        data = {
            "kind": "constant" if variable.is_const else "member",
            "name": variable.name,
            "types": [serialize_type(t, path_mapper) for t in variable.types],
        }
        return _dump_item(_with_doc(data, variable))

    def render_member(self, descriptor: EnumDescriptor) -> str:
        """Render an enum with its static members."""
        data = {
            "kind": descriptor.kind,
            "name": descriptor.name,
            "longname": descriptor.longname,
            "memberof": descriptor.memberof,
            "scope": descriptor.scope,
            "types": list(descriptor.type_names),
            "members": [
                {
                    "name": p.name,
                    "kind": p.kind,
                    "scope": p.scope,
                    "memberof": p.memberof,
                    "types": list(p.type_names),
                }
                for p in descriptor.properties
            ],
        }
        return _dump_item(_with_doc(data, descriptor))

    def render_class_or_interface(
        self,
        clazz: ClassDescriptor,
        path_mapper: ModulePathMapper,
        examples: list[Example],
    ) -> str:
        """Render a class or interface with its members and examples."""
        data: dict[str, Any] = {
            "kind": "interface" if clazz.is_interface else "class",
            "name": clazz.name,
            "longname": f"{clazz.module_path}.{clazz.name}",
            "memberof": clazz.module_path,
        }
        if clazz.parents:
            data["parents"] = [serialize_type(p, path_mapper) for p in clazz.parents]
        data["properties"] = [
            {
                "name": p.name,
                "types": [serialize_type(t, path_mapper) for t in p.types],
                "optional": p.is_optional,
                "defaultValue": p.default_value,
            }
            for p in clazz.properties
        ]
        data["methods"] = [self._method_data(m, clazz) for m in clazz.methods]
        if examples:
            data["examples"] = [
                {"name": e.name, "lang": e.lang, "content": e.content} for e in examples
            ]
        return _dump_item(_with_doc(data, clazz))

    def render_method(
        self,
        method: MethodDescriptor,
        path_mapper: ModulePathMapper,  # noqa: ARG002
        container: ClassDescriptor | None,
    ) -> str:
        """Render a top-level function."""
        return _dump_item(self._method_data(method, container))

    def _method_data(
        self, method: MethodDescriptor, container: ClassDescriptor | None
    ) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": "function", "name": method.name}
        if container is not None:
            data["memberof"] = f"{container.module_path}.{container.name}"
        if method.tags:
            data["tags"] = list(method.tags)
        if method.is_protected:
            data["protected"] = True
        return _with_doc(data, method)

    def render_module(
        self,
        module_id: str,
        body: str,
        externals: dict[str, str],
        external_target: str | None,
    ) -> str:
        """Prefix the declarations with the module header and external aliases."""
        header: dict[str, Any] = {"module": module_id}
        if externals:
            header["externals"] = [
                {"name": name, "see": f"{external_target}#module_{target}.{name}"}
                for name, target in externals.items()
            ]
        head = yaml.safe_dump(header, sort_keys=False, allow_unicode=True)
        return f"{YAML_MIME_HEADER}\n{head}declarations:\n{body}"
