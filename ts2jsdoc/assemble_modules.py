"""Logic for rendering the per-module model into output units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from ts2jsdoc.locale_sort_key import locale_sort_key
from ts2jsdoc.models import VariableDescriptor
from ts2jsdoc.module_path_mapper import ModulePathMapper

if TYPE_CHECKING:
    from ts2jsdoc.doc_renderer import DocRenderer
    from ts2jsdoc.extraction_session import ExtractionSession
    from ts2jsdoc.models import Example

T = TypeVar("T")


@dataclass(frozen=True)
class OutputUnit:
    """Rendered documentation of one module."""

    module_id: str
    file_name: str
    content: str


def module_file_name(module_id: str, extension: str) -> str:
    """Flatten a module id into a file name: my-pkg/out/util -> my-pkg-out-util."""
    return module_id.replace("/", "-") + extension


def copy_and_sort(members: list[T]) -> list[T]:
    """Return a copy sorted by name in case-insensitive locale order."""
    return sorted(members, key=lambda m: locale_sort_key(m.name))  # type: ignore[attr-defined]


def assemble_modules(
    session: ExtractionSession,
    renderer: DocRenderer,
    external_if_not_main: str | None = None,
    class_examples: dict[str, list[Example]] | None = None,
) -> list[OutputUnit]:
    """Render every module that has documentable content."""
    class_examples = class_examples or {}
    units: list[OutputUnit] = []
    for module_id, model in session.module_to_model.items():
        mapper = ModulePathMapper(
            module_id,
            session.main_module_id,
            session.path_rewrites,
            external_if_not_main,
        )

        parts: list[str] = []
        for member in copy_and_sort(model.members):
            if isinstance(member, VariableDescriptor):
                parts.append(renderer.render_variable(member, mapper))
            else:
                parts.append(renderer.render_member(member))

        for clazz in copy_and_sort(model.classes):
            examples = class_examples.get(clazz.name, [])
            parts.append(renderer.render_class_or_interface(clazz, mapper, examples))

        for function in copy_and_sort(model.functions):
            parts.append(renderer.render_method(function, mapper, None))

        body = "".join(parts)
        if not body:
            continue

        content = renderer.render_module(
            module_id, body, mapper.external_to_module, external_if_not_main
        )
        units.append(
            OutputUnit(module_id, module_file_name(module_id, renderer.extension), content)
        )
    return units
