"""Logic for relocating symbols re-exported by the main module."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, TypeVar

from ts2jsdoc.models import ClassDescriptor
from ts2jsdoc.source_unit_model import SourceUnitModel

if TYPE_CHECKING:
    from ts2jsdoc.extraction_session import ExtractionSession

logger = logging.getLogger(__name__)


class _Named(Protocol):
    name: str


T = TypeVar("T", bound=_Named)


def move_member(source: list[T], target: list[T], name: str) -> T | None:
    """Move the first descriptor called ``name`` from ``source`` to ``target``."""
    for index, member in enumerate(source):
        if member.name == name:
            del source[index]
            target.append(member)
            return member
    return None


def flatten_exports(session: ExtractionSession) -> None:
    """Move re-exported descriptors from their origin modules into main.

    Classes, then functions, then members are searched; the first match
    wins. Moved classes get the main module path and a rewrite entry so
    references resolved before flattening still point at them. The mapping is
    consumed, so running this twice is a no-op.
    """
    main_id = session.main_module_id
    if main_id is None or not session.main_mappings:
        session.main_mappings.clear()
        return

    main_model = session.module_to_model.setdefault(main_id, SourceUnitModel())
    for origin_id, names in session.main_mappings.items():
        if origin_id == main_id:
            continue
        origin = session.module_to_model.get(origin_id)
        if origin is None:
            logger.warning("Re-exported module %s has no documentable content", origin_id)
            continue

        for name in names:
            clazz = move_member(origin.classes, main_model.classes, name)
            if clazz is not None:
                _relocate_class(clazz, session, origin_id, main_id)
                continue
            if move_member(origin.functions, main_model.functions, name) is None:
                move_member(origin.members, main_model.members, name)

    session.main_mappings.clear()


def _relocate_class(
    clazz: ClassDescriptor, session: ExtractionSession, origin_id: str, main_id: str
) -> None:
    clazz.module_path = f"module:{main_id}"
    session.path_rewrites[f"module:{origin_id}.{clazz.name}"] = f"module:{main_id}.{clazz.name}"
